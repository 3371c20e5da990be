"""ConeTune Color — color space conversions and WCAG contrast."""

from conetune.color.space import (
    color_from_hex,
    contrast_ratio,
    hex_to_hsl,
    hex_to_rgb,
    hsl_to_hex,
    hsl_to_rgb,
    is_valid_hex,
    normalize_hex,
    parse_hex,
    relative_luminance,
    rgb_to_hex,
    rgb_to_hsl,
)

__all__ = [
    "color_from_hex",
    "contrast_ratio",
    "hex_to_hsl",
    "hex_to_rgb",
    "hsl_to_hex",
    "hsl_to_rgb",
    "is_valid_hex",
    "normalize_hex",
    "parse_hex",
    "relative_luminance",
    "rgb_to_hex",
    "rgb_to_hsl",
]
