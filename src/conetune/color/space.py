"""Hex/RGB/HSL conversions plus WCAG relative luminance and contrast.

Two hex parsers are provided. ``parse_hex`` is strict and raises
FormatError. ``hex_to_rgb`` is the lenient form used on render paths:
malformed input is logged and decoded as black ``(0, 0, 0)`` so a single
bad color cannot break a frame.
"""

from __future__ import annotations

import logging
import re

from conetune.core.exceptions import FormatError
from conetune.core.models import Color

logger = logging.getLogger(__name__)

RGB = tuple[int, int, int]

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

# WCAG 2.x sRGB linearization and luminance weights
_LINEAR_THRESHOLD = 0.03928
_LUMA_WEIGHTS = (0.2126, 0.7152, 0.0722)
_CONTRAST_OFFSET = 0.05


def parse_hex(value: str) -> RGB:
    """Parse a 3- or 6-digit hex color, with or without ``#``.

    Raises:
        FormatError: If the value is not a valid hex color.
    """
    if not isinstance(value, str):
        raise FormatError(value)
    match = _HEX_RE.match(value.strip())
    if match is None:
        raise FormatError(value)
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def hex_to_rgb(value: str) -> RGB:
    """Lenient hex parse: malformed input decodes to black instead of raising."""
    try:
        return parse_hex(value)
    except FormatError:
        logger.warning("Malformed hex color %r, substituting #000000", value)
        return (0, 0, 0)


def is_valid_hex(value: str) -> bool:
    return isinstance(value, str) and _HEX_RE.match(value.strip()) is not None


def _clamp255(v: float) -> int:
    return int(max(0, min(255, round(v))))


def rgb_to_hex(r: float, g: float, b: float) -> str:
    """Round and clamp each channel, then encode as lowercase ``#rrggbb``."""
    return f"#{_clamp255(r):02x}{_clamp255(g):02x}{_clamp255(b):02x}"


def normalize_hex(value: str) -> str:
    """Canonical form of a hex color (strict)."""
    return rgb_to_hex(*parse_hex(value))


def rgb_to_hsl(r: float, g: float, b: float) -> tuple[float, float, float]:
    """Convert 0-255 RGB to HSL with h in [0, 360) and s, l in [0, 1].

    Achromatic input (r == g == b) gives s == 0 and h == 0.
    """
    r_f, g_f, b_f = r / 255.0, g / 255.0, b / 255.0
    cmax = max(r_f, g_f, b_f)
    cmin = min(r_f, g_f, b_f)
    delta = cmax - cmin
    lightness = (cmax + cmin) / 2.0

    if delta == 0:
        return (0.0, 0.0, lightness)

    saturation = delta / (1.0 - abs(2.0 * lightness - 1.0))
    if cmax == r_f:
        hue = 60.0 * (((g_f - b_f) / delta) % 6.0)
    elif cmax == g_f:
        hue = 60.0 * ((b_f - r_f) / delta + 2.0)
    else:
        hue = 60.0 * ((r_f - g_f) / delta + 4.0)
    return (hue % 360.0, min(1.0, saturation), lightness)


def hsl_to_rgb(h: float, s: float, l: float) -> tuple[float, float, float]:
    """Convert HSL back to unrounded 0-255 RGB floats.

    Hue wraps modulo 360; s and l are clamped to [0, 1].
    """
    h = h % 360.0
    s = max(0.0, min(1.0, s))
    l = max(0.0, min(1.0, l))

    chroma = (1.0 - abs(2.0 * l - 1.0)) * s
    x = chroma * (1.0 - abs((h / 60.0) % 2.0 - 1.0))
    m = l - chroma / 2.0

    if h < 60:
        r_p, g_p, b_p = chroma, x, 0.0
    elif h < 120:
        r_p, g_p, b_p = x, chroma, 0.0
    elif h < 180:
        r_p, g_p, b_p = 0.0, chroma, x
    elif h < 240:
        r_p, g_p, b_p = 0.0, x, chroma
    elif h < 300:
        r_p, g_p, b_p = x, 0.0, chroma
    else:
        r_p, g_p, b_p = chroma, 0.0, x

    return (
        max(0.0, min(255.0, (r_p + m) * 255.0)),
        max(0.0, min(255.0, (g_p + m) * 255.0)),
        max(0.0, min(255.0, (b_p + m) * 255.0)),
    )


def hex_to_hsl(value: str) -> tuple[float, float, float]:
    return rgb_to_hsl(*hex_to_rgb(value))


def hsl_to_hex(h: float, s: float, l: float) -> str:
    return rgb_to_hex(*hsl_to_rgb(h, s, l))


def _srgb_to_linear(channel: float) -> float:
    c = channel / 255.0
    if c <= _LINEAR_THRESHOLD:
        return c / 12.92
    return ((c + 0.055) / 1.055) ** 2.4


def relative_luminance(rgb: tuple[float, float, float]) -> float:
    """WCAG relative luminance of a 0-255 RGB triple, in [0, 1]."""
    r, g, b = rgb
    wr, wg, wb = _LUMA_WEIGHTS
    return wr * _srgb_to_linear(r) + wg * _srgb_to_linear(g) + wb * _srgb_to_linear(b)


def contrast_ratio(color_a: str, color_b: str) -> float:
    """WCAG contrast ratio between two hex colors, symmetric and >= 1."""
    lum_a = relative_luminance(hex_to_rgb(color_a))
    lum_b = relative_luminance(hex_to_rgb(color_b))
    high, low = (lum_a, lum_b) if lum_a >= lum_b else (lum_b, lum_a)
    return (high + _CONTRAST_OFFSET) / (low + _CONTRAST_OFFSET)


def color_from_hex(value: str) -> Color:
    """Strictly parse a hex string into a Color."""
    return Color(*parse_hex(value))
