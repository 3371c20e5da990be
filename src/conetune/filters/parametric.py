"""Parametric hue/saturation/luminance correction ("custom adaptive" filter).

Hue regions are three 120-degree buckets centered on the primaries:
red covers [300, 360) and [0, 60), green [60, 180), blue [180, 300).
Each color is rotated by the shift of its region. Saturation and
lightness boosts apply only to colors in the deficient axis's region.
Achromatic colors pass through untouched.
"""

from __future__ import annotations

import logging
from typing import Callable, Mapping

from conetune.color.space import hex_to_rgb, hsl_to_rgb, rgb_to_hex, rgb_to_hsl
from conetune.core.config import DEFAULT_PROFILER, ProfilerConfig
from conetune.core.models import (
    AXIS_TO_FILTER_AXIS,
    FILTER_AXES,
    DeficiencyProfile,
    FilterParameters,
)

logger = logging.getLogger(__name__)

MAX_HUE_ANGLE = 25.0
HUE_ANGLE_PER_POINT = 0.6
MAX_SATURATION_BOOST = 0.8
SATURATION_PER_POINT = 0.02
MAX_LUMINANCE_GAIN = 0.25
LUMINANCE_PER_POINT = 0.006
ACHROMATIC_SATURATION = 0.01

# Counter-shift applied to the other primaries, as a fraction of the angle
_COUNTER_SHIFT = {
    "red": {"red": 1.0, "green": -0.6, "blue": 0.0},
    "green": {"red": -0.6, "green": 1.0, "blue": 0.0},
    "blue": {"red": -0.3, "green": -0.3, "blue": 1.0},
}


def correction_strength(
    severity: float, config: ProfilerConfig = DEFAULT_PROFILER,
) -> tuple[float, float, float]:
    """Return (hue angle, saturation boost, luminance gain) for a severity.

    Severity is rescaled to deficiency points (0-40) before the
    per-point rates and caps are applied.
    """
    points = max(0.0, min(1.0, severity)) * config.deficiency_scale
    return (
        min(MAX_HUE_ANGLE, points * HUE_ANGLE_PER_POINT),
        min(MAX_SATURATION_BOOST, points * SATURATION_PER_POINT),
        min(MAX_LUMINANCE_GAIN, points * LUMINANCE_PER_POINT),
    )


def build_filter_parameters(
    profile: DeficiencyProfile,
    thresholds: Mapping[str, float] | None = None,
    config: ProfilerConfig = DEFAULT_PROFILER,
) -> FilterParameters:
    """Turn a DeficiencyProfile into parametric filter settings.

    Args:
        profile: Classified deficiency.
        thresholds: Optional source thresholds keyed by "red"/"green"/"blue"
            (or L/M/S), kept as provenance.
        config: Profiler constants (for the deficiency scale).

    Raises:
        KeyError: If the profile's axis is unknown.
    """
    axis = AXIS_TO_FILTER_AXIS[profile.axis]
    angle, sat_boost, lum_gain = correction_strength(profile.severity, config)
    shifts = _COUNTER_SHIFT[axis]

    provenance: dict[str, float] = {}
    if thresholds:
        for key, color_key in zip(("L", "M", "S"), FILTER_AXES):
            if color_key in thresholds:
                provenance[color_key] = float(thresholds[color_key])
            elif key in thresholds:
                provenance[color_key] = float(thresholds[key])

    return FilterParameters(
        axis=axis,
        severity=profile.severity,
        # + 0.0 folds -0.0 into 0.0
        hue_shift={c: round(angle * shifts[c], 2) + 0.0 for c in FILTER_AXES},
        saturation_boost={axis: sat_boost},
        luminance_gain={axis: lum_gain},
        thresholds=provenance,
    )


def hue_region(hue: float) -> str:
    """Bucket a hue (degrees) into "red", "green" or "blue"."""
    h = hue % 360.0
    if h >= 300.0 or h < 60.0:
        return "red"
    if h < 180.0:
        return "green"
    return "blue"


def apply_filter(color: str, params: FilterParameters | None) -> str:
    """Apply parametric correction to a hex color.

    Unknown axes and missing parameters fail open: the input is returned
    unchanged. Malformed hex decodes leniently (see ``hex_to_rgb``).
    """
    if params is None or params.axis not in FILTER_AXES:
        logger.debug("No usable filter parameters, passing %s through", color)
        return color

    h, s, l = rgb_to_hsl(*hex_to_rgb(color))
    if s < ACHROMATIC_SATURATION:
        return color

    region = hue_region(h)
    new_h = (h + params.hue_shift.get(region, 0.0)) % 360.0
    new_s, new_l = s, l
    if region == params.axis:
        new_s = min(1.0, s * (1.0 + params.saturation_boost.get(region, 0.0)))
        new_l = min(1.0, l * (1.0 + params.luminance_gain.get(region, 0.0)))

    return rgb_to_hex(*hsl_to_rgb(new_h, new_s, new_l))


def make_filter(params: FilterParameters | None) -> Callable[[str], str]:
    """Bind parameters into an ``apply(hex) -> hex`` callable for renderers."""

    def apply(color: str) -> str:
        return apply_filter(color, params)

    return apply
