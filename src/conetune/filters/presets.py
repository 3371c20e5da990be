"""OS-style preset filters: fixed 3x3 linear RGB matrices per preset.

Matrices are the classic Coblis/Colorjack simulation matrices. Intensity
scales a preset continuously: the effective matrix is
``I + intensity * (M - I)``, which equals blending the original and the
fully filtered color per channel. Unknown presets fail open.
"""

from __future__ import annotations

import logging

import numpy as np

from conetune.color.space import hex_to_rgb, is_valid_hex, rgb_to_hex

logger = logging.getLogger(__name__)

PRESET_MATRICES: dict[str, np.ndarray] = {
    "grayscale": np.array([
        [0.299, 0.587, 0.114],
        [0.299, 0.587, 0.114],
        [0.299, 0.587, 0.114],
    ]),
    "protanopia": np.array([
        [0.567, 0.433, 0.0],
        [0.558, 0.442, 0.0],
        [0.0, 0.242, 0.758],
    ]),
    "deuteranopia": np.array([
        [0.625, 0.375, 0.0],
        [0.700, 0.300, 0.0],
        [0.0, 0.300, 0.700],
    ]),
    "tritanopia": np.array([
        [0.950, 0.050, 0.0],
        [0.0, 0.433, 0.567],
        [0.0, 0.475, 0.525],
    ]),
}

SUPPORTED_PRESETS = frozenset(PRESET_MATRICES)
CUSTOM = "custom"
FILTER_KINDS = frozenset(SUPPORTED_PRESETS | {CUSTOM})

_RECOMMENDED = {
    "protan": "protanopia",
    "deutan": "deuteranopia",
    "tritan": "tritanopia",
}

_DISPLAY_NAMES = {
    CUSTOM: "Custom Adaptive",
    "protanopia": "Protanopia Preset",
    "deuteranopia": "Deuteranopia Preset",
    "tritanopia": "Tritanopia Preset",
    "grayscale": "Grayscale Preset",
}


def preset_matrix(preset: str, intensity: float = 1.0) -> np.ndarray | None:
    """Effective matrix for a preset at the given intensity, or None if unknown."""
    matrix = PRESET_MATRICES.get(preset)
    if matrix is None:
        return None
    t = float(np.clip(intensity, 0.0, 1.0))
    identity = np.eye(3)
    return identity + t * (matrix - identity)


def apply_preset_array(rgb: np.ndarray, preset: str, intensity: float = 1.0) -> np.ndarray:
    """Apply a preset to an (N, 3) array of 0-255 colors.

    Returns a uint8 array of the same shape. Unknown presets return the
    input colors unchanged (rounded and clipped to uint8).
    """
    rgb = np.asarray(rgb)
    if rgb.ndim != 2 or rgb.shape[1] != 3:
        raise ValueError(f"Expected an (N, 3) array, got shape {rgb.shape}")
    matrix = preset_matrix(preset, intensity)
    if matrix is None:
        logger.debug("Unknown preset %r, passing colors through", preset)
        out = rgb.astype(np.float64)
    else:
        out = rgb.astype(np.float64) @ matrix.T
    return np.clip(np.rint(out), 0, 255).astype(np.uint8)


def apply_preset(color: str, preset: str, intensity: float = 1.0) -> str:
    """Apply a preset filter to a hex color.

    Unknown presets and unparseable colors return the input unchanged.
    """
    matrix = preset_matrix(preset, intensity)
    if matrix is None:
        logger.debug("Unknown preset %r, passing %s through", preset, color)
        return color
    if not is_valid_hex(color):
        logger.warning("Malformed hex color %r, passing through", color)
        return color
    out = matrix @ np.asarray(hex_to_rgb(color), dtype=np.float64)
    return rgb_to_hex(*np.clip(out, 0.0, 255.0))


def recommended_preset(axis: str | None) -> str:
    """Preset matching a detected axis; grayscale when there is none."""
    if axis is None:
        return "grayscale"
    return _RECOMMENDED.get(axis.lower(), "grayscale")


def filter_display_name(kind: str) -> str:
    return _DISPLAY_NAMES.get(kind, kind)
