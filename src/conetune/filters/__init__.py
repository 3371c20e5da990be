"""ConeTune Filters — parametric and preset color correction."""

from conetune.filters.engine import FilterEngine
from conetune.filters.parametric import (
    apply_filter,
    build_filter_parameters,
    correction_strength,
    hue_region,
    make_filter,
)
from conetune.filters.presets import (
    CUSTOM,
    FILTER_KINDS,
    PRESET_MATRICES,
    SUPPORTED_PRESETS,
    apply_preset,
    apply_preset_array,
    filter_display_name,
    preset_matrix,
    recommended_preset,
)

__all__ = [
    "CUSTOM",
    "FILTER_KINDS",
    "FilterEngine",
    "PRESET_MATRICES",
    "SUPPORTED_PRESETS",
    "apply_filter",
    "apply_preset",
    "apply_preset_array",
    "build_filter_parameters",
    "correction_strength",
    "filter_display_name",
    "hue_region",
    "make_filter",
    "preset_matrix",
    "recommended_preset",
]
