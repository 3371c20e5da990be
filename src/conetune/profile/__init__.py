"""ConeTune Profile — deficiency axis and severity classification."""

from conetune.profile.profiler import (
    AxisComparison,
    classify_deficiency,
    classify_scores,
    compare_axes,
    deficiency_score_from_outcomes,
    deficiency_value,
    detect_type,
    normalize_axis,
)

__all__ = [
    "AxisComparison",
    "classify_deficiency",
    "classify_scores",
    "compare_axes",
    "deficiency_score_from_outcomes",
    "deficiency_value",
    "detect_type",
    "normalize_axis",
]
