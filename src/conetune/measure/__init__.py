"""ConeTune Measure — threshold estimation and per-channel metrics."""

from conetune.measure.metrics import (
    classify_category,
    compute_channel_metrics,
    compute_cone_metrics,
    log_sensitivity,
    metrics_from_threshold,
    score_from_log_sensitivity,
)
from conetune.measure.staircase import StaircaseProcedure, next_contrast, stimulus_color
from conetune.measure.thresholding import (
    ReversalPoint,
    ThresholdError,
    ThresholdResult,
    find_reversals,
    threshold_from_fixed_levels,
    threshold_from_reversals,
)

__all__ = [
    "ReversalPoint",
    "StaircaseProcedure",
    "ThresholdError",
    "ThresholdResult",
    "classify_category",
    "compute_channel_metrics",
    "compute_cone_metrics",
    "find_reversals",
    "log_sensitivity",
    "metrics_from_threshold",
    "next_contrast",
    "score_from_log_sensitivity",
    "stimulus_color",
    "threshold_from_fixed_levels",
    "threshold_from_reversals",
]
