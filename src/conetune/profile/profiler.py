"""DeficiencyProfiler — classify a deficiency axis and severity.

Deficiency values live on a 0-40 scale: for measured thresholds the value
is ``max(0, threshold - baseline)`` with a 7% normal-vision baseline.
A self-reported axis always wins over measurement, but severity still
comes from that axis's own deficiency value. Other axes whose value lies
within the closeness threshold of the primary add a small weighted
contribution to severity.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Mapping

from conetune.core.config import DEFAULT_PROFILER, ProfilerConfig
from conetune.core.models import (
    AXES,
    CHANNEL_TO_AXIS,
    CONE_CHANNELS,
    ChannelMetrics,
    DeficiencyProfile,
)

logger = logging.getLogger(__name__)

NORMAL = "normal"

# Self-report vocabulary accepted alongside the axis names themselves.
_DECLARED_ALIASES = {
    "protan": "protan",
    "protanopia": "protan",
    "red": "protan",
    "l": "protan",
    "deutan": "deutan",
    "deuteranopia": "deutan",
    "green": "deutan",
    "m": "deutan",
    "tritan": "tritan",
    "tritanopia": "tritan",
    "blue": "tritan",
    "s": "tritan",
}
_NO_DECLARATION = frozenset({"", "none", "unknown", "normal"})

# Misses in a short miss/correct block -> deficiency value (0-40)
_MISS_SCORES = {0: 0.0, 1: 4.0, 2: 10.0, 3: 18.0, 4: 26.0, 5: 35.0}
_MAX_MISS_SCORE = 40.0


@dataclass(frozen=True)
class AxisComparison:
    """Self-reported axis versus the axis detected by measurement.

    Attributes:
        declared: Normalized declared axis, or None.
        detected: Detected axis, or "normal".
        mismatch: True when both are known axes and they differ.
    """

    declared: str | None
    detected: str

    @property
    def mismatch(self) -> bool:
        return (
            self.declared is not None
            and self.detected in AXES
            and self.declared != self.detected
        )


def normalize_axis(value: str | None) -> str | None:
    """Map a declared axis or self-report label to an axis name.

    "none", "unknown" and None mean no declaration. Unrecognized labels
    are logged and treated as no declaration.
    """
    if value is None:
        return None
    key = str(value).strip().lower()
    if key in _NO_DECLARATION:
        return None
    axis = _DECLARED_ALIASES.get(key)
    if axis is None:
        logger.warning("Ignoring unrecognized declared axis %r", value)
    return axis


def deficiency_value(threshold: float, config: ProfilerConfig = DEFAULT_PROFILER) -> float:
    """Distance of a threshold above the normal baseline, capped at the scale."""
    return min(config.deficiency_scale, max(0.0, threshold - config.baseline_threshold))


def deficiency_score_from_outcomes(outcomes: Iterable[bool | str]) -> float:
    """Deficiency value (0-40) from the misses in a short trial block.

    Outcomes may be booleans (True = correct) or the strings "correct" and
    "miss".
    """
    misses = 0
    for outcome in outcomes:
        if isinstance(outcome, str):
            label = outcome.lower()
            if label not in ("correct", "miss"):
                raise ValueError(f"Unknown trial outcome {outcome!r}")
            correct = label == "correct"
        else:
            correct = bool(outcome)
        if not correct:
            misses += 1
    return _MISS_SCORES.get(misses, _MAX_MISS_SCORE)


def _primary_axis(scores: Mapping[str, float]) -> str:
    # max() keeps the first maximal element, so AXES order is the tie-break
    return max(AXES, key=lambda axis: scores[axis])


def classify_scores(
    scores: Mapping[str, float],
    declared_axis: str | None = None,
    config: ProfilerConfig = DEFAULT_PROFILER,
) -> DeficiencyProfile:
    """Classify from deficiency values keyed by axis.

    Args:
        scores: Deficiency value per axis ("protan", "deutan", "tritan").
            Missing axes count as 0; values are clamped to [0, scale].
        declared_axis: Optional self-reported axis.
        config: Profiler constants.

    Returns:
        DeficiencyProfile with severity in [0, 1].
    """
    scale = config.deficiency_scale
    clamped = {
        axis: max(0.0, min(scale, float(scores.get(axis, 0.0)))) for axis in AXES
    }
    detected = _primary_axis(clamped)
    declared = normalize_axis(declared_axis)
    primary = declared or detected

    primary_value = clamped[primary]
    severity = primary_value / scale

    blended = 0.0
    for axis in AXES:
        if axis == primary:
            continue
        diff = abs(primary_value - clamped[axis])
        if diff < config.close_threshold:
            weight = 1.0 - diff / config.close_threshold
            blended += (clamped[axis] / scale) * weight * config.blend_weight
    severity = max(0.0, min(1.0, severity + blended))

    if declared is not None and declared != detected and clamped[detected] > 0:
        logger.warning(
            "Declared axis %s differs from measured axis %s", declared, detected,
        )
    logger.info("Classified %s at severity %.3f", primary, severity)

    return DeficiencyProfile(
        axis=primary,
        severity=severity,
        scores=clamped,
        declared_axis=declared,
        detected_axis=detected,
    )


def classify_deficiency(
    metrics: Mapping[str, ChannelMetrics],
    declared_axis: str | None = None,
    config: ProfilerConfig = DEFAULT_PROFILER,
) -> DeficiencyProfile:
    """Classify from per-channel metrics keyed by cone channel (L, M, S).

    Raises:
        KeyError: If any cone channel is missing.
    """
    missing = [ch for ch in CONE_CHANNELS if ch not in metrics]
    if missing:
        raise KeyError(f"Missing channel metrics for {missing}")
    scores = {
        CHANNEL_TO_AXIS[ch]: deficiency_value(metrics[ch].threshold, config)
        for ch in CONE_CHANNELS
    }
    return classify_scores(scores, declared_axis=declared_axis, config=config)


def detect_type(metrics: Mapping[str, ChannelMetrics]) -> str:
    """Report an axis only if its channel is abnormal and strictly worst.

    Returns "protan", "deutan", "tritan" or "normal".
    """
    for channel in CONE_CHANNELS:
        current = metrics[channel]
        others = [metrics[ch].threshold for ch in CONE_CHANNELS if ch != channel]
        if current.category != "Normal" and all(current.threshold > t for t in others):
            return CHANNEL_TO_AXIS[channel]
    return NORMAL


def compare_axes(declared_axis: str | None, detected: str) -> AxisComparison:
    """Compare a self-reported axis with the measured one."""
    return AxisComparison(declared=normalize_axis(declared_axis), detected=detected)
