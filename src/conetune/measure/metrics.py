"""Per-channel derived statistics: logCS, score, category and ChannelMetrics."""

from __future__ import annotations

import logging
import math
from typing import Iterable, Sequence

import numpy as np

from conetune.core.config import DEFAULT_SCORING, DEFAULT_STAIRCASE, ScoringConfig, StaircaseConfig
from conetune.core.exceptions import TrialDataError
from conetune.core.models import CONE_CHANNELS, ChannelMetrics, Trial

logger = logging.getLogger(__name__)


def log_sensitivity(threshold: float, config: ScoringConfig = DEFAULT_SCORING) -> float:
    """log10(1 / threshold fraction), with the fraction floored."""
    fraction = max(config.min_threshold_fraction, threshold / 100.0)
    return math.log10(1.0 / fraction)


def score_from_log_sensitivity(
    log_cs: float, config: ScoringConfig = DEFAULT_SCORING,
) -> int:
    """Map logCS to the 0-200 normalized score (saturating)."""
    return int(round(min(config.score_cap, max(0.0, log_cs * config.score_multiplier))))


def classify_category(
    threshold: float, score: float, config: ScoringConfig = DEFAULT_SCORING,
) -> str:
    """Return "Normal", "Possible" or "Deficient" from threshold and score."""
    category = "Normal"
    if threshold > config.possible_threshold or score < config.possible_score:
        category = "Possible"
    if threshold > config.deficient_threshold or score < config.deficient_score:
        category = "Deficient"
    return category


def metrics_from_threshold(
    threshold: float,
    std_error: float = 0.0,
    trial_count: int = 0,
    average_response_time_sec: float = 0.0,
    config: ScoringConfig = DEFAULT_SCORING,
) -> ChannelMetrics:
    """Build ChannelMetrics from a threshold produced by any estimator."""
    log_cs = log_sensitivity(threshold, config)
    score = score_from_log_sensitivity(log_cs, config)
    return ChannelMetrics(
        threshold=round(threshold, 2),
        std_error=round(std_error, 2),
        trial_count=trial_count,
        average_response_time_sec=round(average_response_time_sec, 1),
        log_sensitivity=round(log_cs, 2),
        score=score,
        category=classify_category(threshold, score, config),
    )


def compute_channel_metrics(
    trials: Sequence[Trial],
    scoring: ScoringConfig = DEFAULT_SCORING,
    staircase: StaircaseConfig = DEFAULT_STAIRCASE,
) -> ChannelMetrics:
    """Trial-average metrics for one channel's trial set.

    The threshold is the mean contrast of the last ``average_last_n``
    trials; the standard error is their sample stdev over sqrt(n).

    Raises:
        TrialDataError: If no trials are given or channels are mixed.
    """
    if not trials:
        raise TrialDataError("Cannot compute channel metrics from zero trials")
    channels = {t.channel for t in trials}
    if len(channels) > 1:
        raise TrialDataError(f"Trials span multiple channels: {sorted(channels)}")

    window = np.array([t.contrast for t in trials[-staircase.average_last_n:]], dtype=np.float64)
    n = window.size
    threshold = float(np.mean(window))
    std_error = float(np.std(window, ddof=1) / math.sqrt(n)) if n > 1 else 0.0
    avg_time = float(np.mean([t.response_time_ms for t in trials])) / 1000.0

    return metrics_from_threshold(
        threshold,
        std_error=std_error,
        trial_count=len(trials),
        average_response_time_sec=avg_time,
        config=scoring,
    )


def compute_cone_metrics(
    trials: Iterable[Trial],
    scoring: ScoringConfig = DEFAULT_SCORING,
    staircase: StaircaseConfig = DEFAULT_STAIRCASE,
) -> dict[str, ChannelMetrics]:
    """Split trials by channel and compute metrics for each of L, M and S.

    Raises:
        TrialDataError: If any channel has no trials.
    """
    by_channel: dict[str, list[Trial]] = {ch: [] for ch in CONE_CHANNELS}
    for trial in trials:
        by_channel[trial.channel].append(trial)

    missing = [ch for ch, ts in by_channel.items() if not ts]
    if missing:
        raise TrialDataError(f"No trials recorded for channel(s): {missing}")

    results = {
        ch: compute_channel_metrics(ts, scoring=scoring, staircase=staircase)
        for ch, ts in by_channel.items()
    }
    logger.debug(
        "Cone metrics: %s",
        {ch: (m.threshold, m.category) for ch, m in results.items()},
    )
    return results
