"""Threshold estimation from staircase and fixed-level trial data.

Two interchangeable strategies:

* ``threshold_from_reversals`` for adaptive staircases. Returns a
  ThresholdResult, or a ThresholdError value when the sequence does not
  contain enough reversals. Callers must check which one they got.
* ``threshold_from_fixed_levels`` for procedures that test a small set of
  fixed contrasts once each. This is a bracketing estimator (geometric mean
  of the highest miss and the lowest hit), not a psychometric-function fit.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from conetune.core.exceptions import TrialDataError

MIN_SAMPLES = 3

INSUFFICIENT_SAMPLES = "insufficient_samples"
NO_REVERSALS = "no_reversals"
INSUFFICIENT_REVERSALS = "insufficient_reversals"


@dataclass(frozen=True)
class ReversalPoint:
    """A staircase point where the direction of contrast change flips.

    Attributes:
        index: Position in the contrast sequence.
        contrast: Contrast value at the reversal.
        direction_change: (previous direction, new direction), each +1 or -1.
    """

    index: int
    contrast: float
    direction_change: tuple[int, int]


@dataclass(frozen=True)
class ThresholdResult:
    """Result of reversal-based threshold estimation.

    Attributes:
        total_reversals: Number of reversals found before discarding.
        reversal_points: Every reversal found, in sequence order.
        used: Reversal contrasts averaged into the threshold.
        threshold: Mean of ``used``.
        std: Sample standard deviation of ``used`` (0 when n <= 1).
    """

    total_reversals: int
    reversal_points: tuple[ReversalPoint, ...]
    used: tuple[float, ...]
    threshold: float
    std: float

    @property
    def standard_error(self) -> float:
        n = len(self.used)
        return self.std / math.sqrt(n) if n > 1 else 0.0

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class ThresholdError:
    """Insufficient-data outcome of reversal-based estimation.

    Attributes:
        reason: One of "insufficient_samples", "no_reversals",
            "insufficient_reversals".
        message: Human-readable explanation suitable for a retry prompt.
    """

    reason: str
    message: str

    @property
    def ok(self) -> bool:
        return False


def find_reversals(contrasts: Sequence[float]) -> list[ReversalPoint]:
    """Locate reversals in a contrast sequence.

    Plateaus (zero differences) are ignored; a reversal is recorded at the
    turning point whenever the direction differs from the last nonzero one.
    """
    if len(contrasts) < MIN_SAMPLES:
        return []

    values = np.asarray(contrasts, dtype=np.float64)
    dirs = np.sign(np.diff(values)).astype(int)

    reversals: list[ReversalPoint] = []
    prev_dir = 0
    for i, curr in enumerate(dirs):
        if curr == 0:
            continue
        if prev_dir != 0 and curr != prev_dir:
            reversals.append(
                ReversalPoint(
                    index=i,
                    contrast=float(values[i]),
                    direction_change=(int(prev_dir), int(curr)),
                )
            )
        prev_dir = curr
    return reversals


def threshold_from_reversals(
    contrasts: Sequence[float],
    last_n: int = 6,
    discard_first: int = 1,
) -> ThresholdResult | ThresholdError:
    """Estimate a threshold as the mean of the last reversals.

    Args:
        contrasts: Contrast presented on each trial, in order.
        last_n: How many of the remaining reversals to average.
        discard_first: How many of the earliest reversals to drop.

    Returns:
        ThresholdResult on success, ThresholdError if the data is too short,
        monotonic, or runs out of reversals after discarding.

    Raises:
        ValueError: If last_n < 1 or discard_first < 0.
    """
    if last_n < 1:
        raise ValueError(f"last_n must be >= 1, got {last_n}")
    if discard_first < 0:
        raise ValueError(f"discard_first must be >= 0, got {discard_first}")

    if len(contrasts) < MIN_SAMPLES:
        return ThresholdError(
            reason=INSUFFICIENT_SAMPLES,
            message=(
                f"Need at least {MIN_SAMPLES} contrast samples, got {len(contrasts)}."
            ),
        )

    reversals = find_reversals(contrasts)
    if not reversals:
        return ThresholdError(
            reason=NO_REVERSALS,
            message="No reversals detected. Check your data.",
        )

    remaining = [r.contrast for r in reversals][discard_first:]
    used = remaining[-last_n:]
    if not used:
        return ThresholdError(
            reason=INSUFFICIENT_REVERSALS,
            message=(
                f"Not enough reversals to compute threshold: found {len(reversals)}, "
                f"discarding {discard_first}."
            ),
        )

    arr = np.asarray(used, dtype=np.float64)
    std = float(np.std(arr, ddof=1)) if arr.size > 1 else 0.0

    return ThresholdResult(
        total_reversals=len(reversals),
        reversal_points=tuple(reversals),
        used=tuple(float(v) for v in used),
        threshold=float(np.mean(arr)),
        std=std,
    )


def threshold_from_fixed_levels(
    levels: Sequence[float],
    responses: Sequence[bool],
) -> float:
    """Bracket a threshold from one response per fixed contrast level.

    * all correct: half of the lowest tested level
    * all incorrect: the highest tested level
    * otherwise: geometric mean of the highest incorrect level and the
      lowest correct level

    Raises:
        TrialDataError: If the inputs are empty or their lengths differ.
    """
    if len(levels) != len(responses):
        raise TrialDataError(
            f"Contrast levels and responses must have same length "
            f"({len(levels)} != {len(responses)})"
        )
    if not levels:
        raise TrialDataError("At least one contrast level is required")

    correct = [float(lv) for lv, ok in zip(levels, responses) if ok]
    incorrect = [float(lv) for lv, ok in zip(levels, responses) if not ok]

    if not incorrect:
        return min(correct) / 2.0
    if not correct:
        return max(incorrect)
    return math.sqrt(max(incorrect) * min(correct))
