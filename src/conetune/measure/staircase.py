"""Adaptive staircase step rule and stimulus colors.

The procedure itself belongs to the caller that presents stimuli; this
module only supplies the pure step rule and a small recorder that a trial
runner can drive.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from conetune.color.space import rgb_to_hex
from conetune.core.config import DEFAULT_STAIRCASE, StaircaseConfig
from conetune.core.exceptions import TrialDataError
from conetune.core.models import CONE_CHANNELS, Trial
from conetune.measure.thresholding import (
    ThresholdError,
    ThresholdResult,
    threshold_from_reversals,
)

NEUTRAL_GRAY = 128
_MODULATION_RANGE = 127


def next_contrast(
    current: float, correct: bool, config: StaircaseConfig = DEFAULT_STAIRCASE,
) -> float:
    """Step down after a correct response, up after an incorrect one, clamped."""
    if correct:
        return max(config.min_contrast, current * config.step_down)
    return min(config.max_contrast, current * config.step_up)


def stimulus_color(channel: str, contrast: float) -> str:
    """Hex color of a stimulus modulating one cone channel above neutral gray."""
    if channel not in CONE_CHANNELS:
        raise TrialDataError(f"Unknown cone channel {channel!r}")
    offset = round(max(0.0, min(100.0, contrast)) / 100.0 * _MODULATION_RANGE)
    rgb = [NEUTRAL_GRAY, NEUTRAL_GRAY, NEUTRAL_GRAY]
    rgb[CONE_CHANNELS.index(channel)] += offset
    return rgb_to_hex(*rgb)


@dataclass
class StaircaseProcedure:
    """Records the trials of one channel's staircase run.

    Attributes:
        channel: Cone channel under test.
        config: Staircase constants.
        contrast: Contrast to present on the next trial.
        trials: Trials recorded so far.
    """

    channel: str
    config: StaircaseConfig = DEFAULT_STAIRCASE
    contrast: float | None = None
    trials: list[Trial] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.channel not in CONE_CHANNELS:
            raise TrialDataError(f"Unknown cone channel {self.channel!r}")
        if self.contrast is None:
            self.contrast = self.config.initial_contrast

    @property
    def finished(self) -> bool:
        return len(self.trials) >= self.config.trials_per_cone

    @property
    def contrasts(self) -> list[float]:
        return [t.contrast for t in self.trials]

    def stimulus(self) -> str:
        return stimulus_color(self.channel, self.contrast)

    def record(
        self,
        presented_direction: str,
        chosen_direction: str,
        response_time_ms: float = 0.0,
    ) -> Trial:
        """Record a response at the current contrast and step the staircase.

        Raises:
            TrialDataError: If the procedure already ran all its trials.
        """
        if self.finished:
            raise TrialDataError(
                f"Staircase for {self.channel} already has {len(self.trials)} trials"
            )
        trial = Trial(
            channel=self.channel,
            presented_direction=presented_direction,
            chosen_direction=chosen_direction,
            contrast=self.contrast,
            response_time_ms=response_time_ms,
        )
        self.trials.append(trial)
        self.contrast = next_contrast(self.contrast, trial.correct, self.config)
        return trial

    def estimate(
        self, last_n: int = 6, discard_first: int = 1,
    ) -> ThresholdResult | ThresholdError:
        return threshold_from_reversals(self.contrasts, last_n=last_n, discard_first=discard_first)
