"""SessionContext — explicit study-run state passed between components.

A context is never mutated; every update returns a new instance.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime

from conetune.core.config import DEFAULT_CONFIG, ConeTuneConfig
from conetune.core.models import (
    AXIS_TO_FILTER_AXIS,
    CHANNEL_TO_AXIS,
    ChannelMetrics,
    DeficiencyProfile,
    FilterParameters,
)
from conetune.filters.engine import FilterEngine
from conetune.profile.profiler import (
    AxisComparison,
    classify_deficiency,
    compare_axes,
    detect_type,
    normalize_axis,
)
from conetune.study.statistics import TaskPerformance

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionContext:
    """Everything one study run has produced so far.

    Attributes:
        participant: Free-form participant label.
        declared_axis: Self-reported axis (normalized), or None.
        metrics: Per-channel metrics keyed by "L", "M", "S".
        profile: Classified deficiency, once derived.
        filter_parameters: Parametric settings, once derived.
        preset: Preset used as the comparison filter.
        task_performances: Recorded task results.
        previous_metrics: Metrics from the test taken before a retest.
        retest_requested: Set when a mismatch triggered a retest.
        created_at: ISO timestamp.
    """

    participant: str = ""
    declared_axis: str | None = None
    metrics: dict[str, ChannelMetrics] = field(default_factory=dict)
    profile: DeficiencyProfile | None = None
    filter_parameters: FilterParameters | None = None
    preset: str = "grayscale"
    task_performances: tuple[TaskPerformance, ...] = ()
    previous_metrics: dict[str, ChannelMetrics] | None = None
    retest_requested: bool = False
    created_at: str = field(default_factory=lambda: datetime.now().isoformat())

    def __post_init__(self) -> None:
        object.__setattr__(self, "declared_axis", normalize_axis(self.declared_axis))

    @property
    def detected_type(self) -> str | None:
        """Measured type ("protan", ..., "normal"), or None before testing."""
        if not self.metrics:
            return None
        return detect_type(self.metrics)

    @property
    def comparison(self) -> AxisComparison | None:
        detected = self.detected_type
        if detected is None:
            return None
        return compare_axes(self.declared_axis, detected)

    def with_metrics(
        self,
        metrics: dict[str, ChannelMetrics],
        config: ConeTuneConfig = DEFAULT_CONFIG,
    ) -> SessionContext:
        """Attach cone test results and derive profile, parameters and preset.

        The preset follows the measured type, so a normal result compares
        against grayscale.
        """
        profile = classify_deficiency(metrics, self.declared_axis, config.profiler)
        thresholds = {
            AXIS_TO_FILTER_AXIS[CHANNEL_TO_AXIS[ch]]: m.threshold for ch, m in metrics.items()
        }
        engine = FilterEngine.configure(
            profile,
            detected_type=detect_type(metrics),
            thresholds=thresholds,
            config=config.profiler,
        )
        return replace(
            self,
            metrics=dict(metrics),
            profile=profile,
            filter_parameters=engine.params,
            preset=engine.preset,
        )

    def record_task(self, performance: TaskPerformance) -> SessionContext:
        return replace(self, task_performances=self.task_performances + (performance,))

    def request_retest(self) -> SessionContext:
        """Keep the current metrics for comparison and clear derived results."""
        logger.info("Retest requested; archiving current cone test results")
        return replace(
            self,
            previous_metrics=dict(self.metrics) if self.metrics else self.previous_metrics,
            metrics={},
            profile=None,
            filter_parameters=None,
            retest_requested=True,
        )

    def filter_engine(self, intensity: float = 1.0) -> FilterEngine:
        """Engine for the task harness; parameters may be None before testing."""
        return FilterEngine(
            params=self.filter_parameters, preset=self.preset, intensity=intensity,
        )
