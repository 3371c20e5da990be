"""FilterEngine — one configured correction, applied per rendered color."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping

from conetune.core.config import DEFAULT_PROFILER, ProfilerConfig
from conetune.core.models import DeficiencyProfile, FilterParameters
from conetune.filters.parametric import apply_filter, build_filter_parameters
from conetune.filters.presets import CUSTOM, apply_preset, recommended_preset


@dataclass(frozen=True)
class FilterEngine:
    """Immutable pairing of parametric settings and the comparison preset.

    Attributes:
        params: Parametric settings for the custom adaptive filter.
        preset: Preset used as the standard comparison filter.
        intensity: Preset intensity in [0, 1].
    """

    params: FilterParameters | None = None
    preset: str = "grayscale"
    intensity: float = 1.0

    @classmethod
    def configure(
        cls,
        profile: DeficiencyProfile,
        detected_type: str | None = None,
        thresholds: Mapping[str, float] | None = None,
        intensity: float = 1.0,
        config: ProfilerConfig = DEFAULT_PROFILER,
    ) -> FilterEngine:
        """Build an engine for a profile.

        The comparison preset follows ``detected_type`` (see ``detect_type``);
        "normal" or None selects grayscale.
        """
        return cls(
            params=build_filter_parameters(profile, thresholds=thresholds, config=config),
            preset=recommended_preset(detected_type),
            intensity=intensity,
        )

    def apply(self, color: str) -> str:
        """Custom adaptive correction of one hex color."""
        return apply_filter(color, self.params)

    def apply_preset(self, color: str) -> str:
        return apply_preset(color, self.preset, self.intensity)

    def renderer(self, kind: str) -> Callable[[str], str]:
        """Return the ``apply(hex) -> hex`` callable for a filter kind.

        "custom" selects the parametric filter; any other kind is treated
        as a preset name (unknown names pass colors through).
        """
        if kind == CUSTOM:
            return self.apply

        def apply(color: str) -> str:
            return apply_preset(color, kind, self.intensity)

        return apply
