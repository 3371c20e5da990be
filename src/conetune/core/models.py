"""Data models for the ConeTune core module."""

from __future__ import annotations

from dataclasses import dataclass, field

from conetune.core.exceptions import TrialDataError

CONE_CHANNELS = ("L", "M", "S")
AXES = ("protan", "deutan", "tritan")  # also the tie-break priority order
FILTER_AXES = ("red", "green", "blue")
DIRECTIONS = frozenset({"left", "up", "right", "down"})
CATEGORIES = ("Normal", "Possible", "Deficient")

CHANNEL_TO_AXIS = {"L": "protan", "M": "deutan", "S": "tritan"}
AXIS_TO_CHANNEL = {axis: channel for channel, axis in CHANNEL_TO_AXIS.items()}
AXIS_TO_FILTER_AXIS = {"protan": "red", "deutan": "green", "tritan": "blue"}
FILTER_AXIS_TO_AXIS = {color: axis for axis, color in AXIS_TO_FILTER_AXIS.items()}


@dataclass(frozen=True)
class Color:
    """An sRGB color of record (0-255 per channel)."""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for name in ("r", "g", "b"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"Channel {name}={value} outside [0, 255]")

    @property
    def hex(self) -> str:
        """Canonical lowercase ``#rrggbb`` form."""
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)


@dataclass(frozen=True)
class Trial:
    """One forced-choice response in a cone contrast test.

    Attributes:
        channel: Cone channel tested ("L", "M" or "S").
        presented_direction: Direction the stimulus pointed.
        chosen_direction: Direction the participant picked.
        contrast: Percent modulation against neutral gray (0-100).
        response_time_ms: Time from stimulus onset to response.
    """

    channel: str
    presented_direction: str
    chosen_direction: str
    contrast: float
    response_time_ms: float = 0.0

    def __post_init__(self) -> None:
        if self.channel not in CONE_CHANNELS:
            raise TrialDataError(
                f"Unknown cone channel {self.channel!r}. Expected one of {list(CONE_CHANNELS)}"
            )
        for name in ("presented_direction", "chosen_direction"):
            if getattr(self, name) not in DIRECTIONS:
                raise TrialDataError(
                    f"Invalid {name} {getattr(self, name)!r}. "
                    f"Expected one of {sorted(DIRECTIONS)}"
                )
        if not 0 <= self.contrast <= 100:
            raise TrialDataError(f"Contrast {self.contrast} outside [0, 100]")
        if self.response_time_ms < 0:
            raise TrialDataError(f"Negative response time: {self.response_time_ms}")

    @property
    def correct(self) -> bool:
        return self.chosen_direction == self.presented_direction


@dataclass(frozen=True)
class ChannelMetrics:
    """Aggregate test results for one cone channel.

    Attributes:
        threshold: Estimated minimum detectable contrast (percent).
        std_error: Standard error of the threshold estimate.
        trial_count: Number of trials contributing to the channel.
        average_response_time_sec: Mean response time in seconds.
        log_sensitivity: log10(1 / threshold fraction).
        score: Normalized 0-200 score derived from log_sensitivity.
        category: "Normal", "Possible" or "Deficient".
    """

    threshold: float
    std_error: float
    trial_count: int
    average_response_time_sec: float
    log_sensitivity: float
    score: int
    category: str


@dataclass(frozen=True)
class DeficiencyProfile:
    """Classified deficiency: primary axis plus normalized severity.

    Attributes:
        axis: Primary axis ("protan", "deutan" or "tritan").
        severity: Normalized severity in [0, 1], including cross-axis blending.
        scores: Deficiency value per axis on the 0-40 scale.
        declared_axis: Self-reported axis, if any. Overrides detection.
        detected_axis: Axis with the largest measured deficiency.
    """

    axis: str
    severity: float
    scores: dict[str, float] = field(default_factory=dict)
    declared_axis: str | None = None
    detected_axis: str | None = None

    @property
    def is_declared(self) -> bool:
        return self.declared_axis is not None

    @property
    def filter_axis(self) -> str:
        return AXIS_TO_FILTER_AXIS[self.axis]


@dataclass(frozen=True)
class FilterParameters:
    """Configured parametric correction, read-only once built.

    Attributes:
        axis: Deficient color axis ("red", "green" or "blue").
        severity: Profile severity in [0, 1].
        hue_shift: Signed hue rotation in degrees per primary region.
        saturation_boost: Relative saturation gain, keyed by filter axis.
        luminance_gain: Relative lightness gain, keyed by filter axis.
        thresholds: Source thresholds per filter axis (provenance).
    """

    axis: str
    severity: float
    hue_shift: dict[str, float]
    saturation_boost: dict[str, float] = field(default_factory=dict)
    luminance_gain: dict[str, float] = field(default_factory=dict)
    thresholds: dict[str, float] = field(default_factory=dict)
