"""ConeTune Core — data models, configuration and exceptions."""

from conetune.core.config import (
    DEFAULT_CONFIG,
    ConeTuneConfig,
    ProfilerConfig,
    ScoringConfig,
    StaircaseConfig,
    load_config,
)
from conetune.core.exceptions import (
    ConeTuneError,
    ConfigError,
    FormatError,
    SessionError,
    TrialDataError,
)
from conetune.core.models import (
    ChannelMetrics,
    Color,
    DeficiencyProfile,
    FilterParameters,
    Trial,
)

__all__ = [
    "ChannelMetrics",
    "Color",
    "ConeTuneConfig",
    "ConeTuneError",
    "ConfigError",
    "DEFAULT_CONFIG",
    "DeficiencyProfile",
    "FilterParameters",
    "FormatError",
    "ProfilerConfig",
    "ScoringConfig",
    "SessionError",
    "StaircaseConfig",
    "Trial",
    "TrialDataError",
    "load_config",
]
