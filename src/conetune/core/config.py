"""Tunable constants for scoring, profiling and the adaptive staircase.

The score multiplier, category cutoffs and profiler weights were chosen
empirically. They live here as configurable values rather than fixed
domain truth, and can be overridden from a YAML file.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

from conetune.core.exceptions import ConfigError


@dataclass(frozen=True)
class ScoringConfig:
    """Constants that turn a threshold into logCS, score and category.

    Attributes:
        score_multiplier: Score = logCS x multiplier before clamping.
        score_cap: Upper bound of the normalized score.
        min_threshold_fraction: Floor for the threshold fraction in logCS.
        possible_threshold: Threshold (%) above which a channel is "Possible".
        possible_score: Score below which a channel is "Possible".
        deficient_threshold: Threshold (%) above which a channel is "Deficient".
        deficient_score: Score below which a channel is "Deficient".
    """

    score_multiplier: float = 75.0
    score_cap: float = 200.0
    min_threshold_fraction: float = 0.0001
    possible_threshold: float = 10.0
    possible_score: float = 80.0
    deficient_threshold: float = 25.0
    deficient_score: float = 50.0


@dataclass(frozen=True)
class ProfilerConfig:
    """Constants for deficiency classification and cross-axis blending."""

    baseline_threshold: float = 7.0
    deficiency_scale: float = 40.0
    close_threshold: float = 4.0
    blend_weight: float = 0.15


@dataclass(frozen=True)
class StaircaseConfig:
    """Constants for the adaptive 1-up/1-down staircase."""

    initial_contrast: float = 50.0
    min_contrast: float = 0.01
    max_contrast: float = 100.0
    step_down: float = 0.7
    step_up: float = 1.5
    trials_per_cone: int = 20
    average_last_n: int = 10

    def __post_init__(self) -> None:
        if not 0 < self.min_contrast <= self.max_contrast:
            raise ConfigError(
                f"Invalid contrast range [{self.min_contrast}, {self.max_contrast}]"
            )
        if self.trials_per_cone < 1:
            raise ConfigError("trials_per_cone must be at least 1", key="trials_per_cone")
        if self.average_last_n < 1:
            raise ConfigError("average_last_n must be at least 1", key="average_last_n")


@dataclass(frozen=True)
class ConeTuneConfig:
    """Bundle of every configurable section."""

    scoring: ScoringConfig = ScoringConfig()
    profiler: ProfilerConfig = ProfilerConfig()
    staircase: StaircaseConfig = StaircaseConfig()


DEFAULT_SCORING = ScoringConfig()
DEFAULT_PROFILER = ProfilerConfig()
DEFAULT_STAIRCASE = StaircaseConfig()
DEFAULT_CONFIG = ConeTuneConfig()

_SECTIONS: dict[str, type] = {
    "scoring": ScoringConfig,
    "profiler": ProfilerConfig,
    "staircase": StaircaseConfig,
}


def _coerce(section: str, key: str, value: Any, default: Any) -> Any:
    """Convert a YAML value to the type of the field's default."""
    kind = type(default)
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ConfigError(
            f"Invalid value {value!r} for '{section}.{key}': expected {kind.__name__}",
            key=key,
        )
    try:
        number = float(value)
    except ValueError:
        raise ConfigError(
            f"Invalid value {value!r} for '{section}.{key}': expected {kind.__name__}",
            key=key,
        ) from None
    if kind is int:
        if not number.is_integer():
            raise ConfigError(
                f"Invalid value {value!r} for '{section}.{key}': expected int", key=key,
            )
        return int(number)
    return number


def _apply_section(base: Any, section: str, values: Any) -> Any:
    if values is None:
        return base
    if not isinstance(values, dict):
        raise ConfigError(f"Section '{section}' must be a mapping", key=section)
    defaults = {f.name: getattr(base, f.name) for f in fields(base)}
    for key in values:
        if key not in defaults:
            raise ConfigError(
                f"Unknown key '{key}' in section '{section}'. "
                f"Known: {sorted(defaults)}",
                key=key,
            )
    coerced = {
        key: _coerce(section, key, value, defaults[key]) for key, value in values.items()
    }
    return replace(base, **coerced)


def config_from_dict(data: dict[str, Any] | None) -> ConeTuneConfig:
    """Build a ConeTuneConfig from a nested mapping.

    Missing sections and keys keep their defaults.

    Raises:
        ConfigError: On unknown sections or keys.
    """
    if not data:
        return DEFAULT_CONFIG
    if not isinstance(data, dict):
        raise ConfigError(f"Config must be a mapping, got {type(data).__name__}")

    config = DEFAULT_CONFIG
    for section, values in data.items():
        if section not in _SECTIONS:
            raise ConfigError(
                f"Unknown config section '{section}'. Known: {sorted(_SECTIONS)}",
                key=section,
            )
        updated = _apply_section(getattr(config, section), section, values)
        config = replace(config, **{section: updated})
    return config


def load_config(path: Path | str) -> ConeTuneConfig:
    """Load a ConeTuneConfig from a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigError: If the YAML is malformed or has unknown keys.
    """
    path = Path(path)
    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid config YAML in {path}: {e}") from e
    return config_from_dict(data)
