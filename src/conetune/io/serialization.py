"""YAML serialization for SessionContext."""

from __future__ import annotations

from dataclasses import asdict
from pathlib import Path
from typing import Any

import yaml

from conetune.core.exceptions import SessionError
from conetune.core.models import ChannelMetrics, DeficiencyProfile, FilterParameters
from conetune.study.session import SessionContext
from conetune.study.statistics import TaskPerformance


def _metrics_to_data(metrics: dict[str, ChannelMetrics] | None) -> dict[str, Any] | None:
    if metrics is None:
        return None
    return {ch: asdict(m) for ch, m in metrics.items()}


def _metrics_from_data(data: dict[str, Any] | None) -> dict[str, ChannelMetrics] | None:
    if data is None:
        return None
    return {ch: ChannelMetrics(**values) for ch, values in data.items()}


def session_to_dict(ctx: SessionContext) -> dict[str, Any]:
    """Plain-data form of a session, suitable for YAML or JSON."""
    data: dict[str, Any] = {
        "participant": ctx.participant,
        "declared_axis": ctx.declared_axis,
        "created_at": ctx.created_at,
        "preset": ctx.preset,
        "retest_requested": ctx.retest_requested,
        "metrics": _metrics_to_data(ctx.metrics) or {},
        "task_performances": [asdict(p) for p in ctx.task_performances],
    }
    if ctx.profile is not None:
        data["profile"] = asdict(ctx.profile)
    if ctx.filter_parameters is not None:
        data["filter_parameters"] = asdict(ctx.filter_parameters)
    if ctx.previous_metrics is not None:
        data["previous_metrics"] = _metrics_to_data(ctx.previous_metrics)
    return data


def session_from_dict(data: dict[str, Any]) -> SessionContext:
    """Rebuild a SessionContext from ``session_to_dict`` output.

    Raises:
        SessionError: If the data is not a mapping or a record is malformed.
    """
    if not isinstance(data, dict):
        raise SessionError(f"Expected a mapping, got {type(data).__name__}")
    try:
        profile = data.get("profile")
        params = data.get("filter_parameters")
        return SessionContext(
            participant=data.get("participant", ""),
            declared_axis=data.get("declared_axis"),
            metrics=_metrics_from_data(data.get("metrics")) or {},
            profile=DeficiencyProfile(**profile) if profile else None,
            filter_parameters=FilterParameters(**params) if params else None,
            preset=data.get("preset", "grayscale"),
            task_performances=tuple(
                TaskPerformance(**p) for p in data.get("task_performances", [])
            ),
            previous_metrics=_metrics_from_data(data.get("previous_metrics")),
            retest_requested=bool(data.get("retest_requested", False)),
            created_at=data.get("created_at", ""),
        )
    except (TypeError, ValueError) as e:
        raise SessionError(f"Invalid session record ({e})") from e


def session_to_yaml(ctx: SessionContext, path: Path) -> None:
    """Write a session to a YAML file."""
    path = Path(path)
    with open(path, "w") as f:
        yaml.safe_dump(session_to_dict(ctx), f, default_flow_style=False, sort_keys=False)


def session_from_yaml(path: Path) -> SessionContext:
    """Load a session from a YAML file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        SessionError: If the YAML is invalid.
    """
    path = Path(path)
    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise SessionError(f"Invalid session YAML ({e})", path=str(path)) from e
    if not isinstance(data, dict):
        raise SessionError("Invalid session YAML: expected a mapping", path=str(path))
    return session_from_dict(data)
