"""Task performance records and per-filter comparison statistics."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable

import pandas as pd

from conetune.filters.presets import CUSTOM, FILTER_KINDS

SUMMARY_COLUMNS = [
    "task_id", "filter_kind", "count", "mean_time_ms",
    "total_swipes", "total_clicks", "mean_accuracy",
]


@dataclass(frozen=True)
class TaskPerformance:
    """One completed interactive task under one filter.

    Accuracy is always stored as a float in [0, 1]; a boolean outcome is
    coerced to 0.0 or 1.0.
    """

    task_id: str
    filter_kind: str
    time_ms: float
    swipes: int = 0
    clicks: int = 0
    accuracy: float = 0.0
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    def __post_init__(self) -> None:
        if self.filter_kind not in FILTER_KINDS:
            raise ValueError(
                f"Unknown filter kind {self.filter_kind!r}. "
                f"Supported: {sorted(FILTER_KINDS)}"
            )
        if self.time_ms < 0:
            raise ValueError(f"Negative task time: {self.time_ms}")
        if self.swipes < 0 or self.clicks < 0:
            raise ValueError("Swipe and click counts must be non-negative")
        accuracy = float(self.accuracy)
        if not 0.0 <= accuracy <= 1.0:
            raise ValueError(f"Accuracy {accuracy} outside [0, 1]")
        object.__setattr__(self, "accuracy", accuracy)

    @property
    def correct(self) -> bool:
        return self.accuracy >= 0.5


def performances_to_frame(performances: Iterable[TaskPerformance]) -> pd.DataFrame:
    """One row per performance record."""
    rows = [
        {
            "task_id": p.task_id,
            "filter_kind": p.filter_kind,
            "time_ms": float(p.time_ms),
            "swipes": p.swipes,
            "clicks": p.clicks,
            "accuracy": p.accuracy,
            "timestamp": p.timestamp,
        }
        for p in performances
    ]
    return pd.DataFrame(
        rows,
        columns=["task_id", "filter_kind", "time_ms", "swipes", "clicks", "accuracy", "timestamp"],
    )


def summarize_tasks(performances: Iterable[TaskPerformance]) -> pd.DataFrame:
    """Aggregate per (task, filter kind).

    Returns:
        DataFrame with SUMMARY_COLUMNS, sorted by task then filter kind.
    """
    df = performances_to_frame(performances)
    if df.empty:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    grouped = df.groupby(["task_id", "filter_kind"], sort=True)
    summary = grouped.agg(
        count=("time_ms", "size"),
        mean_time_ms=("time_ms", "mean"),
        total_swipes=("swipes", "sum"),
        total_clicks=("clicks", "sum"),
        mean_accuracy=("accuracy", "mean"),
    ).reset_index()
    return summary[SUMMARY_COLUMNS]


def compare_filters(
    performances: Iterable[TaskPerformance],
    preset: str,
    baseline: str = CUSTOM,
) -> pd.DataFrame:
    """Per-task deltas of ``baseline`` minus ``preset``.

    Tasks run under only one of the two filters get NaN deltas.

    Returns:
        DataFrame indexed by task_id with columns time_delta_ms,
        swipes_delta, clicks_delta, accuracy_delta.
    """
    summary = summarize_tasks(performances).set_index(["task_id", "filter_kind"])
    columns = ["time_delta_ms", "swipes_delta", "clicks_delta", "accuracy_delta"]
    if summary.empty:
        return pd.DataFrame(columns=columns)

    tasks = sorted(summary.index.get_level_values("task_id").unique())
    records = []
    for task in tasks:
        base = summary.loc[(task, baseline)] if (task, baseline) in summary.index else None
        other = summary.loc[(task, preset)] if (task, preset) in summary.index else None
        if base is None or other is None:
            records.append({c: float("nan") for c in columns})
            continue
        records.append({
            "time_delta_ms": base["mean_time_ms"] - other["mean_time_ms"],
            "swipes_delta": float(base["total_swipes"] - other["total_swipes"]),
            "clicks_delta": float(base["total_clicks"] - other["total_clicks"]),
            "accuracy_delta": base["mean_accuracy"] - other["mean_accuracy"],
        })
    return pd.DataFrame(records, index=pd.Index(tasks, name="task_id"), columns=columns)
