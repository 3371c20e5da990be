"""ConeTune Study — session context and task performance statistics."""

from conetune.study.session import SessionContext
from conetune.study.statistics import (
    TaskPerformance,
    compare_filters,
    performances_to_frame,
    summarize_tasks,
)

__all__ = [
    "SessionContext",
    "TaskPerformance",
    "compare_filters",
    "performances_to_frame",
    "summarize_tasks",
]
