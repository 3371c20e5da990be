"""Shared test fixtures for ConeTune."""

import pytest

from conetune.core.models import Trial
from conetune.measure.metrics import metrics_from_threshold

# Staircase run with eight reversals: 8 16 4 8 2 4 1 2
STAIRCASE_CONTRASTS = [32, 16, 8, 16, 8, 4, 8, 4, 2, 4, 2, 1, 2, 1]


@pytest.fixture
def staircase_contrasts() -> list[float]:
    return list(STAIRCASE_CONTRASTS)


@pytest.fixture
def protan_metrics():
    """Cone metrics with an elevated L threshold (protan, deficiency 18)."""
    return {
        "L": metrics_from_threshold(25.0),
        "M": metrics_from_threshold(7.0),
        "S": metrics_from_threshold(5.0),
    }


@pytest.fixture
def normal_metrics():
    return {
        "L": metrics_from_threshold(3.0),
        "M": metrics_from_threshold(3.0),
        "S": metrics_from_threshold(4.0),
    }


def make_trials(channel: str, contrasts, correct: bool = True, rt_ms: float = 1500.0):
    """Build Trials at the given contrasts, all correct or all wrong."""
    chosen = "up" if correct else "down"
    return [
        Trial(channel, "up", chosen, contrast=c, response_time_ms=rt_ms)
        for c in contrasts
    ]


@pytest.fixture
def trial_factory():
    return make_trials
