"""Tests for conetune.study.statistics."""

import math

import pytest

from conetune.study.statistics import (
    SUMMARY_COLUMNS,
    TaskPerformance,
    compare_filters,
    performances_to_frame,
    summarize_tasks,
)


@pytest.fixture
def performances():
    return [
        TaskPerformance("tiles", "custom", 1000, swipes=2, clicks=5, accuracy=1.0),
        TaskPerformance("tiles", "custom", 3000, swipes=4, clicks=5, accuracy=0.0),
        TaskPerformance("tiles", "protanopia", 4000, swipes=1, clicks=3, accuracy=1.0),
        TaskPerformance("sort", "custom", 2500, clicks=8, accuracy=1.0),
    ]


class TestTaskPerformance:
    def test_bool_accuracy_coerced(self):
        perf = TaskPerformance("t", "custom", 10, accuracy=True)
        assert perf.accuracy == 1.0
        assert isinstance(perf.accuracy, float)
        assert perf.correct

    def test_partial_accuracy(self):
        assert not TaskPerformance("t", "custom", 10, accuracy=0.25).correct

    def test_unknown_filter_kind(self):
        with pytest.raises(ValueError, match="Unknown filter kind"):
            TaskPerformance("t", "sepia", 10)

    def test_accuracy_range(self):
        with pytest.raises(ValueError):
            TaskPerformance("t", "custom", 10, accuracy=1.5)

    def test_negative_counts(self):
        with pytest.raises(ValueError):
            TaskPerformance("t", "custom", -1)
        with pytest.raises(ValueError):
            TaskPerformance("t", "custom", 10, swipes=-2)

    def test_timestamp_set(self):
        assert TaskPerformance("t", "grayscale", 10).timestamp


class TestFrames:
    def test_performances_to_frame(self, performances):
        df = performances_to_frame(performances)
        assert len(df) == 4
        assert list(df["filter_kind"]) == ["custom", "custom", "protanopia", "custom"]

    def test_summary(self, performances):
        summary = summarize_tasks(performances)
        assert list(summary.columns) == SUMMARY_COLUMNS
        row = summary[(summary["task_id"] == "tiles") & (summary["filter_kind"] == "custom")]
        assert row["count"].item() == 2
        assert row["mean_time_ms"].item() == pytest.approx(2000.0)
        assert row["total_swipes"].item() == 6
        assert row["total_clicks"].item() == 10
        assert row["mean_accuracy"].item() == pytest.approx(0.5)

    def test_summary_sorted(self, performances):
        summary = summarize_tasks(performances)
        assert list(summary["task_id"]) == ["sort", "tiles", "tiles"]

    def test_summary_empty(self):
        summary = summarize_tasks([])
        assert summary.empty
        assert list(summary.columns) == SUMMARY_COLUMNS


class TestCompareFilters:
    def test_deltas(self, performances):
        deltas = compare_filters(performances, "protanopia")
        tiles = deltas.loc["tiles"]
        assert tiles["time_delta_ms"] == pytest.approx(-2000.0)
        assert tiles["swipes_delta"] == pytest.approx(5.0)
        assert tiles["clicks_delta"] == pytest.approx(7.0)
        assert tiles["accuracy_delta"] == pytest.approx(-0.5)

    def test_missing_side_is_nan(self, performances):
        deltas = compare_filters(performances, "protanopia")
        assert math.isnan(deltas.loc["sort", "time_delta_ms"])

    def test_empty(self):
        assert compare_filters([], "grayscale").empty
