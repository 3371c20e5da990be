"""Tests for conetune.study.session."""

import dataclasses

import pytest

from conetune.study.session import SessionContext
from conetune.study.statistics import TaskPerformance


class TestSessionContext:
    def test_defaults(self):
        ctx = SessionContext()
        assert ctx.metrics == {}
        assert ctx.profile is None
        assert ctx.detected_type is None
        assert ctx.comparison is None
        assert ctx.created_at

    def test_declared_normalized(self):
        assert SessionContext(declared_axis="Protanopia").declared_axis == "protan"
        assert SessionContext(declared_axis="unknown").declared_axis is None

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            SessionContext().participant = "p2"  # type: ignore[misc]


class TestWithMetrics:
    def test_derives_profile_and_filter(self, protan_metrics):
        ctx = SessionContext(participant="p1").with_metrics(protan_metrics)
        assert ctx.profile.axis == "protan"
        assert ctx.profile.severity == pytest.approx(0.45)
        assert ctx.filter_parameters.axis == "red"
        assert ctx.filter_parameters.thresholds == {"red": 25.0, "green": 7.0, "blue": 5.0}
        assert ctx.preset == "protanopia"
        assert ctx.detected_type == "protan"
        assert ctx.participant == "p1"

    def test_original_unchanged(self, protan_metrics):
        ctx = SessionContext()
        ctx.with_metrics(protan_metrics)
        assert ctx.metrics == {}

    def test_declared_mismatch(self, protan_metrics):
        ctx = SessionContext(declared_axis="tritan").with_metrics(protan_metrics)
        assert ctx.profile.axis == "tritan"
        assert ctx.comparison.mismatch
        assert ctx.preset == "protanopia"

    def test_normal_result(self, normal_metrics):
        ctx = SessionContext().with_metrics(normal_metrics)
        assert ctx.detected_type == "normal"
        assert ctx.comparison.mismatch is False
        assert ctx.preset == "grayscale"
        assert ctx.filter_engine().preset == "grayscale"


class TestSessionFlow:
    def test_record_task(self):
        ctx = SessionContext()
        perf = TaskPerformance("tiles", "custom", 1200, accuracy=1.0)
        updated = ctx.record_task(perf)
        assert updated.task_performances == (perf,)
        assert ctx.task_performances == ()

    def test_request_retest(self, protan_metrics):
        ctx = SessionContext(declared_axis="tritan").with_metrics(protan_metrics)
        retest = ctx.request_retest()
        assert retest.retest_requested
        assert retest.previous_metrics == protan_metrics
        assert retest.metrics == {}
        assert retest.profile is None
        assert retest.filter_parameters is None
        assert retest.declared_axis == "tritan"

    def test_filter_engine(self, protan_metrics):
        ctx = SessionContext().with_metrics(protan_metrics)
        engine = ctx.filter_engine(intensity=0.8)
        assert engine.params == ctx.filter_parameters
        assert engine.preset == "protanopia"
        assert engine.intensity == 0.8

    def test_filter_engine_before_testing(self):
        engine = SessionContext().filter_engine()
        assert engine.apply("#ff0000") == "#ff0000"
