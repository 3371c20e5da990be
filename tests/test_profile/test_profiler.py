"""Tests for conetune.profile.profiler."""

import logging

import pytest

from conetune.core.config import ProfilerConfig
from conetune.measure.metrics import metrics_from_threshold
from conetune.profile.profiler import (
    classify_deficiency,
    classify_scores,
    compare_axes,
    deficiency_score_from_outcomes,
    deficiency_value,
    detect_type,
    normalize_axis,
)


class TestDeficiencyValue:
    def test_above_baseline(self):
        assert deficiency_value(25) == 18

    def test_below_baseline(self):
        assert deficiency_value(5) == 0

    def test_capped(self):
        assert deficiency_value(60) == 40


class TestOutcomeScores:
    @pytest.mark.parametrize("misses,expected", [
        (0, 0), (1, 4), (2, 10), (3, 18), (4, 26), (5, 35), (6, 40), (8, 40),
    ])
    def test_miss_table(self, misses, expected):
        outcomes = ["miss"] * misses + ["correct"] * 3
        assert deficiency_score_from_outcomes(outcomes) == expected

    def test_booleans(self):
        assert deficiency_score_from_outcomes([False, True, False]) == 10

    def test_case_insensitive(self):
        assert deficiency_score_from_outcomes(["Miss", "CORRECT"]) == 4

    def test_unknown_token(self):
        with pytest.raises(ValueError):
            deficiency_score_from_outcomes(["maybe"])


class TestNormalizeAxis:
    @pytest.mark.parametrize("value,expected", [
        ("protan", "protan"),
        ("Protanopia", "protan"),
        ("green", "deutan"),
        (" tritan ", "tritan"),
        ("none", None),
        ("unknown", None),
        ("", None),
        (None, None),
    ])
    def test_values(self, value, expected):
        assert normalize_axis(value) == expected

    def test_unrecognized_logs(self, caplog):
        with caplog.at_level(logging.WARNING, logger="conetune.profile.profiler"):
            assert normalize_axis("purple") is None
        assert "purple" in caplog.text


class TestClassifyScores:
    def test_all_zero_is_protan(self):
        profile = classify_scores({"protan": 0, "deutan": 0, "tritan": 0})
        assert profile.axis == "protan"
        assert profile.severity == 0.0

    def test_tie_breaks_protan_first(self):
        profile = classify_scores({"protan": 10, "deutan": 10, "tritan": 0})
        assert profile.axis == "protan"

    def test_tie_breaks_deutan_before_tritan(self):
        profile = classify_scores({"protan": 0, "deutan": 20, "tritan": 20})
        assert profile.axis == "deutan"

    def test_missing_axes_count_as_zero(self):
        profile = classify_scores({"tritan": 12})
        assert profile.axis == "tritan"
        assert profile.severity == pytest.approx(0.3)

    def test_blending_close_axes(self):
        profile = classify_scores({"protan": 20, "deutan": 18, "tritan": 0})
        assert profile.axis == "protan"
        # 0.5 + (18/40) * (1 - 2/4) * 0.15
        assert profile.severity == pytest.approx(0.53375)

    def test_no_blending_far_axes(self):
        profile = classify_scores({"protan": 20, "deutan": 10, "tritan": 0})
        assert profile.severity == pytest.approx(0.5)

    def test_severity_capped(self):
        profile = classify_scores({"protan": 40, "deutan": 40, "tritan": 40})
        assert profile.severity == 1.0

    def test_scores_clamped(self):
        profile = classify_scores({"protan": 55, "deutan": -3, "tritan": 0})
        assert profile.scores == {"protan": 40.0, "deutan": 0.0, "tritan": 0.0}
        assert profile.severity == 1.0

    def test_declared_overrides_detection(self):
        profile = classify_scores(
            {"protan": 30, "deutan": 5, "tritan": 2}, declared_axis="deutan",
        )
        assert profile.axis == "deutan"
        assert profile.detected_axis == "protan"
        assert profile.declared_axis == "deutan"
        # 5/40 + (2/40) * (1 - 3/4) * 0.15
        assert profile.severity == pytest.approx(0.126875)

    def test_declared_tritan(self):
        profile = classify_scores(
            {"protan": 30, "deutan": 5, "tritan": 2}, declared_axis="tritan",
        )
        assert profile.axis == "tritan"
        assert profile.severity == pytest.approx(2 / 40 + (5 / 40) * 0.25 * 0.15)

    def test_declared_mismatch_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="conetune.profile.profiler"):
            classify_scores({"protan": 30}, declared_axis="tritan")
        assert "differs from measured axis" in caplog.text

    def test_declared_none_uses_detection(self):
        profile = classify_scores({"deutan": 8}, declared_axis="none")
        assert profile.axis == "deutan"
        assert not profile.is_declared

    def test_custom_config(self):
        config = ProfilerConfig(blend_weight=0.0)
        profile = classify_scores({"protan": 20, "deutan": 19}, config=config)
        assert profile.severity == pytest.approx(0.5)


class TestClassifyDeficiency:
    def test_from_metrics(self, protan_metrics):
        profile = classify_deficiency(protan_metrics)
        assert profile.axis == "protan"
        assert profile.severity == pytest.approx(0.45)
        assert profile.scores["protan"] == pytest.approx(18.0)

    def test_missing_channel(self, protan_metrics):
        del protan_metrics["S"]
        with pytest.raises(KeyError):
            classify_deficiency(protan_metrics)


class TestDetectType:
    def test_protan(self, protan_metrics):
        assert detect_type(protan_metrics) == "protan"

    def test_all_normal(self, normal_metrics):
        assert detect_type(normal_metrics) == "normal"

    def test_tied_worst_is_normal(self):
        metrics = {
            "L": metrics_from_threshold(30),
            "M": metrics_from_threshold(30),
            "S": metrics_from_threshold(5),
        }
        assert detect_type(metrics) == "normal"

    def test_tritan(self):
        metrics = {
            "L": metrics_from_threshold(4),
            "M": metrics_from_threshold(5),
            "S": metrics_from_threshold(40),
        }
        assert detect_type(metrics) == "tritan"


class TestCompareAxes:
    def test_mismatch(self):
        comparison = compare_axes("tritan", "protan")
        assert comparison.mismatch

    def test_match(self):
        assert not compare_axes("Protanopia", "protan").mismatch

    def test_no_declaration(self):
        comparison = compare_axes(None, "protan")
        assert comparison.declared is None
        assert not comparison.mismatch

    def test_normal_detection_is_not_mismatch(self):
        assert not compare_axes("deutan", "normal").mismatch
