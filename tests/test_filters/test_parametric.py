"""Tests for conetune.filters.parametric."""

import pytest

from conetune.color.space import hex_to_hsl
from conetune.core.models import DeficiencyProfile, FilterParameters
from conetune.filters.parametric import (
    apply_filter,
    build_filter_parameters,
    correction_strength,
    hue_region,
    make_filter,
)
from conetune.profile.profiler import classify_scores, deficiency_score_from_outcomes


class TestCorrectionStrength:
    def test_zero(self):
        assert correction_strength(0.0) == (0.0, 0.0, 0.0)

    def test_mid(self):
        angle, sat, lum = correction_strength(0.45)
        assert angle == pytest.approx(10.8)
        assert sat == pytest.approx(0.36)
        assert lum == pytest.approx(0.108)

    def test_caps(self):
        angle, sat, lum = correction_strength(1.0)
        assert angle == pytest.approx(24.0)
        assert sat == pytest.approx(0.8)
        assert lum == pytest.approx(0.24)


class TestBuildFilterParameters:
    def test_protan_shifts(self, protan_params):
        assert protan_params.axis == "red"
        assert protan_params.hue_shift == {"red": 10.8, "green": -6.48, "blue": 0.0}
        assert protan_params.saturation_boost == {"red": pytest.approx(0.36)}
        assert protan_params.luminance_gain == {"red": pytest.approx(0.108)}

    def test_deutan_full(self):
        params = build_filter_parameters(DeficiencyProfile("deutan", 1.0))
        assert params.axis == "green"
        assert params.hue_shift == {"red": -14.4, "green": 24.0, "blue": 0.0}

    def test_tritan(self):
        params = build_filter_parameters(DeficiencyProfile("tritan", 0.5))
        assert params.hue_shift == {"red": -3.6, "green": -3.6, "blue": 12.0}

    def test_zero_severity_is_identity_shift(self):
        params = build_filter_parameters(DeficiencyProfile("protan", 0.0))
        assert set(params.hue_shift.values()) == {0.0}

    def test_provenance_from_cone_keys(self, protan_profile):
        params = build_filter_parameters(protan_profile, thresholds={"L": 25, "M": 7, "S": 5})
        assert params.thresholds == {"red": 25.0, "green": 7.0, "blue": 5.0}

    def test_provenance_from_color_keys(self, protan_profile):
        params = build_filter_parameters(protan_profile, thresholds={"red": 25})
        assert params.thresholds == {"red": 25.0}

    def test_unknown_axis(self):
        with pytest.raises(KeyError):
            build_filter_parameters(DeficiencyProfile("magenta", 0.5))


class TestHueRegion:
    @pytest.mark.parametrize("hue,region", [
        (0, "red"), (59.9, "red"), (60, "green"), (179.9, "green"),
        (180, "blue"), (299.9, "blue"), (300, "red"), (360, "red"), (-30, "red"),
    ])
    def test_buckets(self, hue, region):
        assert hue_region(hue) == region


class TestApplyFilter:
    @pytest.mark.parametrize("gray", ["#808080", "#ffffff", "#000000"])
    def test_achromatic_passthrough(self, protan_params, gray):
        assert apply_filter(gray, protan_params) == gray

    def test_no_params_passthrough(self):
        assert apply_filter("#336699", None) == "#336699"

    def test_unknown_axis_fails_open(self):
        params = FilterParameters("purple", 0.5, {"red": 10.0})
        assert apply_filter("#ff0000", params) == "#ff0000"

    def test_red_rotated_and_boosted(self, protan_params):
        out = apply_filter("#ff0000", protan_params)
        h, s, l = hex_to_hsl(out)
        assert h == pytest.approx(10.8, abs=1.0)
        assert l > 0.5

    def test_green_counter_shift_without_boost(self, protan_params):
        h, _, l = hex_to_hsl(apply_filter("#00ff00", protan_params))
        assert h == pytest.approx(120 - 6.48, abs=1.0)
        assert l == pytest.approx(0.5, abs=0.01)

    def test_blue_untouched_for_protan(self, protan_params):
        assert apply_filter("#0000ff", protan_params) == "#0000ff"

    def test_output_is_canonical_hex(self, protan_params):
        out = apply_filter("#FF8800", protan_params)
        assert out.startswith("#") and len(out) == 7 and out == out.lower()

    def test_deterministic(self, protan_params):
        assert apply_filter("#c04020", protan_params) == apply_filter("#c04020", protan_params)

    def test_make_filter(self, protan_params):
        render = make_filter(protan_params)
        assert render("#ff0000") == apply_filter("#ff0000", protan_params)


class TestEndToEnd:
    def test_outcomes_to_filter(self):
        scores = {
            "protan": deficiency_score_from_outcomes(["miss"] * 3 + ["correct"] * 3),
            "deutan": deficiency_score_from_outcomes(["correct"] * 6),
            "tritan": deficiency_score_from_outcomes(["correct"] * 6),
        }
        profile = classify_scores(scores)
        assert profile.axis == "protan"
        assert profile.severity > 0

        params = build_filter_parameters(profile)
        assert params.hue_shift["red"] != 0.0
        assert params.hue_shift["blue"] == 0.0
