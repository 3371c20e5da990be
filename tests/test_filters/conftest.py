"""Shared fixtures for filter tests."""

import pytest

from conetune.core.models import DeficiencyProfile
from conetune.filters.parametric import build_filter_parameters


@pytest.fixture
def protan_profile() -> DeficiencyProfile:
    return DeficiencyProfile(
        axis="protan",
        severity=0.45,
        scores={"protan": 18.0, "deutan": 0.0, "tritan": 0.0},
        detected_axis="protan",
    )


@pytest.fixture
def protan_params(protan_profile):
    return build_filter_parameters(protan_profile)
