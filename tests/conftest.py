"""
Pytest configuration and fixtures for railcheck tests

This module provides shared fixtures for the unit tests.
"""
import os

import pytest

from railcheck.core.engine import ReferenceData, ReferenceDataLoader
from railcheck.core.models import Column


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that don't require external services"
    )


# =======================
# FILE FIXTURES
# =======================

@pytest.fixture(scope="session")
def test_data_dir() -> str:
    """
    Get path to test data fixtures directory

    Returns:
        Path to tests/fixtures directory
    """
    return os.path.join(os.path.dirname(__file__), "fixtures")


@pytest.fixture(scope="session")
def reference_data_path(test_data_dir) -> str:
    return os.path.join(test_data_dir, "reference_data.yaml")


@pytest.fixture(scope="session")
def extra_rules_path(test_data_dir) -> str:
    return os.path.join(test_data_dir, "extra_rules.yaml")


@pytest.fixture
def reference_data(reference_data_path) -> ReferenceData:
    """Reference data loaded from tests/fixtures/reference_data.yaml"""
    return ReferenceDataLoader(reference_data_path).load()


# =======================
# ROW FIXTURES
# =======================

@pytest.fixture
def straight_gauge_row() -> dict:
    """
    A straight-track gauge row that passes every gauge rule

    Returns:
        Row mapping column name to value, mixing numbers and numeric strings
    """
    return {
        "ExtraCol1": "1",
        "ExtraCol2": "0",
        "SlopeEndCol": "2",
        "SwitchTipCol": 1,
        "SwitchMiddleCol": "0.5",
        "SwitchHeelCol": "3",
        "LeadCurveFrontCol": "-1",
        "LeadCurveMiddleCol": "2",
        "LeadCurveRearCol": 4,
        "FrogFrontCol": "0",
        "FrogMiddleCol": "1",
        "FrogRearCol": "-2",
        "CheckIntervalCol": "92",
        "GuardDistanceCol": "47",
        "FirstFootStraightBackCol": "1",
        "SecondFootStraightBackCol": "0",
    }


@pytest.fixture
def straight_horizontal_row() -> dict:
    """A straight-track horizontal row that passes every horizontal rule"""
    return {
        "ExtraCol1": "1",
        "ExtraCol2": "2",
        "SlopeEndCol": "0",
        "SwitchTipCol": "-1",
        "SwitchHeelCol": "3",
        "LeadCurveFrontCol": "2",
        "LeadCurveMiddleCol": "4",
        "LeadCurveRearCol": "1",
        "FrogFrontCol": "0",
        "FrogRearCol": "-3",
        "FirstFootStraightBackCol": "5",
        "SecondFootStraightBackCol": "-5",
    }


@pytest.fixture
def make_columns():
    """Factory building column metadata; names listed in `hidden` are marked hidden"""

    def _make(*names: str, hidden: tuple[str, ...] = ()) -> list[Column]:
        return [Column(name=name, label=name, hidden=name in hidden) for name in names]

    return _make
