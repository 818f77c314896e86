"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import sys
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import Settings, get_settings  # noqa: E402
from geolearn.adaptive.estimators import (  # noqa: E402
    BayesianKnowledgeTracingEstimator,
    FrequencyThresholdEstimator,
)
from geolearn.core.registry import DomainRegistry  # noqa: E402


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "learning: Learner-model behaviour tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        path = str(item.fspath)
        if "unit" in path:
            item.add_marker(pytest.mark.unit)
        elif "learning" in path:
            item.add_marker(pytest.mark.learning)
        elif "smoke" in path:
            item.add_marker(pytest.mark.smoke)


class FixedRandom:
    """Random source that replays a fixed sequence of draws."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def random(self) -> float:
        if self.calls >= len(self.values):
            raise AssertionError("FixedRandom exhausted")
        value = self.values[self.calls]
        self.calls += 1
        return value


class ForbiddenRandom:
    """Random source that fails the test if it is consulted."""

    def random(self) -> float:
        raise AssertionError("random source must not be used")


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Keep GEOLEARN_* variables from the host out of tests."""
    import os

    for key in list(os.environ):
        if key.upper().startswith("GEOLEARN_"):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings():
    """Default settings without reading a .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def regions():
    """The default four-region registry."""
    return DomainRegistry(["Europe", "Africa", "Asia", "Americas"])


@pytest.fixture
def two_domains():
    """Minimal registry for scenario tests."""
    return DomainRegistry(["A", "B"])


@pytest.fixture
def frequency():
    """Frequency-Threshold estimator with default tuning."""
    return FrequencyThresholdEstimator()


@pytest.fixture
def bkt():
    """BKT estimator with default parameters."""
    return BayesianKnowledgeTracingEstimator()


@pytest.fixture
def fixed_random():
    """Factory for FixedRandom sources."""
    return FixedRandom


@pytest.fixture
def forbidden_random():
    """Random source that must never be consulted."""
    return ForbiddenRandom()
