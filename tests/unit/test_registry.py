"""
Unit tests for the Domain Registry and difficulty constants.
"""

import pytest

from geolearn.core.errors import InvalidDifficultyError, RegistryError, UnknownDomainError
from geolearn.core.registry import (
    DEFAULT_REGISTRY,
    DifficultyLevel,
    DomainRegistry,
    PointValues,
)


class TestDifficultyLevel:
    def test_total_ordering(self):
        assert DifficultyLevel.EASY < DifficultyLevel.MEDIUM < DifficultyLevel.HARD
        assert DifficultyLevel.HARD >= DifficultyLevel.MEDIUM
        assert max(DifficultyLevel) is DifficultyLevel.HARD
        assert sorted([DifficultyLevel.HARD, DifficultyLevel.EASY, DifficultyLevel.MEDIUM]) == [
            DifficultyLevel.EASY,
            DifficultyLevel.MEDIUM,
            DifficultyLevel.HARD,
        ]

    def test_coerce_accepts_labels(self):
        assert DifficultyLevel.coerce("hard") is DifficultyLevel.HARD
        assert DifficultyLevel.coerce(" Medium ") is DifficultyLevel.MEDIUM
        assert DifficultyLevel.coerce(DifficultyLevel.EASY) is DifficultyLevel.EASY

    @pytest.mark.parametrize("value", ["extreme", "", 2, None])
    def test_coerce_rejects_unknown(self, value):
        with pytest.raises(InvalidDifficultyError):
            DifficultyLevel.coerce(value)

    def test_invalid_difficulty_is_value_error(self):
        with pytest.raises(ValueError):
            DifficultyLevel.coerce("impossible")


class TestPointValues:
    def test_defaults(self):
        points = PointValues()
        assert points.for_level(DifficultyLevel.EASY) == 1
        assert points.for_level("medium") == 2
        assert points.for_level(DifficultyLevel.HARD) == 3

    def test_negative_points_rejected(self):
        with pytest.raises(ValueError):
            PointValues(hard=-1)


class TestDomainRegistry:
    def test_default_regions_in_order(self):
        assert DEFAULT_REGISTRY.domains == ("Europe", "Africa", "Asia", "Americas")
        assert DEFAULT_REGISTRY.first == "Europe"
        assert len(DEFAULT_REGISTRY) == 4

    def test_iteration_preserves_order(self):
        registry = DomainRegistry(["Zeta", "Alpha", "Mu"])
        assert list(registry) == ["Zeta", "Alpha", "Mu"]

    def test_empty_registry_rejected(self):
        with pytest.raises(RegistryError):
            DomainRegistry([])

    def test_duplicate_domain_rejected(self):
        with pytest.raises(RegistryError, match="Asia"):
            DomainRegistry(["Asia", "Europe", "Asia"])

    def test_require_unknown_domain(self):
        with pytest.raises(UnknownDomainError) as exc_info:
            DEFAULT_REGISTRY.require("Antarctica")
        assert exc_info.value.domain == "Antarctica"
        assert "Antarctica" in str(exc_info.value)

    def test_registries_compare_by_contents(self):
        assert DomainRegistry(["A", "B"]) == DomainRegistry(("A", "B"))
        assert DomainRegistry(["A", "B"]) != DomainRegistry(["B", "A"])
