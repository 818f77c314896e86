"""
Domain Registry and difficulty constants.

The registry is the fixed, ordered set of knowledge domains a learner is
quizzed on. Order matters: the domain selector walks domains in registry
order and falls back to the first one when every weight is zero.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum

from geolearn.core.errors import InvalidDifficultyError, RegistryError, UnknownDomainError


class DifficultyLevel(str, Enum):
    """
    Question difficulty, totally ordered EASY < MEDIUM < HARD.

    Values match the labels handed to the question-generation collaborator.
    """

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def rank(self) -> int:
        """Position in the difficulty ordering (0 = easiest)."""
        return _DIFFICULTY_ORDER.index(self)

    @property
    def display_name(self) -> str:
        """Human-readable name."""
        return self.value.title()

    @classmethod
    def coerce(cls, value: DifficultyLevel | str) -> DifficultyLevel:
        """
        Convert a label or enum member to a DifficultyLevel.

        Raises:
            InvalidDifficultyError: If the value is not a known level
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidDifficultyError(value)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, DifficultyLevel):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, DifficultyLevel):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, DifficultyLevel):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, DifficultyLevel):
            return NotImplemented
        return self.rank >= other.rank


_DIFFICULTY_ORDER = (DifficultyLevel.EASY, DifficultyLevel.MEDIUM, DifficultyLevel.HARD)


# ============================================================================
# Defaults
# ============================================================================

DEFAULT_REGIONS: tuple[str, ...] = ("Europe", "Africa", "Asia", "Americas")
REGION_MAX = 15  # Correct answers needed for a region badge


@dataclass(frozen=True)
class PointValues:
    """Points awarded for a correct answer at each difficulty."""

    easy: int = 1
    medium: int = 2
    hard: int = 3

    def __post_init__(self):
        for level in _DIFFICULTY_ORDER:
            if getattr(self, level.value) < 0:
                raise ValueError(f"Point value for {level.value} must be non-negative")

    def for_level(self, level: DifficultyLevel | str) -> int:
        """Return the point value for a difficulty level."""
        return getattr(self, DifficultyLevel.coerce(level).value)


DEFAULT_POINTS = PointValues()


# ============================================================================
# Registry
# ============================================================================


class DomainRegistry:
    """
    Closed, ordered set of knowledge domains.

    Immutable once built; iteration always yields domains in the order they
    were registered.
    """

    __slots__ = ("_domains",)

    def __init__(self, domains: Iterable[str]):
        names = tuple(domains)
        if not names:
            raise RegistryError("Domain registry must contain at least one domain")
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise RegistryError(f"Duplicate domains in registry: {', '.join(duplicates)}")
        self._domains = names

    @property
    def domains(self) -> tuple[str, ...]:
        return self._domains

    @property
    def first(self) -> str:
        """Tie-break domain used when selection has nothing to weigh."""
        return self._domains[0]

    def require(self, domain: str) -> str:
        """
        Validate that a domain is registered.

        Raises:
            UnknownDomainError: If the domain is not in the registry
        """
        if domain not in self._domains:
            raise UnknownDomainError(domain, self._domains)
        return domain

    def __contains__(self, domain: object) -> bool:
        return domain in self._domains

    def __iter__(self) -> Iterator[str]:
        return iter(self._domains)

    def __len__(self) -> int:
        return len(self._domains)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DomainRegistry):
            return NotImplemented
        return self._domains == other._domains

    def __hash__(self) -> int:
        return hash(self._domains)

    def __repr__(self) -> str:
        return f"DomainRegistry({list(self._domains)!r})"


DEFAULT_REGISTRY = DomainRegistry(DEFAULT_REGIONS)
