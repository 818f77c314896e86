"""
Learner State Store.

Holds one learner's per-domain performance as immutable values. Nothing in
this module mutates a state or profile in place: every change produces a new
object, and unchanged domain entries are shared between the old and new
profile.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Any

from geolearn.core.errors import UnknownDomainError
from geolearn.core.registry import DifficultyLevel


@dataclass(frozen=True)
class PerDomainState:
    """
    Performance counters and belief state for a single domain.

    mastery_belief is None for estimators that work from counts alone.
    """

    correct_count: int = 0
    incorrect_count: int = 0
    points: int = 0
    current_difficulty: DifficultyLevel = DifficultyLevel.EASY
    mastery_belief: float | None = None

    def __post_init__(self):
        if self.correct_count < 0 or self.incorrect_count < 0:
            raise ValueError("Answer counts must be non-negative")
        if self.points < 0:
            raise ValueError("Points must be non-negative")
        if self.mastery_belief is not None and not 0.0 <= self.mastery_belief <= 1.0:
            raise ValueError(f"mastery_belief must be within [0, 1], got {self.mastery_belief}")
        object.__setattr__(self, "current_difficulty", DifficultyLevel.coerce(self.current_difficulty))

    @property
    def attempts(self) -> int:
        """Number of outcomes observed for this domain."""
        return self.correct_count + self.incorrect_count

    @property
    def accuracy(self) -> float:
        """Raw correct ratio (0.0 before the first answer)."""
        if self.attempts == 0:
            return 0.0
        return self.correct_count / self.attempts

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary for display layers."""
        data: dict[str, Any] = {
            "correct": self.correct_count,
            "incorrect": self.incorrect_count,
            "points": self.points,
            "difficulty": self.current_difficulty.value,
        }
        if self.mastery_belief is not None:
            data["mastery_belief"] = self.mastery_belief
        return data


class LearnerProfile(Mapping[str, PerDomainState]):
    """
    Immutable mapping from every registered domain to its PerDomainState.

    Iteration follows registry order. Looking up a domain that is not in the
    profile raises UnknownDomainError rather than returning a default.
    """

    __slots__ = ("_states",)

    def __init__(self, states: Mapping[str, PerDomainState] | Iterable[tuple[str, PerDomainState]]):
        self._states = MappingProxyType(dict(states))

    def __getitem__(self, domain: str) -> PerDomainState:
        try:
            return self._states[domain]
        except KeyError:
            raise UnknownDomainError(domain, tuple(self._states)) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._states)

    def __len__(self) -> int:
        return len(self._states)

    def __repr__(self) -> str:
        return f"LearnerProfile({dict(self._states)!r})"

    @property
    def domains(self) -> tuple[str, ...]:
        return tuple(self._states)

    def require(self, domain: str) -> PerDomainState:
        """Return the state for a domain, raising UnknownDomainError if absent."""
        return self[domain]

    def with_state(self, domain: str, state: PerDomainState) -> LearnerProfile:
        """
        Return a new profile with one domain's state replaced.

        Raises:
            UnknownDomainError: If the domain is not already in the profile
        """
        self.require(domain)
        states = dict(self._states)
        states[domain] = state
        return LearnerProfile(states)

    def to_dict(self) -> dict[str, dict[str, Any]]:
        """Snapshot for progress display."""
        return {domain: state.to_dict() for domain, state in self._states.items()}


# ============================================================================
# Store operations
# ============================================================================


def initialize(domains: Iterable[str], prior: float | None = None) -> LearnerProfile:
    """
    Create a fresh profile with zeroed counters for every domain.

    Args:
        domains: Registry (or any iterable of domain names) in display order
        prior: Initial mastery belief, or None for count-only estimators

    Returns:
        LearnerProfile with difficulty EASY everywhere
    """
    state = PerDomainState(mastery_belief=prior)
    return LearnerProfile((domain, state) for domain in domains)


def with_difficulty(
    profile: LearnerProfile, domain: str, difficulty: DifficultyLevel | str
) -> LearnerProfile:
    """Write a recomputed difficulty back into the profile."""
    state = profile.require(domain)
    level = DifficultyLevel.coerce(difficulty)
    if state.current_difficulty is level:
        return profile
    return profile.with_state(domain, replace(state, current_difficulty=level))


def total_correct(profile: LearnerProfile) -> int:
    """Correct answers summed across all domains."""
    return sum(state.correct_count for state in profile.values())


def total_points(profile: LearnerProfile) -> int:
    """Points summed across all domains."""
    return sum(state.points for state in profile.values())
