"""
Difficulty Selector.

Maps a domain's current state to the difficulty of the next question. Two
policies exist, one per estimator:

- FrequencyDifficultyPolicy reads answer counts and holds the stored
  difficulty until enough answers have been seen.
- BayesianDifficultyPolicy reads the latent mastery belief directly.

The thresholds are tuning defaults, overridable through Settings.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from geolearn.core.profile import LearnerProfile, PerDomainState
from geolearn.core.registry import DifficultyLevel


class DifficultyPolicy(Protocol):
    """Interface for difficulty policies."""

    def determine(self, state: PerDomainState) -> DifficultyLevel:
        """Return the difficulty for a single domain state."""
        ...


@dataclass(frozen=True)
class FrequencyDifficultyPolicy:
    """
    Accuracy-threshold difficulty.

    Formula: accuracy = correct / (correct + incorrect + 1)

    HARD needs both accuracy >= hard_accuracy and correct > hard_min_correct;
    MEDIUM likewise with the medium thresholds. With cold_start_attempts or
    fewer answers the stored difficulty is returned unchanged.
    """

    cold_start_attempts: int = 3
    hard_accuracy: float = 0.8
    hard_min_correct: int = 5
    medium_accuracy: float = 0.5
    medium_min_correct: int = 3

    def smoothed_accuracy(self, state: PerDomainState) -> float:
        return state.correct_count / (state.attempts + 1)

    def determine(self, state: PerDomainState) -> DifficultyLevel:
        if state.attempts <= self.cold_start_attempts:
            return state.current_difficulty

        accuracy = self.smoothed_accuracy(state)
        if accuracy >= self.hard_accuracy and state.correct_count > self.hard_min_correct:
            return DifficultyLevel.HARD
        if accuracy >= self.medium_accuracy and state.correct_count > self.medium_min_correct:
            return DifficultyLevel.MEDIUM
        return DifficultyLevel.EASY


@dataclass(frozen=True)
class BayesianDifficultyPolicy:
    """
    Belief-threshold difficulty.

    States without a belief (profiles started by a count-only estimator) are
    read as holding the prior.
    """

    hard_belief: float = 0.8
    medium_belief: float = 0.5
    prior: float = 0.2

    def determine(self, state: PerDomainState) -> DifficultyLevel:
        belief = self.prior if state.mastery_belief is None else state.mastery_belief
        if belief >= self.hard_belief:
            return DifficultyLevel.HARD
        if belief >= self.medium_belief:
            return DifficultyLevel.MEDIUM
        return DifficultyLevel.EASY


def determine_difficulty(
    profile: LearnerProfile, domain: str, policy: DifficultyPolicy
) -> DifficultyLevel:
    """
    Compute the difficulty for a domain without modifying the profile.

    Args:
        profile: Current learner profile
        domain: Domain to evaluate
        policy: Policy matching the estimator that produced the profile

    Returns:
        DifficultyLevel for the next question in this domain

    Raises:
        UnknownDomainError: If the domain is not in the profile
    """
    return policy.determine(profile.require(domain))
