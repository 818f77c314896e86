"""
Mastery Estimators.

Both estimators share one contract: take a profile and an observed outcome,
return a new profile in which only the answered domain's entry differs.

FrequencyThresholdEstimator:
    Tracks raw correct/incorrect counts only. Difficulty and selection
    weights are derived from the counts.

BayesianKnowledgeTracingEstimator:
    Additionally tracks P(L), the probability the learner has mastered the
    domain, updated each answer with Bayes' rule followed by a learning
    transition:

        correct:   P(L|obs) = P(L)(1-S) / [P(L)(1-S) + (1-P(L))G]
        incorrect: P(L|obs) = P(L)S / [P(L)S + (1-P(L))(1-G)]
        P(L)next = P(L|obs) + (1 - P(L|obs))T

    where G = guess, S = slip, T = learning-transition probability.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import replace
from enum import Enum
from typing import Protocol

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from geolearn.adaptive.difficulty import (
    BayesianDifficultyPolicy,
    DifficultyPolicy,
    FrequencyDifficultyPolicy,
)
from geolearn.core.profile import LearnerProfile, PerDomainState, initialize
from geolearn.core.registry import DEFAULT_POINTS, DifficultyLevel, PointValues


class EstimatorKind(str, Enum):
    """Estimator strategy chosen at session start."""

    FREQUENCY = "frequency"
    BKT = "bkt"


class BKTParameters(BaseModel):
    """Bayesian Knowledge Tracing parameters."""

    model_config = ConfigDict(frozen=True)

    p_l0: float = Field(default=0.2, ge=0.0, le=1.0, description="Initial mastery probability")
    p_t: float = Field(default=0.15, gt=0.0, lt=1.0, description="Learning-transition probability")
    p_g: float = Field(default=0.25, gt=0.0, lt=1.0, description="Guess probability")
    p_s: float = Field(default=0.1, gt=0.0, lt=1.0, description="Slip probability")


# ============================================================================
# BKT Formulas
# ============================================================================


def clamp_probability(value: float, context: str = "mastery_belief") -> float:
    """
    Force a computed probability into [0, 1].

    NaN maps to 0.0. Any correction is logged as a warning since it means a
    degenerate parameter set reached the formulas.
    """
    if math.isnan(value):
        logger.warning(f"{context} evaluated to NaN; clamping to 0.0")
        return 0.0
    if value < 0.0 or value > 1.0:
        clamped = min(1.0, max(0.0, value))
        logger.warning(f"{context} {value!r} outside [0, 1]; clamping to {clamped}")
        return clamped
    return value


def bkt_evidence(p_l: float, was_correct: bool, params: BKTParameters) -> float:
    """
    Condition P(L) on one observed answer.

    A zero denominator can only come from degenerate guess/slip values; the
    prior is returned unchanged in that case.
    """
    if was_correct:
        numerator = p_l * (1.0 - params.p_s)
        denominator = numerator + (1.0 - p_l) * params.p_g
    else:
        numerator = p_l * params.p_s
        denominator = numerator + (1.0 - p_l) * (1.0 - params.p_g)

    if denominator <= 0.0:
        logger.warning(
            f"BKT evidence denominator is {denominator!r} (p_l={p_l}, correct={was_correct}); keeping prior"
        )
        return clamp_probability(p_l)
    return clamp_probability(numerator / denominator, "posterior")


def bkt_transition(p_l: float, params: BKTParameters) -> float:
    """Apply the learning transition to a posterior."""
    return clamp_probability(p_l + (1.0 - p_l) * params.p_t)


def bkt_update(p_l: float, was_correct: bool, params: BKTParameters) -> float:
    """Full BKT step: evidence update then learning transition."""
    p_l = clamp_probability(p_l, "prior")
    return bkt_transition(bkt_evidence(p_l, was_correct, params), params)


# ============================================================================
# Estimator Interface
# ============================================================================


class MasteryEstimator(Protocol):
    """Interface for mastery estimators."""

    kind: EstimatorKind
    difficulty_policy: DifficultyPolicy

    def initialize(self, domains: Iterable[str]) -> LearnerProfile:
        """Create a fresh profile for this estimator."""
        ...

    def update(
        self,
        profile: LearnerProfile,
        domain: str,
        was_correct: bool,
        difficulty_used: DifficultyLevel | str,
    ) -> LearnerProfile:
        """Return a new profile reflecting one observed answer."""
        ...

    def selection_weight(self, state: PerDomainState) -> float:
        """Weight of a domain in next-domain selection (higher = weaker)."""
        ...


class BaseEstimator(ABC):
    """
    Shared counter bookkeeping for both estimators.

    Subclasses supply the difficulty policy and selection weight, and
    override _update_belief to track their own latent state.
    """

    kind: EstimatorKind

    def __init__(self, points: PointValues = DEFAULT_POINTS, difficulty_policy: DifficultyPolicy | None = None):
        self.points = points
        self.difficulty_policy = difficulty_policy or self._default_policy()

    @abstractmethod
    def _default_policy(self) -> DifficultyPolicy:
        ...

    def _initial_belief(self) -> float | None:
        return None

    def _update_belief(self, state: PerDomainState, was_correct: bool) -> float | None:
        return state.mastery_belief

    def initialize(self, domains: Iterable[str]) -> LearnerProfile:
        return initialize(domains, prior=self._initial_belief())

    def update(
        self,
        profile: LearnerProfile,
        domain: str,
        was_correct: bool,
        difficulty_used: DifficultyLevel | str,
    ) -> LearnerProfile:
        """
        Record one answer outcome.

        Args:
            profile: Profile before the answer
            domain: Domain the question belonged to
            was_correct: Whether the learner answered correctly
            difficulty_used: Difficulty the question was asked at

        Returns:
            New LearnerProfile; the input profile is left untouched

        Raises:
            UnknownDomainError: If the domain is not in the profile
            InvalidDifficultyError: If difficulty_used is not a known level
        """
        state = profile.require(domain)
        level = DifficultyLevel.coerce(difficulty_used)

        if was_correct:
            updated = replace(
                state,
                correct_count=state.correct_count + 1,
                points=state.points + self.points.for_level(level),
                mastery_belief=self._update_belief(state, was_correct),
            )
        else:
            updated = replace(
                state,
                incorrect_count=state.incorrect_count + 1,
                mastery_belief=self._update_belief(state, was_correct),
            )

        logger.debug(
            f"[{self.kind.value}] {domain}: correct={was_correct} at {level.value} -> "
            f"{updated.correct_count}/{updated.attempts}, points={updated.points}"
        )
        return profile.with_state(domain, updated)

    @abstractmethod
    def selection_weight(self, state: PerDomainState) -> float:
        ...


# ============================================================================
# Implementations
# ============================================================================


class FrequencyThresholdEstimator(BaseEstimator):
    """
    Count-based estimator.

    Selection weight: max(0, selection_ceiling - correct_count), so a domain
    stops being favoured once it has selection_ceiling correct answers.
    """

    kind = EstimatorKind.FREQUENCY

    def __init__(
        self,
        points: PointValues = DEFAULT_POINTS,
        difficulty_policy: DifficultyPolicy | None = None,
        selection_ceiling: int = 10,
    ):
        super().__init__(points, difficulty_policy)
        self.selection_ceiling = selection_ceiling

    def _default_policy(self) -> DifficultyPolicy:
        return FrequencyDifficultyPolicy()

    def selection_weight(self, state: PerDomainState) -> float:
        return float(max(0, self.selection_ceiling - state.correct_count))


class BayesianKnowledgeTracingEstimator(BaseEstimator):
    """
    BKT estimator.

    Selection weight: max(0, 1 - mastery_belief). A state with no belief is
    treated as holding the prior P(L0).
    """

    kind = EstimatorKind.BKT

    def __init__(
        self,
        params: BKTParameters | None = None,
        points: PointValues = DEFAULT_POINTS,
        difficulty_policy: DifficultyPolicy | None = None,
    ):
        self.params = params or BKTParameters()
        super().__init__(points, difficulty_policy)

    def _default_policy(self) -> DifficultyPolicy:
        return BayesianDifficultyPolicy(prior=self.params.p_l0)

    def _initial_belief(self) -> float:
        return self.params.p_l0

    def belief(self, state: PerDomainState) -> float:
        """Mastery belief of a state, falling back to the prior."""
        return self.params.p_l0 if state.mastery_belief is None else state.mastery_belief

    def _update_belief(self, state: PerDomainState, was_correct: bool) -> float:
        return bkt_update(self.belief(state), was_correct, self.params)

    def selection_weight(self, state: PerDomainState) -> float:
        return max(0.0, 1.0 - self.belief(state))
