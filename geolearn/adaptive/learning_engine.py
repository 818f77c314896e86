"""
Learning Engine: orchestration layer for one quiz session.

Wires the estimator, difficulty selector, domain selector and badge evaluator
into the two calls a session needs:

    result = engine.record_answer(profile, outcome)   # after each answer
    request = engine.next_question(result.profile)    # before each question

The engine holds configuration only. The profile is owned by the caller and
threaded through every call, so one engine can serve any number of
independent learners.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from loguru import logger

from config import Settings, get_settings
from geolearn.adaptive.badges import compute_badges, newly_earned
from geolearn.adaptive.difficulty import determine_difficulty
from geolearn.adaptive.domain_selector import RandomSource, domain_weights, select_next_domain
from geolearn.adaptive.estimators import (
    BayesianKnowledgeTracingEstimator,
    EstimatorKind,
    FrequencyThresholdEstimator,
    MasteryEstimator,
)
from geolearn.core.profile import LearnerProfile, total_correct, total_points, with_difficulty
from geolearn.core.registry import DEFAULT_REGISTRY, REGION_MAX, DifficultyLevel, DomainRegistry


@dataclass(frozen=True)
class AnswerOutcome:
    """One resolved answer, as reported by the answer-capture collaborator."""

    domain: str
    was_correct: bool
    difficulty_used: DifficultyLevel | str = DifficultyLevel.EASY


@dataclass(frozen=True)
class QuestionRequest:
    """Parameters for the question-generation collaborator."""

    domain: str
    difficulty: DifficultyLevel


@dataclass(frozen=True)
class AnswerResult:
    """Outcome of recording an answer."""

    profile: LearnerProfile
    domain: str
    previous_difficulty: DifficultyLevel
    new_difficulty: DifficultyLevel
    new_badges: frozenset[str] = field(default_factory=frozenset)

    @property
    def difficulty_changed(self) -> bool:
        return self.previous_difficulty is not self.new_difficulty


def create_estimator(kind: EstimatorKind | str, settings: Settings | None = None) -> MasteryEstimator:
    """
    Build an estimator from settings.

    Args:
        kind: EstimatorKind or its string value ("frequency", "bkt")
        settings: Settings instance (defaults to get_settings())

    Returns:
        Configured MasteryEstimator
    """
    settings = settings or get_settings()
    kind = EstimatorKind(kind)
    if kind is EstimatorKind.BKT:
        return BayesianKnowledgeTracingEstimator(
            params=settings.get_bkt_parameters(),
            points=settings.get_point_values(),
            difficulty_policy=settings.get_bayesian_policy(),
        )
    return FrequencyThresholdEstimator(
        points=settings.get_point_values(),
        difficulty_policy=settings.get_frequency_policy(),
        selection_ceiling=settings.selection_ceiling,
    )


class LearningEngine:
    """
    Session-level facade over the learner-modeling components.

    Recording an answer runs the estimator update, recomputes the domain's
    difficulty and writes it back, then reports badges earned by that answer.
    """

    def __init__(
        self,
        estimator: MasteryEstimator,
        registry: DomainRegistry = DEFAULT_REGISTRY,
        region_max: int = REGION_MAX,
        rng: RandomSource | None = None,
    ):
        self.estimator = estimator
        self.registry = registry
        self.region_max = region_max
        self.rng = rng

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        kind: EstimatorKind | str | None = None,
        rng: RandomSource | None = None,
    ) -> LearningEngine:
        """Build an engine from configuration, optionally overriding the estimator."""
        settings = settings or get_settings()
        estimator = create_estimator(kind or settings.estimator, settings)
        return cls(
            estimator=estimator,
            registry=settings.get_registry(),
            region_max=settings.region_max,
            rng=rng,
        )

    def start_profile(self) -> LearnerProfile:
        """Create the initial profile for a new session."""
        return self.estimator.initialize(self.registry)

    def record_answer(self, profile: LearnerProfile, outcome: AnswerOutcome) -> AnswerResult:
        """
        Apply one answer to the profile.

        Raises:
            UnknownDomainError: If the outcome names an unregistered domain
            InvalidDifficultyError: If the outcome carries an unknown difficulty
        """
        domain = self.registry.require(outcome.domain)
        badges_before = self.badges(profile)
        previous = profile.require(domain).current_difficulty

        updated = self.estimator.update(profile, domain, outcome.was_correct, outcome.difficulty_used)
        new_level = determine_difficulty(updated, domain, self.estimator.difficulty_policy)
        updated = with_difficulty(updated, domain, new_level)

        earned = newly_earned(badges_before, self.badges(updated))
        if new_level is not previous:
            logger.info(f"{domain}: difficulty {previous.value} -> {new_level.value}")
        for badge in sorted(earned):
            logger.info(f"Badge earned: {badge}")

        return AnswerResult(
            profile=updated,
            domain=domain,
            previous_difficulty=previous,
            new_difficulty=new_level,
            new_badges=earned,
        )

    def next_question(self, profile: LearnerProfile) -> QuestionRequest:
        """Choose the next domain and the difficulty to ask it at."""
        domain = select_next_domain(profile, self.registry, self.estimator.selection_weight, self.rng)
        return QuestionRequest(domain=domain, difficulty=profile.require(domain).current_difficulty)

    def weights(self, profile: LearnerProfile) -> dict[str, float]:
        """Current selection weights, in registry order."""
        return dict(domain_weights(profile, self.registry, self.estimator.selection_weight))

    def badges(self, profile: LearnerProfile) -> frozenset[str]:
        """Domains the learner has mastered."""
        return compute_badges(profile, self.registry, self.region_max)

    def summary(self, profile: LearnerProfile) -> dict[str, Any]:
        """Totals for progress display."""
        badges = self.badges(profile)
        return {
            "estimator": self.estimator.kind.value,
            "total_correct": total_correct(profile),
            "total_points": total_points(profile),
            "badges": [domain for domain in self.registry if domain in badges],
            "region_max": self.region_max,
        }
