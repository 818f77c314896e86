"""
Adaptive Learning Engine.

Components:
- MasteryEstimator: FrequencyThresholdEstimator and BayesianKnowledgeTracingEstimator
- Difficulty policies: map per-domain state to easy/medium/hard
- select_next_domain: weighted roulette choice of the next domain
- compute_badges: derive mastered domains from a profile

The session facade lives in geolearn.adaptive.learning_engine; it depends on
the root config module and is imported from there directly.
"""
from geolearn.adaptive.badges import badge_label, compute_badges, newly_earned
from geolearn.adaptive.difficulty import (
    BayesianDifficultyPolicy,
    DifficultyPolicy,
    FrequencyDifficultyPolicy,
    determine_difficulty,
)
from geolearn.adaptive.domain_selector import RandomSource, domain_weights, select_next_domain
from geolearn.adaptive.estimators import (
    BaseEstimator,
    BayesianKnowledgeTracingEstimator,
    BKTParameters,
    EstimatorKind,
    FrequencyThresholdEstimator,
    MasteryEstimator,
    bkt_update,
)

__all__ = [
    # Estimators
    "MasteryEstimator",
    "BaseEstimator",
    "FrequencyThresholdEstimator",
    "BayesianKnowledgeTracingEstimator",
    "BKTParameters",
    "EstimatorKind",
    "bkt_update",
    # Difficulty
    "DifficultyPolicy",
    "FrequencyDifficultyPolicy",
    "BayesianDifficultyPolicy",
    "determine_difficulty",
    # Selection
    "RandomSource",
    "domain_weights",
    "select_next_domain",
    # Badges
    "compute_badges",
    "newly_earned",
    "badge_label",
]
