"""
Core Module - Shared domain models.

Components:
- registry: Domain Registry, DifficultyLevel, point values
- profile: Immutable learner state (PerDomainState, LearnerProfile)
- errors: Engine error taxonomy

All engine modules (geolearn.adaptive, geolearn.cli) import shared concepts
from here rather than redefining them.
"""

from geolearn.core.errors import (
    EngineError,
    InvalidDifficultyError,
    RegistryError,
    UnknownDomainError,
)
from geolearn.core.profile import (
    LearnerProfile,
    PerDomainState,
    initialize,
    total_correct,
    total_points,
    with_difficulty,
)
from geolearn.core.registry import (
    DEFAULT_POINTS,
    DEFAULT_REGIONS,
    DEFAULT_REGISTRY,
    REGION_MAX,
    DifficultyLevel,
    DomainRegistry,
    PointValues,
)

__all__ = [
    # Registry
    "DEFAULT_POINTS",
    "DEFAULT_REGIONS",
    "DEFAULT_REGISTRY",
    "REGION_MAX",
    "DifficultyLevel",
    "DomainRegistry",
    "PointValues",
    # State
    "LearnerProfile",
    "PerDomainState",
    "initialize",
    "total_correct",
    "total_points",
    "with_difficulty",
    # Errors
    "EngineError",
    "InvalidDifficultyError",
    "RegistryError",
    "UnknownDomainError",
]
