"""
Configuration settings for the GeoLearn learner-modeling engine.

Uses Pydantic Settings for environment variable management with .env file support.
Every variable is prefixed with GEOLEARN_, e.g. GEOLEARN_REGION_MAX=20 or
GEOLEARN_DOMAINS='["Europe", "Asia"]'.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from geolearn.adaptive.difficulty import BayesianDifficultyPolicy, FrequencyDifficultyPolicy
from geolearn.adaptive.estimators import BKTParameters, EstimatorKind
from geolearn.core.errors import RegistryError
from geolearn.core.registry import DEFAULT_REGIONS, REGION_MAX, DomainRegistry, PointValues


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="GEOLEARN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Domain Registry
    # ========================================
    domains: list[str] = Field(
        default_factory=lambda: list(DEFAULT_REGIONS),
        description="Ordered knowledge domains (JSON list in the environment)",
    )
    region_max: int = Field(
        default=REGION_MAX,
        ge=1,
        description="Correct answers needed to earn a domain badge",
    )

    # ========================================
    # Scoring
    # ========================================
    points_easy: int = Field(default=1, ge=0, description="Points for a correct easy answer")
    points_medium: int = Field(default=2, ge=0, description="Points for a correct medium answer")
    points_hard: int = Field(default=3, ge=0, description="Points for a correct hard answer")

    # ========================================
    # Estimator
    # ========================================
    estimator: EstimatorKind = Field(
        default=EstimatorKind.FREQUENCY,
        description="Mastery estimator strategy: frequency or bkt",
    )
    selection_ceiling: int = Field(
        default=10,
        ge=0,
        description="Frequency selection weight is max(0, ceiling - correct)",
    )

    # ─── Frequency-Threshold difficulty ─────────────────────────────────────────
    cold_start_attempts: int = Field(
        default=3,
        ge=0,
        description="Answers seen before the stored difficulty may change",
    )
    hard_accuracy: float = Field(default=0.8, ge=0.0, le=1.0)
    hard_min_correct: int = Field(default=5, ge=0)
    medium_accuracy: float = Field(default=0.5, ge=0.0, le=1.0)
    medium_min_correct: int = Field(default=3, ge=0)

    # ─── Bayesian Knowledge Tracing ─────────────────────────────────────────────
    bkt_p_l0: float = Field(default=0.2, ge=0.0, le=1.0, description="Initial mastery probability")
    bkt_p_t: float = Field(default=0.15, gt=0.0, lt=1.0, description="Learning-transition probability")
    bkt_p_g: float = Field(default=0.25, gt=0.0, lt=1.0, description="Guess probability")
    bkt_p_s: float = Field(default=0.1, gt=0.0, lt=1.0, description="Slip probability")
    bkt_hard_belief: float = Field(default=0.8, ge=0.0, le=1.0)
    bkt_medium_belief: float = Field(default=0.5, ge=0.0, le=1.0)

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging verbosity level",
    )

    @field_validator("domains")
    @classmethod
    def _check_domains(cls, value: list[str]) -> list[str]:
        names = [name.strip() for name in value if name.strip()]
        try:
            DomainRegistry(names)
        except RegistryError as e:
            raise ValueError(str(e)) from e
        return names

    @model_validator(mode="after")
    def _check_thresholds(self) -> Settings:
        if self.medium_accuracy > self.hard_accuracy:
            raise ValueError("medium_accuracy must not exceed hard_accuracy")
        if self.bkt_medium_belief > self.bkt_hard_belief:
            raise ValueError("bkt_medium_belief must not exceed bkt_hard_belief")
        return self

    def get_registry(self) -> DomainRegistry:
        """Build the Domain Registry from configured domains."""
        return DomainRegistry(self.domains)

    def get_point_values(self) -> PointValues:
        return PointValues(easy=self.points_easy, medium=self.points_medium, hard=self.points_hard)

    def get_bkt_parameters(self) -> BKTParameters:
        return BKTParameters(p_l0=self.bkt_p_l0, p_t=self.bkt_p_t, p_g=self.bkt_p_g, p_s=self.bkt_p_s)

    def get_frequency_policy(self) -> FrequencyDifficultyPolicy:
        return FrequencyDifficultyPolicy(
            cold_start_attempts=self.cold_start_attempts,
            hard_accuracy=self.hard_accuracy,
            hard_min_correct=self.hard_min_correct,
            medium_accuracy=self.medium_accuracy,
            medium_min_correct=self.medium_min_correct,
        )

    def get_bayesian_policy(self) -> BayesianDifficultyPolicy:
        return BayesianDifficultyPolicy(
            hard_belief=self.bkt_hard_belief,
            medium_belief=self.bkt_medium_belief,
            prior=self.bkt_p_l0,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
