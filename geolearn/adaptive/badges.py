"""
Badge/Completion Evaluator.

Badges are derived on demand from the profile and never stored. Detecting a
newly earned badge means comparing two computed sets, which is left to the
caller (newly_earned is a convenience for that).
"""

from __future__ import annotations

from collections.abc import Iterable

from geolearn.core.profile import LearnerProfile
from geolearn.core.registry import REGION_MAX


def compute_badges(
    profile: LearnerProfile, domains: Iterable[str], mastery_threshold: int = REGION_MAX
) -> frozenset[str]:
    """
    Return the domains whose correct count has reached the threshold.

    Raises:
        UnknownDomainError: If a registry domain is missing from the profile
    """
    return frozenset(
        domain for domain in domains if profile.require(domain).correct_count >= mastery_threshold
    )


def newly_earned(previous: Iterable[str], current: Iterable[str]) -> frozenset[str]:
    """Badges present in current but not in previous."""
    return frozenset(current) - frozenset(previous)


def badge_label(domain: str) -> str:
    """Display label for a domain badge."""
    return f"{domain} Expert"
