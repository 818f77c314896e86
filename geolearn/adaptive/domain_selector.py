"""
Domain Selector.

Weighted roulette-wheel choice of the next domain to quiz. Weaker domains get
larger weights; the weight function comes from the estimator so the
selector itself does not care which estimator produced the profile.
"""

from __future__ import annotations

import random
from collections.abc import Callable, Iterable
from typing import Protocol

from loguru import logger

from geolearn.core.profile import LearnerProfile, PerDomainState


class RandomSource(Protocol):
    """Anything with a random() method returning floats in [0, 1)."""

    def random(self) -> float: ...


WeightFunction = Callable[[PerDomainState], float]


def domain_weights(
    profile: LearnerProfile, domains: Iterable[str], weight: WeightFunction
) -> list[tuple[str, float]]:
    """
    Compute the selection weight of every domain, in registry order.

    Raises:
        UnknownDomainError: If a registry domain is missing from the profile
    """
    return [(domain, max(0.0, weight(profile.require(domain)))) for domain in domains]


def select_next_domain(
    profile: LearnerProfile,
    domains: Iterable[str],
    weight: WeightFunction,
    rng: RandomSource | None = None,
) -> str:
    """
    Pick the next domain by weighted random sampling.

    Algorithm:
    1. Weight each domain with the estimator's weight function
    2. Draw r uniformly from [0, total_weight)
    3. Walk domains in registry order subtracting weights; the domain
       where r first drops below zero is selected

    When every weight is zero the first registry domain is returned and the
    random source is not consulted.

    Args:
        profile: Current learner profile
        domains: Registry domains in their fixed order
        weight: Per-state weight function (estimator.selection_weight)
        rng: Injectable random source; defaults to the random module

    Returns:
        Selected domain name
    """
    weighted = domain_weights(profile, domains, weight)
    if not weighted:
        raise ValueError("Cannot select from an empty domain list")

    total_weight = sum(w for _, w in weighted)
    if total_weight <= 0:
        logger.debug(f"All domain weights are zero; falling back to {weighted[0][0]}")
        return weighted[0][0]

    source = rng if rng is not None else random
    r = source.random() * total_weight
    for domain, w in weighted:
        r -= w
        if r < 0:
            logger.debug(f"Selected domain {domain} (weight {w:.3f} of {total_weight:.3f})")
            return domain

    # Float rounding can leave r at exactly zero after the last subtraction
    return next(domain for domain, w in reversed(weighted) if w > 0)
