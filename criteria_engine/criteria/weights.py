"""
Domain weight resolution — Seeds and adjusts the 100-point weight budget
spread across a framework's domains.
"""

from __future__ import annotations

from ..config import WEIGHT_BUDGET
from .models import Domain, DomainWeight


def distribute_equal_weights(domains: list[Domain]) -> list[DomainWeight]:
    """
    Split the weight budget equally across domains.

    Every domain gets floor(100 / n); the first domain also absorbs the
    rounding remainder so the total is exactly 100.
    """
    n = len(domains)
    if n == 0:
        return []
    base = WEIGHT_BUDGET // n
    remainder = WEIGHT_BUDGET - base * n
    return [
        DomainWeight(domain_id=d.id, weight=base + remainder if i == 0 else base)
        for i, d in enumerate(domains)
    ]


def total_weight(domain_weights: list[DomainWeight]) -> float:
    return sum(w.weight for w in domain_weights)


def remaining_weight(domain_weights: list[DomainWeight]) -> float:
    return WEIGHT_BUDGET - total_weight(domain_weights)


def set_domain_weight(
    domain_weights: list[DomainWeight],
    domain_id: str,
    weight: float,
) -> list[DomainWeight]:
    """Return a copy of the weights with one domain's weight replaced."""
    if not any(w.domain_id == domain_id for w in domain_weights):
        raise KeyError(domain_id)
    return [
        DomainWeight(domain_id=w.domain_id, weight=weight) if w.domain_id == domain_id else w
        for w in domain_weights
    ]


def reconcile_weights(
    domain_weights: list[DomainWeight],
    domains: list[Domain],
) -> list[DomainWeight]:
    """
    Align saved weights with the live domain set.
    Removed domains are dropped, new domains start at 0, order follows `domains`.
    """
    saved = {w.domain_id: w.weight for w in domain_weights}
    return [DomainWeight(domain_id=d.id, weight=saved.get(d.id, 0)) for d in domains]
