"""
Recency-weighted averaging shared by the dashboard and the insight engine
"""
from datetime import date
from typing import Iterable, List, NamedTuple, Optional


class Observation(NamedTuple):
    """One score observed on a given day"""
    score: float
    date: Optional[date]


# (rank upper bound, weight) - ranks counted newest first
RECENCY_WEIGHTS = (
    (10, 3.0),
    (20, 2.0),
    (30, 1.5),
)
BASE_WEIGHT = 1.0


def recency_weight(rank: int) -> float:
    """Weight for the observation at `rank` (0 = newest)."""
    for upper_bound, weight in RECENCY_WEIGHTS:
        if rank < upper_bound:
            return weight
    return BASE_WEIGHT


def weighted_average(observations: Iterable[Observation]) -> float:
    """
    Recency-weighted mean of the observation scores.

    Observations are ranked newest first; the 10 newest weigh 3.0, the next
    10 weigh 2.0, the next 10 weigh 1.5 and everything older 1.0. Ties on date
    keep their input order. An empty input returns 0.
    """
    ranked: List[Observation] = sorted(
        observations,
        key=lambda obs: obs.date or date.min,
        reverse=True,
    )
    if not ranked:
        return 0.0

    weighted_sum = 0.0
    total_weight = 0.0
    for rank, obs in enumerate(ranked):
        weight = recency_weight(rank)
        weighted_sum += obs.score * weight
        total_weight += weight

    return weighted_sum / total_weight
