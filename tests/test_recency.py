"""
Recency-weighted average tests
"""
from datetime import date, timedelta

import pytest

from app.services.recency import Observation, recency_weight, weighted_average


def test_empty_input_is_zero():
    assert weighted_average([]) == 0.0


@pytest.mark.parametrize("rank,weight", [(0, 3.0), (9, 3.0), (10, 2.0), (19, 2.0), (20, 1.5), (29, 1.5), (30, 1.0)])
def test_recency_weight_bands(rank, weight):
    assert recency_weight(rank) == weight


def test_ten_recent_fives_and_two_older_ones():
    start = date(2026, 1, 1)
    observations = [Observation(1, start), Observation(1, start + timedelta(days=1))]
    observations += [Observation(5, start + timedelta(days=10 + i)) for i in range(10)]

    assert weighted_average(observations) == pytest.approx(154 / 34)
    assert round(weighted_average(observations), 2) == 4.53


def test_input_order_does_not_matter():
    start = date(2026, 1, 1)
    observations = [Observation(score, start + timedelta(days=i)) for i, score in enumerate([2, 4] * 8)]
    assert weighted_average(observations) == pytest.approx(weighted_average(list(reversed(observations))))


def test_missing_dates_rank_oldest():
    start = date(2026, 1, 1)
    observations = [Observation(1, None)] + [Observation(5, start + timedelta(days=i)) for i in range(10)]
    # the undated 1 falls into the 2.0 band
    assert weighted_average(observations) == pytest.approx((5 * 3.0 * 10 + 1 * 2.0) / 32)
