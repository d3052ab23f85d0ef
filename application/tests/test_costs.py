"""Unit tests for van, mover, mileage and accommodation costs."""

from __future__ import annotations

import pytest

from src.removals_quote.costs import (
    accommodation_cost,
    mileage_cost,
    mover_day_cost,
    movers_cost,
    vans_cost,
)
from src.removals_quote.duration import FULL_DAY, HALF_DAY, classify


def test_vans_half_day_and_multi_day():
    assert vans_cost(2, HALF_DAY) == 100        # 2 x £50
    assert vans_cost(2, FULL_DAY) == 200        # 2 x £100
    assert vans_cost(3, classify(20, False)) == 600  # 3 x £100 x 2 days


@pytest.mark.parametrize("men, cost", [(0, 0), (1, 150), (2, 300), (3, 440), (5, 720)])
def test_mover_day_cost(men, cost):
    assert mover_day_cost(men) == cost


def test_movers_half_day_is_half_rate():
    assert movers_cost(3, HALF_DAY) == 220
    assert movers_cost(3, classify(20, False)) == 880


def test_mileage_within_first_band():
    assert mileage_cost(30) == pytest.approx(15)
    assert mileage_cost(50) == pytest.approx(25)
    assert mileage_cost(0) == 0


def test_mileage_is_tiered_not_blended():
    # 120 miles = 50 @ 0.50 + 50 @ 0.40 + 20 @ 0.35
    assert mileage_cost(120) == pytest.approx(50 * 0.50 + 50 * 0.40 + 20 * 0.35)
    assert mileage_cost(120) == pytest.approx(52)


def test_mileage_reaches_open_ended_band():
    # 25 + 20 + 150 * 0.35 + 50 * 0.30
    assert mileage_cost(300) == pytest.approx(112.5)


def test_no_accommodation_at_or_below_trigger():
    assert accommodation_cost(4, 10) == 0
    assert accommodation_cost(4, 3) == 0


def test_accommodation_rooms_and_nights():
    # 1 night, 2 rooms for 4 people
    assert accommodation_cost(4, 10.5) == 280
    # ceil(25 / 10) - 1 = 2 nights, 3 people -> 2 rooms
    assert accommodation_cost(3, 25) == 560
