"""Unit tests for resource sizing and complications."""

from __future__ import annotations

import pytest

from src.removals_quote.config import DEFAULT_CONFIG, ConfigurationError
from src.removals_quote.models import FurnitureJob, Resources
from src.removals_quote.resources import (
    apply_complications,
    furniture_load_time,
    size_for_furniture_only,
    size_from_cubes,
)


def test_small_job_below_threshold():
    assert size_from_cubes(225) == Resources(men=1, vans=1, load_time=1)
    assert size_from_cubes(0) == Resources(men=1, vans=1, load_time=1)


@pytest.mark.parametrize("cubes", sorted(DEFAULT_CONFIG.cubes_table))
def test_exact_table_key_returns_row(cubes):
    row = DEFAULT_CONFIG.cubes_table[cubes]
    assert size_from_cubes(cubes) == Resources(men=row.men, vans=row.vans, load_time=row.load_time)


def test_between_keys_floors_to_lower_row():
    # 749 uses the 500 row, never something between 500 and 750
    assert size_from_cubes(749) == Resources(men=2, vans=1, load_time=3)
    assert size_from_cubes(251) == Resources(men=2, vans=1, load_time=1.5)
    assert size_from_cubes(1999) == Resources(men=7, vans=4, load_time=7.5)


def test_table_max_is_not_a_callback():
    assert size_from_cubes(2000).requires_callback is False


def test_extrapolation_above_table():
    r = size_from_cubes(2500)  # 500 extra cubes
    assert r.men == 10
    assert r.vans == 5
    assert r.load_time == 10
    assert r.requires_callback is True

    r = size_from_cubes(3000)
    assert (r.men, r.vans, r.load_time) == (12, 6, 12)


def test_extrapolation_ceils_crew_but_not_load_time():
    r = size_from_cubes(2001)
    assert r.men == 9
    assert r.vans == 5
    assert r.load_time == pytest.approx(8.004)


@pytest.mark.parametrize("cubes", [2001, 2250, 4000, 10000])
def test_above_table_always_needs_callback(cubes):
    assert size_from_cubes(cubes).requires_callback is True


@pytest.mark.parametrize(
    "items, hours",
    [(1, 1), (5, 1), (6, 1.5), (7, 1.5), (8, 2), (10, 2), (11, 2.5), (999, 2.5), (1500, 2.5)],
)
def test_furniture_load_time_steps(items, hours):
    assert furniture_load_time(items) == hours


def test_furniture_crew_size():
    assert size_for_furniture_only(FurnitureJob(item_count=3)).men == 1
    assert size_for_furniture_only(FurnitureJob(item_count=3, needs_two_people=True)).men == 2
    assert size_for_furniture_only(FurnitureJob(item_count=3, over_40kg=True)).men == 2
    assert size_for_furniture_only(FurnitureJob(item_count=12, over_40kg=True)) == Resources(
        men=2, vans=1, load_time=2.5
    )


def test_furniture_specialist_short_circuits():
    r = size_for_furniture_only(FurnitureJob(item_count=2, needs_two_people=True, specialist_items=("piano",)))
    assert r == Resources(men=0, vans=0, load_time=0, requires_callback=True)


def test_furniture_unknown_specialist_item():
    with pytest.raises(ConfigurationError, match="grandfather-clock"):
        size_for_furniture_only(FurnitureJob(item_count=1, specialist_items=("piano", "grandfather-clock")))


def test_furniture_rejects_negative_count():
    with pytest.raises(ValueError):
        FurnitureJob(item_count=-1)


def test_no_complications_is_identity():
    base = Resources(men=3, vans=2, load_time=4)
    resources, multiplier = apply_complications(base, [])
    assert multiplier == 1
    assert resources is base


def test_factors_compose_multiplicatively():
    base = Resources(men=3, vans=2, load_time=4)
    resources, multiplier = apply_complications(base, ["stairs", "attic"])
    assert multiplier == pytest.approx(1.07 * 1.07)
    assert resources == base

    _, reversed_multiplier = apply_complications(base, ["attic", "stairs"])
    assert reversed_multiplier == pytest.approx(multiplier)


def test_plants_add_crew_and_van_not_cost_factor():
    base = Resources(men=3, vans=2, load_time=4)
    resources, multiplier = apply_complications(base, ["plants", "large_fragile"])
    assert resources == Resources(men=4, vans=3, load_time=4)
    assert multiplier == pytest.approx(1.07)


def test_duplicate_complications_apply_once():
    base = Resources(men=2, vans=1, load_time=3)
    resources, multiplier = apply_complications(base, ["stairs", "stairs", "plants", "plants"])
    assert multiplier == pytest.approx(1.07)
    assert resources == Resources(men=3, vans=2, load_time=3)


def test_unknown_complication():
    with pytest.raises(ConfigurationError, match="moat"):
        apply_complications(Resources(men=2, vans=1, load_time=1), ["moat"])
