"""Unit tests for duration tiers."""

from __future__ import annotations

import pytest

from src.removals_quote.duration import classify, total_job_time
from src.removals_quote.models import Distances, Resources


def test_chain_at_half_day_boundary_forces_full_day():
    tier = classify(5.0, True)
    assert tier.days == 1
    assert tier.is_half_day is False
    assert tier.label == "Full Day"


def test_half_day_boundary_without_chain():
    tier = classify(5.0, False)
    assert tier.days == 0.5
    assert tier.is_half_day is True
    assert tier.label == "Half Day"


def test_chain_does_not_change_longer_jobs():
    assert classify(13, True) == classify(13, False)


@pytest.mark.parametrize(
    "hours, days, label",
    [
        (0, 0.5, "Half Day"),
        (5.01, 1, "Full Day"),
        (12, 1, "Full Day"),
        (12.5, 2, "2 Days"),
        (24, 2, "2 Days"),
        (30, 3, "3 Days"),
        (36, 3, "3 Days"),
        (37, 4, "4 Days"),
        (49, 5, "5 Days"),
    ],
)
def test_tiers(hours, days, label):
    tier = classify(hours, False)
    assert tier.days == days
    assert tier.label == label
    assert tier.is_half_day is (days == 0.5)


def test_total_job_time_adds_full_drive_time():
    resources = Resources(men=3, vans=2, load_time=4)
    distances = Distances(depot_to_from=10, from_to_to=40, to_to_depot=10, drive_time_hours=2.5)
    assert total_job_time(resources, distances) == 6.5
