"""Unit tests for manual van/crew override checks."""

from __future__ import annotations

from src.removals_quote.models import ManualOverride, Resources
from src.removals_quote.overrides import check_recommendation_diff, validate_van_crew


def test_too_few_movers_for_vans():
    check = validate_van_crew(vans=2, crew=1)
    assert check.valid is False
    assert check.message == "You need at least 2 movers for 2 vans - each van needs a driver."


def test_too_many_movers_for_vans():
    check = validate_van_crew(vans=1, crew=4)
    assert check.valid is False
    assert check.message == "Maximum 3 movers for 1 van - each van holds up to 3 people."


def test_valid_combinations():
    assert validate_van_crew(vans=2, crew=4).valid is True
    assert validate_van_crew(vans=2, crew=4).message is None
    assert validate_van_crew(vans=1, crew=1).valid is True
    assert validate_van_crew(vans=3, crew=9).valid is True


def test_diff_matches_recommendation():
    diff = check_recommendation_diff(Resources(men=3, vans=2, load_time=4), ManualOverride(men=3, vans=2))
    assert diff.differs is False
    assert diff.message is None


def test_diff_describes_difference():
    diff = check_recommendation_diff(Resources(men=3, vans=2, load_time=4), ManualOverride(men=1, vans=1))
    assert diff.differs is True
    assert diff.message == (
        "Based on your property, we'd typically recommend 2 vans and 3 movers. "
        "You've selected 1 van and 1 mover."
    )


def test_to_dict():
    assert validate_van_crew(vans=1, crew=2).to_dict() == {"valid": True, "message": None}


def test_zero_vans_is_invalid():
    result = validate_van_crew(vans=0, crew=0)
    assert result.valid is False
    assert result.message == "At least 1 van is required."
