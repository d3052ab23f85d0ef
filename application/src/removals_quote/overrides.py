"""Checks for a manually chosen van/crew combination. Advisory: never raises, never clamps."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from .config import DEFAULT_CONFIG, PricingConfig
from .models import ManualOverride, Resources


@dataclass(frozen=True)
class CrewValidation:
    valid: bool
    message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class RecommendationDiff:
    differs: bool
    message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count != 1 else ''}"


def validate_van_crew(vans: int, crew: int, config: PricingConfig = DEFAULT_CONFIG) -> CrewValidation:
    """Every van needs a driver, and a van seats at most max_per_van people."""
    limits = config.validation
    min_crew = vans * limits.min_per_van
    max_crew = vans * limits.max_per_van

    if vans < 1:
        return CrewValidation(False, "At least 1 van is required.")
    if crew < min_crew:
        return CrewValidation(
            False,
            f"You need at least {_plural(min_crew, 'mover')} for {_plural(vans, 'van')} - each van needs a driver.",
        )
    if crew > max_crew:
        return CrewValidation(
            False,
            f"Maximum {max_crew} movers for {_plural(vans, 'van')} - "
            f"each van holds up to {limits.max_per_van} people.",
        )
    return CrewValidation(True)


def check_recommendation_diff(recommended: Resources, manual: ManualOverride) -> RecommendationDiff:
    """Compare the system recommendation with the customer's selection (display only)."""
    if recommended.men == manual.men and recommended.vans == manual.vans:
        return RecommendationDiff(False)
    return RecommendationDiff(
        True,
        f"Based on your property, we'd typically recommend {_plural(recommended.vans, 'van')} "
        f"and {_plural(recommended.men, 'mover')}. "
        f"You've selected {_plural(manual.vans, 'van')} and {_plural(manual.men, 'mover')}.",
    )
