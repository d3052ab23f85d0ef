"""Duration tiers: half day, 1, 2, 3 or N days from total job hours."""

from __future__ import annotations

import math

from .config import DEFAULT_CONFIG, PricingConfig
from .models import Distances, DurationTier, Resources

HALF_DAY = DurationTier(days=0.5, is_half_day=True, label="Half Day")
FULL_DAY = DurationTier(days=1, is_half_day=False, label="Full Day")


def total_job_time(resources: Resources, distances: Distances) -> float:
    """Load time plus drive time over all three legs (depot -> from -> to -> depot)."""
    return resources.load_time + distances.drive_time_hours


def classify(total_hours: float, is_property_chain: bool, config: PricingConfig = DEFAULT_CONFIG) -> DurationTier:
    """
    Map total job hours to a booking tier.

    A property chain never gets a half-day booking, however short the job.
    """
    t = config.time_thresholds

    if is_property_chain and total_hours <= t.half_day:
        return FULL_DAY
    if total_hours <= t.half_day:
        return HALF_DAY
    if total_hours <= t.full_day:
        return FULL_DAY
    if total_hours <= t.two_days:
        return DurationTier(days=2, is_half_day=False, label="2 Days")
    if total_hours <= t.three_days:
        return DurationTier(days=3, is_half_day=False, label="3 Days")

    days = math.ceil(total_hours / t.full_day)
    return DurationTier(days=days, is_half_day=False, label=f"{days} Days")
