"""Cost lines: vans, movers, mileage and overnight accommodation. Unrounded."""

from __future__ import annotations

import math

from .config import DEFAULT_CONFIG, PricingConfig
from .models import DurationTier


def vans_cost(vans: int, duration: DurationTier, config: PricingConfig = DEFAULT_CONFIG) -> float:
    """Half-day rate once for half days, otherwise full-day rate per day."""
    if duration.is_half_day:
        return vans * config.van_rates["half_day"]
    return vans * config.van_rates["full_day"] * duration.days


def mover_day_cost(men: int, config: PricingConfig = DEFAULT_CONFIG) -> float:
    """Day rate for a crew: the first two movers at the pair rate, the rest at the lower rate."""
    first_two = config.mover_rates["first_two"]
    additional = config.mover_rates["additional"]
    if men <= 0:
        return 0
    if men <= 2:
        return men * first_two
    return 2 * first_two + (men - 2) * additional


def movers_cost(men: int, duration: DurationTier, config: PricingConfig = DEFAULT_CONFIG) -> float:
    day_rate = mover_day_cost(men, config)
    return day_rate * (0.5 if duration.is_half_day else duration.days)


def mileage_cost(total_miles: float, config: PricingConfig = DEFAULT_CONFIG) -> float:
    """
    Progressive mileage: each band's rate applies only to the miles inside it.

    With the default bands 120 miles costs 50 x 0.50 + 50 x 0.40 + 20 x 0.35.
    """
    cost = 0.0
    remaining = total_miles
    previous_max = 0.0

    for band in config.mileage_rates:
        if remaining <= 0:
            break
        in_band = min(remaining, band.max_miles - previous_max)
        if in_band > 0:
            cost += in_band * band.rate
            remaining -= in_band
        previous_max = band.max_miles

    return cost


def accommodation_cost(crew: int, drive_time_hours: float, config: PricingConfig = DEFAULT_CONFIG) -> float:
    """Hotel rooms for the crew once driving alone exceeds the trigger hours."""
    acc = config.accommodation
    if drive_time_hours <= acc.trigger_hours:
        return 0
    nights = math.ceil(drive_time_hours / acc.trigger_hours) - 1
    rooms = math.ceil(crew / acc.people_per_room)
    return rooms * acc.per_room * nights
