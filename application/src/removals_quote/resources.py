"""Resource sizing (crew, vans, load time) and complication adjustments."""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Iterable

from .config import DEFAULT_CONFIG, ConfigurationError, PricingConfig
from .models import FurnitureJob, Resources

logger = logging.getLogger(__name__)


def size_from_cubes(cubes: int, config: PricingConfig = DEFAULT_CONFIG) -> Resources:
    """
    Map cubic feet to resources.

    Below the small-job threshold a fixed minimal crew is used. Between the
    threshold and the largest table key the nearest lower key's row is used
    as-is (no interpolation). Above the largest key the extrapolation formula
    applies and the job is flagged for a callback.
    """
    table = config.cubes_table

    if cubes < config.small_job_cubes:
        row = config.small_job_resources
        return Resources(men=row.men, vans=row.vans, load_time=row.load_time)

    if cubes in table:
        row = table[cubes]
        return Resources(men=row.men, vans=row.vans, load_time=row.load_time)

    formula = config.extra_cubes_formula
    if cubes > formula.base_cubes:
        extra = cubes - formula.base_cubes
        men = formula.base_men + math.ceil(extra / 250) * formula.men_per_250
        vans = formula.base_vans + math.ceil(extra / 500) * formula.vans_per_500
        load_time = formula.base_load_time + (extra / 250) * formula.load_time_per_250
        logger.debug("Extrapolated resources for %s cubes: %s men, %s vans", cubes, men, vans)
        return Resources(men=men, vans=vans, load_time=load_time, requires_callback=True)

    floor_key = max(k for k in table if k <= cubes)
    row = table[floor_key]
    return Resources(men=row.men, vans=row.vans, load_time=row.load_time)


def furniture_load_time(item_count: int, config: PricingConfig = DEFAULT_CONFIG) -> float:
    """Load hours from the item-count step table; counts past the last step use its hours."""
    steps = config.furniture_only.load_time_by_items
    for threshold in sorted(steps):
        if item_count <= threshold:
            return steps[threshold]
    return steps[max(steps)]


def check_specialist_items(job: FurnitureJob, config: PricingConfig = DEFAULT_CONFIG) -> None:
    """Raise ConfigurationError for specialist item names outside the config catalogue."""
    known = config.furniture_only.specialist_items
    unknown = [name for name in job.specialist_items if name not in known]
    if unknown:
        raise ConfigurationError(f"Unknown specialist items: {unknown}")


def size_for_furniture_only(job: FurnitureJob, config: PricingConfig = DEFAULT_CONFIG) -> Resources:
    """Furniture-only resources. Specialist items mean no instant quote: zeros plus callback."""
    check_specialist_items(job, config)
    if job.has_specialist:
        return Resources(men=0, vans=0, load_time=0, requires_callback=True)

    men = 2 if (job.needs_two_people or job.over_40kg) else 1
    return Resources(men=men, vans=1, load_time=furniture_load_time(job.item_count, config))


def apply_complications(
    resources: Resources,
    complications: Iterable[str],
    config: PricingConfig = DEFAULT_CONFIG,
) -> tuple[Resources, float]:
    """
    Apply complication factors and resource bumps.

    Returns (adjusted resources, cost multiplier). Factors compose by
    multiplication; add_men/add_vans change headcount directly. Each
    complication counts once however often it appears.
    """
    multiplier = 1.0
    men, vans = resources.men, resources.vans

    for name in dict.fromkeys(complications):
        entry = config.complications.get(name)
        if entry is None:
            raise ConfigurationError(f"Unknown complication: {name}")
        if entry.factor is not None:
            multiplier *= entry.factor
        vans += entry.add_vans
        men += entry.add_men

    if men == resources.men and vans == resources.vans:
        return resources, multiplier
    return replace(resources, men=men, vans=vans), multiplier
