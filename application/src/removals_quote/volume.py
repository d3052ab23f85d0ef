"""Volume estimator: cubic feet of belongings from property size, slider or office size."""

from __future__ import annotations

import math

from .config import DEFAULT_CONFIG, ConfigurationError, PricingConfig
from .models import FurnitureJob, HomeJob, Job, OfficeJob


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive amounts (round() would go to even)."""
    return int(math.floor(value + 0.5))


def estimate_cubes(property_size: str, slider_position: int, config: PricingConfig = DEFAULT_CONFIG) -> int:
    """Base cubes for the slider's bucket, scaled by the slider modifier."""
    triple = config.property_cubes.get(property_size)
    if triple is None:
        raise ConfigurationError(f"Unknown property size: {property_size}")
    slider = config.slider_modifiers.get(slider_position)
    if slider is None:
        raise ConfigurationError(f"Unknown slider position: {slider_position}")
    return round_half_up(triple[slider.category] * slider.modifier)


def estimate_office_cubes(office_size: str, config: PricingConfig = DEFAULT_CONFIG) -> int:
    try:
        return config.office_cubes[office_size]
    except KeyError:
        raise ConfigurationError(f"Unknown office size: {office_size}") from None


def cubes_for_job(job: Job, config: PricingConfig = DEFAULT_CONFIG) -> int:
    """Cubes for any job variant; furniture-only jobs are not volume-sized and report 0."""
    if isinstance(job, OfficeJob):
        return estimate_office_cubes(job.office_size, config)
    if isinstance(job, HomeJob):
        return estimate_cubes(job.property_size, job.slider_position, config)
    if isinstance(job, FurnitureJob):
        return 0
    raise TypeError(f"Unsupported job type: {type(job).__name__}")
