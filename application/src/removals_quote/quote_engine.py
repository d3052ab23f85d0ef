"""Quote engine: sizes a removal job, prices it, and decides when to call back instead."""

from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Any

from .config import DEFAULT_CONFIG, PricingConfig
from .costs import accommodation_cost, mileage_cost, movers_cost, vans_cost
from .duration import classify, total_job_time
from .extras import extras_cost
from .models import (
    LARGE_PROPERTY,
    SPECIALIST_ITEMS,
    CallbackReason,
    CostBreakdown,
    FurnitureJob,
    Job,
    JobFacts,
    QuoteResult,
    Resources,
)
from .resources import apply_complications, check_specialist_items, size_for_furniture_only, size_from_cubes
from .volume import cubes_for_job

logger = logging.getLogger(__name__)


def apply_margin(cost: float, config: PricingConfig = DEFAULT_CONFIG) -> float:
    """Gross up so the margin is that fraction of the final price: cost / (1 - margin)."""
    return cost / (1 - config.profit_margin)


def round_price(price: float, config: PricingConfig = DEFAULT_CONFIG) -> int:
    """Nearest rounding increment (default 10), halves rounded up."""
    step = config.price_rounding
    return int(math.floor(price / step + 0.5)) * step


def recommend_resources(job: Job, config: PricingConfig = DEFAULT_CONFIG) -> tuple[Resources, int, CallbackReason | None]:
    """
    The sizer's recommendation for a job, before overrides and complications.

    Returns (resources, cubes, callback_reason). callback_reason is set only
    when resources.requires_callback is True.
    """
    if isinstance(job, FurnitureJob):
        resources = size_for_furniture_only(job, config)
        return resources, 0, SPECIALIST_ITEMS if resources.requires_callback else None

    cubes = cubes_for_job(job, config)
    resources = size_from_cubes(cubes, config)
    return resources, cubes, LARGE_PROPERTY if resources.requires_callback else None


def check_callback(job: Job, config: PricingConfig = DEFAULT_CONFIG) -> tuple[bool, CallbackReason | None]:
    """Whether an instant quote is unsafe: specialist items, or volume past the callback threshold."""
    if isinstance(job, FurnitureJob):
        check_specialist_items(job, config)
        if job.has_specialist:
            return True, SPECIALIST_ITEMS
        return False, None
    if cubes_for_job(job, config) > config.callback_cubes:
        return True, LARGE_PROPERTY
    return False, None


def calculate_quote(facts: JobFacts, config: PricingConfig = DEFAULT_CONFIG) -> QuoteResult | None:
    """
    Price one job.

    Returns None when the facts are incomplete (no job selection or no
    distances yet). Jobs needing a callback still get a fully priced result,
    with requires_callback and callback_reason set.
    """
    if facts.job is None or facts.distances is None:
        logger.debug("Quote incomplete: job=%s distances=%s", facts.job_kind, facts.distances is not None)
        return None

    # 1. Resources
    resources, cubes, callback_reason = recommend_resources(facts.job, config)
    requires_callback = resources.requires_callback

    # 2. Manual override replaces crew and vans, keeps load time
    if facts.manual_override is not None:
        resources = Resources(
            men=facts.manual_override.men,
            vans=facts.manual_override.vans,
            load_time=resources.load_time,
            requires_callback=resources.requires_callback,
        )

    # 3. Complications
    resources, multiplier = apply_complications(resources, facts.complications, config)

    # 4. Time
    distances = facts.distances
    job_hours = total_job_time(resources, distances)
    duration = classify(job_hours, facts.property_chain, config)

    # 5. Cost lines
    vans_line = vans_cost(resources.vans, duration, config)
    movers_line = movers_cost(resources.men, duration, config)
    mileage_line = mileage_cost(distances.total_miles, config)
    accommodation_line = accommodation_cost(resources.men, distances.drive_time_hours, config)
    extras_line = extras_cost(facts.extras, cubes, config)

    # 6. Subtotal, complications, margin
    subtotal = (vans_line + movers_line + mileage_line + accommodation_line + extras_line) * multiplier
    total_price = round_price(apply_margin(subtotal, config), config)

    show_multi_day_warning = config.multi_day_warning_hours < job_hours <= config.time_thresholds.full_day

    if requires_callback:
        logger.info("Job needs a callback (%s), cubes=%s", callback_reason, cubes)

    return QuoteResult(
        total_price=total_price,
        men=resources.men,
        vans=resources.vans,
        cubes=cubes,
        load_time=resources.load_time,
        total_job_time=job_hours,
        duration=duration,
        requires_callback=requires_callback,
        callback_reason=callback_reason,
        show_multi_day_warning=show_multi_day_warning,
        breakdown=CostBreakdown(
            vans_cost=vans_line,
            movers_cost=movers_line,
            mileage_cost=mileage_line,
            accommodation_cost=accommodation_line,
            extras_cost=extras_line,
            complication_multiplier=multiplier,
            subtotal=subtotal,
            margin=total_price - subtotal,
        ),
    )


def submission_data(
    facts: JobFacts,
    result: QuoteResult | None,
    *,
    completed_at: datetime | None = None,
    config: PricingConfig = DEFAULT_CONFIG,
) -> dict[str, Any]:
    """
    Payload the submission layer stores with a lead: the raw facts plus the quote summary.

    result may be None (incomplete input); the facts are still recorded.
    """
    quote: dict[str, Any] | None = None
    if result is not None:
        full = result.to_dict()
        quote = {k: full[k] for k in (
            "total_price", "men", "vans", "cubes", "service_duration",
            "requires_callback", "callback_reason", "breakdown",
        )}
    return {
        "facts": facts.to_dict(),
        "quote": quote,
        "currency": config.currency,
        "quote_valid_days": config.validation.quote_valid_days,
        "completed_at": (completed_at or datetime.now(timezone.utc)).isoformat(),
    }
