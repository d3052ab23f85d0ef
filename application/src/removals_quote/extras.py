"""Optional add-on services: packing, cleaning, storage, furniture disassembly."""

from __future__ import annotations

from .config import DEFAULT_CONFIG, ConfigurationError, PricingConfig
from .models import Extras
from .volume import round_half_up


def packing_size_category(cubes: int, config: PricingConfig = DEFAULT_CONFIG) -> str:
    """Size bracket used to price packing tiers."""
    limits = config.packing_size_thresholds
    if cubes <= limits["small"]:
        return "small"
    if cubes <= limits["medium"]:
        return "medium"
    if cubes <= limits["large"]:
        return "large"
    return "xl"


def recommended_packing_size(cubes: int, config: PricingConfig = DEFAULT_CONFIG) -> str:
    """Legacy packing size whose cube bracket covers the job."""
    for size in ("small", "medium", "large"):
        if cubes <= config.packing[size].cubes_max:
            return size
    return "xl"


def packing_cost(extras: Extras, cubes: int, config: PricingConfig = DEFAULT_CONFIG) -> float:
    if extras.packing_tier:
        tier = config.packing_tiers.get(extras.packing_tier)
        if tier is None:
            raise ConfigurationError(f"Unknown packing tier: {extras.packing_tier}")
        return tier.price_by_size[packing_size_category(cubes, config)]
    if extras.packing:
        size = config.packing.get(extras.packing)
        if size is None:
            raise ConfigurationError(f"Unknown packing size: {extras.packing}")
        return size.total
    return 0


def cleaning_cost(rooms: int, cleaning_type: str = "quick", config: PricingConfig = DEFAULT_CONFIG) -> float:
    """Room-count price (capped at the largest room count) scaled by the quick/deep tier, whole units."""
    if rooms <= 0:
        return 0
    tier = config.cleaning_tiers.get(cleaning_type)
    if tier is None:
        raise ConfigurationError(f"Unknown cleaning type: {cleaning_type}")
    base = config.cleaning[min(rooms, config.validation.max_cleaning_rooms)]
    return round_half_up(base * tier.price)


def storage_cost(extras: Extras, config: PricingConfig = DEFAULT_CONFIG) -> float:
    """
    Weekly storage with the promotional discount on the first weeks.

    Default promotion: first 8 weeks at 50%, remaining weeks at full rate.
    Without a size + duration the legacy flat price for `storage` is used.
    """
    if extras.storage_size and extras.storage_weeks:
        size = config.storage_sizes.get(extras.storage_size)
        if size is None:
            raise ConfigurationError(f"Unknown storage size: {extras.storage_size}")
        weekly = size.price
        discounted_weeks = min(extras.storage_weeks, config.storage_discount_weeks)
        full_weeks = max(0, extras.storage_weeks - config.storage_discount_weeks)
        return discounted_weeks * weekly * config.storage_discount_fraction + full_weeks * weekly
    if extras.storage:
        size = config.storage_sizes.get(extras.storage)
        if size is None:
            raise ConfigurationError(f"Unknown storage size: {extras.storage}")
        return size.price
    return 0


def disassembly_cost(extras: Extras, config: PricingConfig = DEFAULT_CONFIG) -> float:
    """Category price x quantity over disassembly_items, else over the legacy assembly list."""
    total = 0
    for item in extras.disassembly_items or extras.assembly:
        category = config.assembly.get(item.category)
        if category is None:
            raise ConfigurationError(f"Unknown assembly category: {item.category}")
        total += category.price * item.quantity
    return total


def extras_lines(extras: Extras, cubes: int, config: PricingConfig = DEFAULT_CONFIG) -> dict[str, float]:
    """Per-service amounts for display."""
    return {
        "packing": packing_cost(extras, cubes, config),
        "cleaning": cleaning_cost(extras.cleaning_rooms, extras.cleaning_type, config),
        "storage": storage_cost(extras, config),
        "disassembly": disassembly_cost(extras, config),
    }


def extras_cost(extras: Extras, cubes: int, config: PricingConfig = DEFAULT_CONFIG) -> float:
    return sum(extras_lines(extras, cubes, config).values())
