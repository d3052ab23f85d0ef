"""Pricing configuration: every rate, lookup table and threshold the engine reads.

Data only. The raw tables live in DEFAULT_TABLES (JSON-compatible, so a
deployment can override sections from a file); PricingConfig is the frozen,
typed view the calculators receive.
"""

from __future__ import annotations

import copy
import json
import logging
import math
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

logger = logging.getLogger(__name__)

SLIDER_CATEGORIES = ("few", "average", "many")
PACKING_BRACKETS = ("small", "medium", "large", "xl")


class ConfigurationError(ValueError):
    """A lookup key or table the engine needs is missing from the pricing config."""


DEFAULT_TABLES: dict[str, Any] = {
    "currency": "GBP",
    # Fraction of the final price kept as margin (gross-up, not markup on cost)
    "profit_margin": 0.65,
    "price_rounding": 10,

    # Cubic feet -> crew, vans, load hours
    "cubes_table": {
        "250": {"men": 2, "vans": 1, "load_time": 1.5},
        "500": {"men": 2, "vans": 1, "load_time": 3},
        "750": {"men": 3, "vans": 2, "load_time": 4},
        "1000": {"men": 4, "vans": 2, "load_time": 5},
        "1250": {"men": 5, "vans": 3, "load_time": 6},
        "1500": {"men": 6, "vans": 3, "load_time": 7},
        "1750": {"men": 7, "vans": 4, "load_time": 7.5},
        "2000": {"men": 8, "vans": 4, "load_time": 8},
    },
    "small_job_cubes": 250,
    "small_job_resources": {"men": 1, "vans": 1, "load_time": 1},
    "extra_cubes_formula": {
        "base_cubes": 2000,
        "base_men": 8,
        "base_vans": 4,
        "base_load_time": 8,
        "men_per_250": 1,
        "vans_per_500": 1,
        "load_time_per_250": 1,
    },

    "property_cubes": {
        "studio": {"few": 250, "average": 250, "many": 250},
        "1bed": {"few": 250, "average": 500, "many": 750},
        "2bed": {"few": 500, "average": 750, "many": 1000},
        "3bed-small": {"few": 750, "average": 1000, "many": 1250},
        "3bed-large": {"few": 1000, "average": 1250, "many": 1500},
        "4bed": {"few": 1500, "average": 1750, "many": 2000},
        "5bed": {"few": 1750, "average": 2000, "many": 2500},
        "5bed-plus": {"few": 2500, "average": 2500, "many": 3000},
    },
    "slider_modifiers": {
        "1": {"category": "few", "modifier": 0.9, "label": "Minimalist"},
        "2": {"category": "few", "modifier": 1.0, "label": "Light"},
        "3": {"category": "average", "modifier": 1.0, "label": "Average"},
        "4": {"category": "many", "modifier": 1.0, "label": "Full"},
        "5": {"category": "many", "modifier": 1.2, "label": "Packed"},
    },
    "office_cubes": {
        "small": {"cubes": 500, "description": "1-5 desks"},
        "medium": {"cubes": 1000, "description": "6-15 desks"},
        "large": {"cubes": 1500, "description": "16+ desks"},
    },

    "furniture_only": {
        # Upper item count -> load hours; 999 stands for "10+"
        "load_time_by_items": {"5": 1, "7": 1.5, "10": 2, "999": 2.5},
        "specialist_items": ["piano", "safe", "gym-equipment", "hot-tub", "marble-stone", "other"],
    },

    "van_rates": {"half_day": 50, "full_day": 100},
    "mover_rates": {"first_two": 150, "additional": 140},
    # Progressive bands; max_miles null means unbounded
    "mileage_rates": [
        {"max_miles": 50, "rate": 0.50},
        {"max_miles": 100, "rate": 0.40},
        {"max_miles": 250, "rate": 0.35},
        {"max_miles": None, "rate": 0.30},
    ],
    "accommodation": {"trigger_hours": 10, "per_room": 140, "people_per_room": 2},
    "time_thresholds": {"half_day": 5, "full_day": 12, "two_days": 24, "three_days": 36},

    "complications": {
        "large_fragile": {"factor": 1.07, "label": "Large or fragile items"},
        "stairs": {"factor": 1.07, "label": "Stairs without elevator"},
        "restricted_access": {"factor": 1.07, "label": "Limited/restricted access"},
        "attic": {"factor": 1.07, "label": "Items in attic"},
        "plants": {"add_vans": 1, "add_men": 1, "label": "Large collection of plants (20+)"},
    },

    # Legacy flat packing prices by cube bracket
    "packing": {
        "fragile_only": {"cubes_max": None, "total": 435, "label": "Fragile items only"},
        "small": {"cubes_max": 750, "total": 400, "label": "Small (up to 750 cu ft)"},
        "medium": {"cubes_max": 1350, "total": 580, "label": "Medium (751-1350 cu ft)"},
        "large": {"cubes_max": 2000, "total": 725, "label": "Large (1351-2000 cu ft)"},
        "xl": {"cubes_max": None, "total": 990, "label": "XL (2000+ cu ft)"},
    },
    "packing_tiers": {
        "materials": {"label": "Materials Only",
                      "price_by_size": {"small": 85, "medium": 120, "large": 165, "xl": 220}},
        "fragile": {"label": "Fragile Items",
                    "price_by_size": {"small": 285, "medium": 365, "large": 435, "xl": 520}},
        "full_service": {"label": "Full Service",
                         "price_by_size": {"small": 400, "medium": 580, "large": 725, "xl": 990}},
    },
    "packing_size_thresholds": {"small": 500, "medium": 1000, "large": 1750},

    "cleaning": {"1": 90, "2": 105, "3": 120, "4": 155, "5": 186, "6": 210},
    "cleaning_tiers": {
        "quick": {"label": "Quick Clean", "multiplier": 1.0},
        "deep": {"label": "Deep Clean", "multiplier": 1.6},
    },

    # Weekly rate per unit size
    "storage_sizes": {
        "small_wardrobe": {"price": 41, "label": "Small Wardrobe", "sqft": 25},
        "garden_shed": {"price": 59, "label": "Garden Shed", "sqft": 50},
        "small_bedroom": {"price": 82, "label": "Small Bedroom", "sqft": 85},
        "standard_bedroom": {"price": 92, "label": "Standard Bedroom", "sqft": 100},
        "large_bedroom": {"price": 124, "label": "Large Bedroom", "sqft": 150},
        "one_car_garage": {"price": 157, "label": "1 Car Garage", "sqft": 250},
    },
    "storage_discount": {"weeks": 8, "fraction": 0.5},

    "assembly": {
        "very_simple": {"price": 20, "label": "Very Simple"},
        "simple": {"price": 30, "label": "Simple"},
        "general": {"price": 60, "label": "General"},
        "complex": {"price": 90, "label": "Complex"},
        "very_complex": {"price": 120, "label": "Very Complex"},
    },

    "validation": {"min_per_van": 1, "max_per_van": 3, "quote_valid_days": 30, "max_cleaning_rooms": 6},
    "thresholds": {"callback_cubes": 2000, "multi_day_warning_hours": 8},
}


@dataclass(frozen=True)
class ResourceRow:
    men: int
    vans: int
    load_time: float


@dataclass(frozen=True)
class ExtrapolationFormula:
    """Sizing beyond the last cubes_table row, per block of extra cubes."""
    base_cubes: int
    base_men: int
    base_vans: int
    base_load_time: float
    men_per_250: int
    vans_per_500: int
    load_time_per_250: float


@dataclass(frozen=True)
class SliderModifier:
    category: str
    modifier: float
    label: str


@dataclass(frozen=True)
class FurnitureOnlyRules:
    load_time_by_items: Mapping[int, float]
    specialist_items: tuple[str, ...]


@dataclass(frozen=True)
class MileageBand:
    max_miles: float
    rate: float


@dataclass(frozen=True)
class Accommodation:
    trigger_hours: float
    per_room: float
    people_per_room: int


@dataclass(frozen=True)
class TimeThresholds:
    half_day: float
    full_day: float
    two_days: float
    three_days: float


@dataclass(frozen=True)
class Complication:
    label: str
    factor: float | None = None
    add_vans: int = 0
    add_men: int = 0


@dataclass(frozen=True)
class PackingSize:
    cubes_max: float
    total: float
    label: str


@dataclass(frozen=True)
class PackingTier:
    label: str
    price_by_size: Mapping[str, float]


@dataclass(frozen=True)
class PricedOption:
    """A labelled price: cleaning tier multipliers, storage weekly rates, assembly prices."""
    label: str
    price: float


@dataclass(frozen=True)
class ValidationLimits:
    min_per_van: int
    max_per_van: int
    quote_valid_days: int
    max_cleaning_rooms: int


@dataclass(frozen=True)
class PricingConfig:
    currency: str
    profit_margin: float
    price_rounding: int
    cubes_table: Mapping[int, ResourceRow]
    small_job_cubes: int
    small_job_resources: ResourceRow
    extra_cubes_formula: ExtrapolationFormula
    property_cubes: Mapping[str, Mapping[str, int]]
    slider_modifiers: Mapping[int, SliderModifier]
    office_cubes: Mapping[str, int]
    furniture_only: FurnitureOnlyRules
    van_rates: Mapping[str, float]
    mover_rates: Mapping[str, float]
    mileage_rates: tuple[MileageBand, ...]
    accommodation: Accommodation
    time_thresholds: TimeThresholds
    complications: Mapping[str, Complication]
    packing: Mapping[str, PackingSize]
    packing_tiers: Mapping[str, PackingTier]
    packing_size_thresholds: Mapping[str, int]
    cleaning: Mapping[int, float]
    cleaning_tiers: Mapping[str, PricedOption]
    storage_sizes: Mapping[str, PricedOption]
    storage_discount_weeks: int
    storage_discount_fraction: float
    assembly: Mapping[str, PricedOption]
    validation: ValidationLimits
    callback_cubes: int
    multi_day_warning_hours: float

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "PricingConfig":
        """Build the typed config from DEFAULT_TABLES-shaped data. Missing sections raise ConfigurationError."""
        try:
            return cls._from_dict(raw)
        except (KeyError, TypeError) as exc:
            raise ConfigurationError(f"Malformed pricing config: {exc!r}") from exc

    @classmethod
    def _from_dict(cls, raw: dict[str, Any]) -> "PricingConfig":
        furniture = raw["furniture_only"]
        thresholds = raw["time_thresholds"]
        return cls(
            currency=raw["currency"],
            profit_margin=float(raw["profit_margin"]),
            price_rounding=int(raw["price_rounding"]),
            cubes_table=_frozen({int(k): ResourceRow(**v) for k, v in raw["cubes_table"].items()}),
            small_job_cubes=int(raw["small_job_cubes"]),
            small_job_resources=ResourceRow(**raw["small_job_resources"]),
            extra_cubes_formula=ExtrapolationFormula(**raw["extra_cubes_formula"]),
            property_cubes=_frozen({k: _frozen(dict(v)) for k, v in raw["property_cubes"].items()}),
            slider_modifiers=_frozen({int(k): SliderModifier(**v) for k, v in raw["slider_modifiers"].items()}),
            office_cubes=_frozen({k: int(v["cubes"]) for k, v in raw["office_cubes"].items()}),
            furniture_only=FurnitureOnlyRules(
                load_time_by_items=_frozen({int(k): float(v) for k, v in furniture["load_time_by_items"].items()}),
                specialist_items=tuple(furniture["specialist_items"]),
            ),
            van_rates=_frozen(dict(raw["van_rates"])),
            mover_rates=_frozen(dict(raw["mover_rates"])),
            mileage_rates=tuple(
                MileageBand(max_miles=_unbounded(b["max_miles"]), rate=float(b["rate"]))
                for b in raw["mileage_rates"]
            ),
            accommodation=Accommodation(**raw["accommodation"]),
            time_thresholds=TimeThresholds(
                half_day=thresholds["half_day"],
                full_day=thresholds["full_day"],
                two_days=thresholds["two_days"],
                three_days=thresholds["three_days"],
            ),
            complications=_frozen({k: Complication(**v) for k, v in raw["complications"].items()}),
            packing=_frozen({
                k: PackingSize(cubes_max=_unbounded(v["cubes_max"]), total=float(v["total"]), label=v["label"])
                for k, v in raw["packing"].items()
            }),
            packing_tiers=_frozen({
                k: PackingTier(label=v["label"], price_by_size=_frozen(dict(v["price_by_size"])))
                for k, v in raw["packing_tiers"].items()
            }),
            packing_size_thresholds=_frozen(dict(raw["packing_size_thresholds"])),
            cleaning=_frozen({int(k): float(v) for k, v in raw["cleaning"].items()}),
            cleaning_tiers=_frozen({
                k: PricedOption(label=v["label"], price=float(v["multiplier"]))
                for k, v in raw["cleaning_tiers"].items()
            }),
            storage_sizes=_frozen({
                k: PricedOption(label=v["label"], price=float(v["price"])) for k, v in raw["storage_sizes"].items()
            }),
            storage_discount_weeks=int(raw["storage_discount"]["weeks"]),
            storage_discount_fraction=float(raw["storage_discount"]["fraction"]),
            assembly=_frozen({
                k: PricedOption(label=v["label"], price=float(v["price"])) for k, v in raw["assembly"].items()
            }),
            validation=ValidationLimits(**raw["validation"]),
            callback_cubes=int(raw["thresholds"]["callback_cubes"]),
            multi_day_warning_hours=float(raw["thresholds"]["multi_day_warning_hours"]),
        )

    def check(self) -> "PricingConfig":
        """
        Verify the tables cover every value the estimators can produce.

        Raises ConfigurationError on the first gap; returns self so it can be chained.
        """
        for position, slider in self.slider_modifiers.items():
            if slider.category not in SLIDER_CATEGORIES:
                raise ConfigurationError(f"Slider position {position} has unknown category {slider.category!r}")
        for size, triple in self.property_cubes.items():
            missing = [c for c in SLIDER_CATEGORIES if c not in triple]
            if missing:
                raise ConfigurationError(f"Property size {size!r} is missing cube buckets {missing}")
        if not self.cubes_table:
            raise ConfigurationError("cubes_table is empty")
        if min(self.cubes_table) != self.small_job_cubes:
            raise ConfigurationError(
                f"cubes_table must start at the small-job threshold ({self.small_job_cubes}), "
                f"starts at {min(self.cubes_table)}"
            )
        if max(self.cubes_table) != self.extra_cubes_formula.base_cubes:
            raise ConfigurationError("extra_cubes_formula.base_cubes must equal the largest cubes_table key")
        if not self.furniture_only.load_time_by_items:
            raise ConfigurationError("furniture_only.load_time_by_items is empty")
        if not self.mileage_rates or not math.isinf(self.mileage_rates[-1].max_miles):
            raise ConfigurationError("The last mileage band must be unbounded")
        for tier, prices in self.packing_tiers.items():
            missing = [b for b in PACKING_BRACKETS if b not in prices.price_by_size]
            if missing:
                raise ConfigurationError(f"Packing tier {tier!r} has no price for {missing}")
        max_rooms = self.validation.max_cleaning_rooms
        missing_rooms = [n for n in range(1, max_rooms + 1) if n not in self.cleaning]
        if missing_rooms:
            raise ConfigurationError(f"No cleaning price for room counts {missing_rooms}")
        if not 0 <= self.profit_margin < 1:
            raise ConfigurationError(f"profit_margin must be in [0, 1), got {self.profit_margin}")
        return self


def _frozen(mapping: dict) -> Mapping:
    return MappingProxyType(mapping)


def _unbounded(value: float | None) -> float:
    return math.inf if value is None else float(value)


def _merge(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Recursively overlay overrides onto a copy of base (lists and scalars replace)."""
    out = copy.deepcopy(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = _merge(out[key], value)
        else:
            out[key] = copy.deepcopy(value)
    return out


def load_config(path: str | Path | None = None, *, profit_margin: float | None = None) -> PricingConfig:
    """
    Build a checked PricingConfig from DEFAULT_TABLES plus optional overrides.

    path: JSON file whose top-level sections replace or merge into the defaults.
    profit_margin: overrides the margin last (used for the PROFIT_MARGIN env var).
    """
    raw = DEFAULT_TABLES
    if path is not None:
        with open(path, "r", encoding="utf-8") as f:
            overrides = json.load(f)
        if not isinstance(overrides, dict):
            raise ConfigurationError(f"Pricing override file {path} must hold a JSON object")
        logger.warning("Applying pricing overrides from %s (sections: %s)", path, ", ".join(sorted(overrides)))
        raw = _merge(raw, overrides)
    if profit_margin is not None:
        raw = _merge(raw, {"profit_margin": profit_margin})
    return PricingConfig.from_dict(raw).check()


DEFAULT_CONFIG = PricingConfig.from_dict(DEFAULT_TABLES).check()


def _env(name: str) -> str | None:
    return (os.environ.get(name) or "").strip() or None


def _env_margin() -> float | None:
    raw = _env("PROFIT_MARGIN")
    if raw is None:
        return None
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"PROFIT_MARGIN must be a number, got {raw!r}") from exc


@lru_cache(maxsize=4)
def _cached_config(path: str | None, profit_margin: float | None) -> PricingConfig:
    if path is None and profit_margin is None:
        return DEFAULT_CONFIG
    return load_config(path, profit_margin=profit_margin)


def config_from_env() -> PricingConfig:
    """Pricing config for this process: defaults plus PRICING_CONFIG_PATH and PROFIT_MARGIN overrides."""
    return _cached_config(_env("PRICING_CONFIG_PATH"), _env_margin())
