"""Value objects passed into and out of the quote engine."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from typing import Any, Literal, Union

ServiceType = Literal["home", "office", "clearance"]
CallbackReason = Literal["specialist_items", "large_property"]

SPECIALIST_ITEMS = "specialist_items"
LARGE_PROPERTY = "large_property"


@dataclass(frozen=True)
class HomeJob:
    """Home or clearance job sized from property size and the 1-5 belongings slider."""
    property_size: str
    slider_position: int = 3


@dataclass(frozen=True)
class OfficeJob:
    office_size: str


@dataclass(frozen=True)
class FurnitureJob:
    """Furniture-only / single item job. Never sized by volume."""
    item_count: int
    needs_two_people: bool = False
    over_40kg: bool = False
    specialist_items: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.item_count < 0:
            raise ValueError(f"item_count must be >= 0, got {self.item_count}")

    @property
    def has_specialist(self) -> bool:
        return len(self.specialist_items) > 0


Job = Union[HomeJob, OfficeJob, FurnitureJob]


@dataclass(frozen=True)
class Distances:
    """Route figures from the mapping provider. Miles and hours, all legs via the depot."""
    depot_to_from: float
    from_to_to: float
    to_to_depot: float
    drive_time_hours: float

    def __post_init__(self) -> None:
        for name in ("depot_to_from", "from_to_to", "to_to_depot", "drive_time_hours"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                raise ValueError(f"{name} must be a finite non-negative number, got {value}")

    @property
    def total_miles(self) -> float:
        return self.depot_to_from + self.from_to_to + self.to_to_depot


@dataclass(frozen=True)
class AssemblyItem:
    category: str
    quantity: int = 1


@dataclass(frozen=True)
class Extras:
    """
    Optional add-on services.

    packing_tier takes precedence over the legacy packing size, and
    storage_size + storage_weeks over the legacy flat storage price, and
    disassembly_items over the legacy assembly list.
    """
    packing_tier: str | None = None
    packing: str | None = None
    cleaning_rooms: int = 0
    cleaning_type: str = "quick"
    storage_size: str | None = None
    storage_weeks: int = 0
    storage: str | None = None
    disassembly_items: tuple[AssemblyItem, ...] = ()
    assembly: tuple[AssemblyItem, ...] = ()


@dataclass(frozen=True)
class ManualOverride:
    men: int
    vans: int


@dataclass(frozen=True)
class JobFacts:
    """
    Everything the engine needs to price one job.

    job and distances may be None while the customer is still filling in
    details; the engine then reports the quote as incomplete.
    """
    service_type: ServiceType = "home"
    job: Job | None = None
    complications: tuple[str, ...] = ()
    property_chain: bool = False
    distances: Distances | None = None
    extras: Extras = field(default_factory=Extras)
    manual_override: ManualOverride | None = None

    def __post_init__(self) -> None:
        # Same complication selected twice must only count once
        object.__setattr__(self, "complications", tuple(dict.fromkeys(self.complications)))

    @property
    def job_kind(self) -> str | None:
        if isinstance(self.job, HomeJob):
            return "home"
        if isinstance(self.job, OfficeJob):
            return "office"
        if isinstance(self.job, FurnitureJob):
            return "furniture"
        return None

    def to_dict(self) -> dict[str, Any]:
        out = asdict(self)
        out["job_kind"] = self.job_kind
        return out


@dataclass(frozen=True)
class Resources:
    men: int
    vans: int
    load_time: float
    requires_callback: bool = False


@dataclass(frozen=True)
class DurationTier:
    days: float
    is_half_day: bool
    label: str


@dataclass(frozen=True)
class CostBreakdown:
    vans_cost: float
    movers_cost: float
    mileage_cost: float
    accommodation_cost: float
    extras_cost: float
    complication_multiplier: float
    subtotal: float
    margin: float


@dataclass(frozen=True)
class QuoteResult:
    """A fully priced job. Recomputed from JobFacts on every call, never mutated."""
    total_price: int
    men: int
    vans: int
    cubes: int
    load_time: float
    total_job_time: float
    duration: DurationTier
    requires_callback: bool
    callback_reason: CallbackReason | None
    show_multi_day_warning: bool
    breakdown: CostBreakdown

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready form for the presentation and submission layers."""
        return {
            "total_price": self.total_price,
            "men": self.men,
            "vans": self.vans,
            "cubes": self.cubes,
            "load_time": self.load_time,
            "total_job_time": self.total_job_time,
            "service_duration": self.duration.label,
            "service_days": self.duration.days,
            "is_half_day": self.duration.is_half_day,
            "requires_callback": self.requires_callback,
            "callback_reason": self.callback_reason,
            "show_multi_day_warning": self.show_multi_day_warning,
            "breakdown": asdict(self.breakdown),
        }
