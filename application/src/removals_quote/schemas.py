"""Request bodies for the HTTP API, converted into engine value objects."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, model_validator

from .models import (
    AssemblyItem,
    Distances,
    Extras,
    FurnitureJob,
    HomeJob,
    Job,
    JobFacts,
    ManualOverride,
    OfficeJob,
)


class FurnitureOnlyBody(BaseModel):
    item_count: int = Field(ge=0)
    needs_two_people: bool = False
    over_40kg: bool = False
    specialist_items: list[str] = []


class DistancesBody(BaseModel):
    depot_to_from: float = Field(ge=0, allow_inf_nan=False)
    from_to_to: float = Field(ge=0, allow_inf_nan=False)
    to_to_depot: float = Field(ge=0, allow_inf_nan=False)
    drive_time_hours: float = Field(ge=0, allow_inf_nan=False)


class AssemblyItemBody(BaseModel):
    category: str
    quantity: int = Field(default=1, ge=1)


class LegacyAssemblyBody(BaseModel):
    type: str
    quantity: int = Field(default=1, ge=1)


class ExtrasBody(BaseModel):
    packing_tier: str | None = None
    packing: str | None = None
    cleaning_rooms: int = Field(default=0, ge=0)
    cleaning_type: str = "quick"
    storage_size: str | None = None
    storage_weeks: int = Field(default=0, ge=0)
    storage: str | None = None
    disassembly_items: list[AssemblyItemBody] = []
    assembly: list[LegacyAssemblyBody] = []


class ManualOverrideBody(BaseModel):
    men: int = Field(ge=1)
    vans: int = Field(ge=1)


class JobRequest(BaseModel):
    """
    Job selection. At most one of property_size, office_size, furniture_only.

    None of them set means the customer has not chosen yet (incomplete).
    """
    service_type: Literal["home", "office", "clearance"] = "home"
    property_size: str | None = None
    slider_position: int = Field(default=3, ge=1, le=5)
    office_size: str | None = None
    furniture_only: FurnitureOnlyBody | None = None

    @model_validator(mode="after")
    def _one_job_variant(self) -> "JobRequest":
        chosen = [
            name for name, value in (
                ("property_size", self.property_size),
                ("office_size", self.office_size),
                ("furniture_only", self.furniture_only),
            ) if value is not None
        ]
        if len(chosen) > 1:
            raise ValueError(f"Only one of property_size, office_size, furniture_only may be set (got {chosen})")
        return self

    def to_job(self) -> Job | None:
        if self.furniture_only is not None:
            f = self.furniture_only
            return FurnitureJob(
                item_count=f.item_count,
                needs_two_people=f.needs_two_people,
                over_40kg=f.over_40kg,
                specialist_items=tuple(f.specialist_items),
            )
        if self.office_size is not None:
            return OfficeJob(office_size=self.office_size)
        if self.property_size is not None:
            return HomeJob(property_size=self.property_size, slider_position=self.slider_position)
        return None


class QuoteRequest(JobRequest):
    complications: list[str] = []
    property_chain: bool = False
    distances: DistancesBody | None = None
    extras: ExtrasBody = ExtrasBody()
    manual_override: ManualOverrideBody | None = None

    def to_facts(self) -> JobFacts:
        d = self.distances
        e = self.extras
        return JobFacts(
            service_type=self.service_type,
            job=self.to_job(),
            complications=tuple(self.complications),
            property_chain=self.property_chain,
            distances=Distances(**d.model_dump()) if d is not None else None,
            extras=Extras(
                packing_tier=e.packing_tier,
                packing=e.packing,
                cleaning_rooms=e.cleaning_rooms,
                cleaning_type=e.cleaning_type,
                storage_size=e.storage_size,
                storage_weeks=e.storage_weeks,
                storage=e.storage,
                disassembly_items=tuple(AssemblyItem(i.category, i.quantity) for i in e.disassembly_items),
                assembly=tuple(AssemblyItem(i.type, i.quantity) for i in e.assembly),
            ),
            manual_override=(
                ManualOverride(men=self.manual_override.men, vans=self.manual_override.vans)
                if self.manual_override is not None else None
            ),
        )


class OverrideRequest(BaseModel):
    vans: int = Field(ge=1)
    crew: int = Field(ge=1)
    recommended_men: int | None = Field(default=None, ge=0)
    recommended_vans: int | None = Field(default=None, ge=0)
