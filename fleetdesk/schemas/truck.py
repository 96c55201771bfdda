"""Schemas for trucks and maintenance records."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from fleetdesk.schemas.common import FlexibleDate, OptionalText
from fleetdesk.schemas.trip import TripOut, TruckSummary


class TruckBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    plate: str = Field(..., min_length=1, max_length=16)
    brand: str = Field(..., min_length=1, max_length=120)
    year: int = Field(..., ge=1900, le=2100)
    doc_expiry: FlexibleDate
    renavam: str = Field(..., min_length=1, max_length=32)
    image: OptionalText = None


class TruckCreate(TruckBase):
    pass


class TruckUpdate(TruckBase):
    pass


class MaintenanceFields(BaseModel):
    date: FlexibleDate
    service: str = Field(..., min_length=1, max_length=255)
    km: float = Field(..., ge=0)
    value: float = Field(..., ge=0)
    notes: OptionalText = None


class MaintenanceCreate(MaintenanceFields):
    truck_id: int


class MaintenanceUpdate(MaintenanceFields):
    pass


class MaintenanceOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    truck_id: int
    date: date
    service: str
    km: float
    value: float
    notes: str | None = None


class MaintenanceDetail(MaintenanceOut):
    truck: TruckSummary | None = None


class TruckOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    plate: str
    brand: str
    year: int
    doc_expiry: date
    renavam: str
    image: str | None = None


class TruckDetail(TruckOut):
    """Truck with its maintenance history and trips (newest first)."""

    maintenances: list[MaintenanceOut] = Field(default_factory=list)
    trips: list[TripOut] = Field(default_factory=list)

