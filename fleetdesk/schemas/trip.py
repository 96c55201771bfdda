"""Schemas for trips, trip expenses and the trip summary."""

from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from fleetdesk.schemas.common import DateWindow, FlexibleDate, OptionalText

TripStatus = Literal["em_andamento", "concluida", "cancelada"]


class TruckSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    plate: str


class TripBase(BaseModel):
    destination: str = Field(..., min_length=1, max_length=255)
    driver: str = Field(..., min_length=1, max_length=255)
    date: FlexibleDate
    freight_value: float = Field(..., ge=0)
    truck_id: int | None = None
    status: TripStatus = "em_andamento"
    notes: OptionalText = None


class TripCreate(TripBase):
    pass


class TripUpdate(TripBase):
    pass


class TripStatusUpdate(BaseModel):
    status: TripStatus


class TripExpenseFields(BaseModel):
    description: str = Field(..., min_length=1, max_length=255)
    amount: float = Field(..., gt=0)
    date: FlexibleDate
    category: str = Field(..., min_length=1, max_length=120)
    notes: OptionalText = None


class TripExpenseCreate(TripExpenseFields):
    trip_id: int


class TripExpenseUpdate(TripExpenseCreate):
    pass


class TripExpenseOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    trip_id: int
    description: str
    amount: float
    date: date
    category: str
    notes: str | None = None


class TripOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    truck_id: int | None = None
    destination: str
    driver: str
    date: date
    freight_value: float
    status: str
    notes: str | None = None


class TripDetail(TripOut):
    truck: TruckSummary | None = None
    expenses: list[TripExpenseOut] = Field(default_factory=list)


class TripRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    destination: str
    driver: str
    date: date
    truck: TruckSummary | None = None


class TripExpenseDetail(TripExpenseOut):
    trip: TripRef | None = None


class TripSummary(BaseModel):
    total_trips: int
    total_freight: float
    completed_trips: int
    in_progress_trips: int
    cancelled_trips: int


class TripSummaryResponse(BaseModel):
    summary: TripSummary
    period: DateWindow
