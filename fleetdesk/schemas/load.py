"""Schemas for loads."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from fleetdesk.schemas.common import FlexibleDate, OptionalText
from fleetdesk.schemas.company import CompanyRef


class LoadBase(BaseModel):
    date: FlexibleDate
    loading_number: str = Field(..., min_length=1, max_length=64)
    deliveries: int = Field(..., ge=0)
    cargo_weight: float = Field(..., ge=0)
    total_value: float = Field(..., ge=0)
    freight4: float = Field(..., ge=0)
    total_freight: float = Field(..., ge=0)
    closings: float = Field(..., ge=0)
    observations: OptionalText = None
    company_id: int


class LoadCreate(LoadBase):
    pass


class LoadUpdate(BaseModel):
    """Partial update; omitted fields keep their stored value."""

    date: FlexibleDate | None = None
    loading_number: str | None = Field(default=None, min_length=1, max_length=64)
    deliveries: int | None = Field(default=None, ge=0)
    cargo_weight: float | None = Field(default=None, ge=0)
    total_value: float | None = Field(default=None, ge=0)
    freight4: float | None = Field(default=None, ge=0)
    total_freight: float | None = Field(default=None, ge=0)
    closings: float | None = Field(default=None, ge=0)
    observations: OptionalText = None
    company_id: int | None = None


class LoadOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    company_id: int
    date: date
    loading_number: str
    deliveries: int
    cargo_weight: float
    total_value: float
    freight4: float
    total_freight: float
    closings: float
    observations: str | None = None
    company: CompanyRef | None = None
