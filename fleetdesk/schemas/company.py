"""Schemas for companies."""

from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from fleetdesk.schemas.common import FlexibleDate

RecordStatus = Literal["Ativo", "Inativo"]


class CompanyBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    type: str = Field(..., min_length=1, max_length=120)
    cnpj: str = Field(..., min_length=1, max_length=32)
    date_registration: FlexibleDate
    status: RecordStatus
    responsible: str = Field(..., min_length=1, max_length=255)
    commission: float = Field(default=0.0, ge=0)


class CompanyCreate(CompanyBase):
    pass


class CompanyUpdate(CompanyBase):
    pass


class CompanyOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    type: str
    cnpj: str
    date_registration: date
    status: str
    responsible: str
    commission: float


class CompanyRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    cnpj: str
