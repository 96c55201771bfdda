"""Schemas for employees and employee transactions."""

from datetime import date, datetime
from typing import Annotated, Literal

from pydantic import BaseModel, BeforeValidator, ConfigDict, EmailStr, Field

from fleetdesk.schemas.common import FlexibleDate, OptionalText, blank_to_none
from fleetdesk.schemas.company import RecordStatus

TransactionType = Literal["Crédito", "Débito"]

OptionalEmail = Annotated[EmailStr | None, BeforeValidator(blank_to_none)]
OptionalDate = Annotated[FlexibleDate | None, BeforeValidator(blank_to_none)]


class EmployeeBase(BaseModel):
    name: str = Field(..., min_length=2, max_length=255)
    job_title: str = Field(..., min_length=2, max_length=120)
    base_salary: float = Field(..., ge=0)
    status: RecordStatus
    cpf: OptionalText = None
    phone: OptionalText = None
    email: OptionalEmail = None
    address: OptionalText = None
    hire_date: OptionalDate = None


class EmployeeCreate(EmployeeBase):
    pass


class EmployeeUpdate(EmployeeBase):
    pass


class EmployeeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    job_title: str
    base_salary: float
    status: str
    cpf: str | None = None
    phone: str | None = None
    email: str | None = None
    address: str | None = None
    hire_date: date
    created_at: datetime
    updated_at: datetime


class TransactionCreate(BaseModel):
    type: TransactionType
    amount: float = Field(..., gt=0)
    date: OptionalDate = None


class TransactionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_id: int
    type: str
    amount: float
    date: date


class EmployeeDetail(EmployeeOut):
    transactions: list[TransactionOut] = Field(default_factory=list)
