"""Schemas for financial entries, months, closings and their aggregated totals."""

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from fleetdesk.schemas.common import DateWindow, FlexibleDate, OptionalText
from fleetdesk.schemas.company import CompanyRef

EntryType = Literal["entrada", "saida", "imposto"]
PeriodStatus = Literal["aberto", "fechado", "cancelado"]


class FinancialTotals(BaseModel):
    """Closing aggregation over a set of entries."""

    total_entries: float = 0.0
    total_expenses: float = 0.0
    total_taxes: float = 0.0
    balance: float = 0.0
    profit_margin: float = 0.0


class FinancialEntryBase(BaseModel):
    description: str = Field(..., min_length=3, max_length=255)
    amount: float = Field(..., gt=0)
    category: str = Field(..., min_length=1, max_length=100)
    date: FlexibleDate
    type: EntryType
    company_id: int | None = None
    closing_id: int | None = None
    observations: OptionalText = None


class FinancialEntryCreate(FinancialEntryBase):
    pass


class FinancialEntryUpdate(FinancialEntryBase):
    pass


class FinancialEntryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    description: str
    amount: float
    category: str
    date: date
    type: str
    company_id: int | None = None
    closing_id: int | None = None
    observations: str | None = None
    created_at: datetime
    company: CompanyRef | None = None


class FinancialSummaryResponse(BaseModel):
    period: DateWindow
    summary: FinancialTotals
    entries: int = Field(..., description="Number of entries in the window")


class MonthCreate(BaseModel):
    year: int = Field(..., ge=2020, le=2030)
    month: int = Field(..., ge=1, le=12)


class MonthUpdate(BaseModel):
    status: PeriodStatus | None = None


class MonthOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    year: int
    month: int
    name: str
    status: str
    created_at: datetime


class MonthRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    year: int
    month: int


class ClosingCreate(BaseModel):
    month_id: int
    company_id: int | None = None
    name: str = Field(..., min_length=1, max_length=255)
    start_date: FlexibleDate | None = None
    end_date: FlexibleDate | None = None


class ClosingUpdate(BaseModel):
    """Partial update; an explicit null clears company_id, start_date or end_date."""

    company_id: int | None = None
    name: str | None = Field(default=None, min_length=1, max_length=255)
    start_date: FlexibleDate | None = None
    end_date: FlexibleDate | None = None
    status: PeriodStatus | None = None


class ClosingOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    month_id: int
    company_id: int | None = None
    name: str
    status: str
    start_date: date | None = None
    end_date: date | None = None
    total_entries: float
    total_expenses: float
    total_taxes: float
    balance: float
    profit_margin: float
    created_at: datetime
    month: MonthRef | None = None
    company: CompanyRef | None = None


class ClosingDetail(ClosingOut):
    entries: list[FinancialEntryOut] = Field(default_factory=list)


class MonthDetail(MonthOut):
    closings: list[ClosingDetail] = Field(default_factory=list)


class ClosingEntriesResponse(BaseModel):
    closing: ClosingOut
    entries: list[FinancialEntryOut]


class EntryCounts(BaseModel):
    entries: int
    expenses: int
    taxes: int
    total: int


class ClosingStatsResponse(BaseModel):
    closing: ClosingOut
    totals: FinancialTotals
    counts: EntryCounts


class MonthStats(FinancialTotals):
    total_closings: int
    closed_closings: int
    open_closings: int


class MonthStatsResponse(BaseModel):
    month: MonthOut
    stats: MonthStats
