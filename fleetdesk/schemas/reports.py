"""Schemas for the dashboard and the read-only reports."""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field


class StatusSlice(BaseModel):
    name: str
    value: int


class DashboardSummary(BaseModel):
    total_employees: int
    active_employees: int
    inactive_employees: int
    total_salaries: float
    total_companies: int
    active_companies: int
    total_loads: int
    total_trucks: int
    maintenance_cost: float
    total_credits: float
    total_debits: float
    balance: float


class DashboardCharts(BaseModel):
    employee_status: list[StatusSlice]
    company_status: list[StatusSlice]


class DashboardResponse(BaseModel):
    summary: DashboardSummary
    charts: DashboardCharts


class QuickStats(BaseModel):
    total_employees: int
    active_employees: int
    total_companies: int
    total_loads: int
    total_trucks: int


class ReportFilters(BaseModel):
    status: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    company_id: int | None = None
    truck_id: int | None = None
    type: str | None = None


class ReportResponse(BaseModel):
    """Generic report envelope: rows, a summary block, the filters applied and a timestamp."""

    rows: list[dict[str, Any]] = Field(default_factory=list)
    summary: dict[str, Any]
    filters: ReportFilters
    generated_at: datetime
