"""Read-only reports. All require reports.view."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from fleetdesk.api.v1.auth import require_permission
from fleetdesk.core.database import get_db
from fleetdesk.core.permissions import REPORTS_VIEW
from fleetdesk.schemas.auth import CurrentUser
from fleetdesk.schemas.company import RecordStatus
from fleetdesk.schemas.employee import TransactionType
from fleetdesk.schemas.reports import ReportFilters, ReportResponse
from fleetdesk.schemas.trip import TripStatus
from fleetdesk.services import reports

router = APIRouter()

Viewer = Annotated[CurrentUser, Depends(require_permission(REPORTS_VIEW))]
DB = Annotated[Session, Depends(get_db)]


@router.get("/system-overview", response_model=ReportResponse)
def system_overview(_user: Viewer, db: DB) -> ReportResponse:
    return reports.system_overview_report(db)


@router.get("/employees", response_model=ReportResponse)
def employees(
    _user: Viewer,
    db: DB,
    status: RecordStatus | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
) -> ReportResponse:
    """start_date/end_date filter on hire date."""
    filters = ReportFilters(status=status, start_date=start_date, end_date=end_date)
    return reports.employees_report(db, filters)


@router.get("/companies", response_model=ReportResponse)
def companies(
    _user: Viewer,
    db: DB,
    status: RecordStatus | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
) -> ReportResponse:
    filters = ReportFilters(status=status, start_date=start_date, end_date=end_date)
    return reports.companies_report(db, filters)


@router.get("/loads", response_model=ReportResponse)
def loads(
    _user: Viewer,
    db: DB,
    company_id: int | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
) -> ReportResponse:
    filters = ReportFilters(company_id=company_id, start_date=start_date, end_date=end_date)
    return reports.loads_report(db, filters)


@router.get("/maintenance", response_model=ReportResponse)
def maintenance(
    _user: Viewer,
    db: DB,
    truck_id: int | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
) -> ReportResponse:
    filters = ReportFilters(truck_id=truck_id, start_date=start_date, end_date=end_date)
    return reports.maintenance_report(db, filters)


@router.get("/financial", response_model=ReportResponse)
def financial(
    _user: Viewer,
    db: DB,
    transaction_type: Annotated[TransactionType | None, Query(alias="type")] = None,
    start_date: date | None = None,
    end_date: date | None = None,
) -> ReportResponse:
    """Employee credit/debit ledger over the window."""
    filters = ReportFilters(type=transaction_type, start_date=start_date, end_date=end_date)
    return reports.financial_report(db, filters)


@router.get("/trips", response_model=ReportResponse)
def trips(
    _user: Viewer,
    db: DB,
    status: TripStatus | None = None,
    truck_id: int | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
) -> ReportResponse:
    filters = ReportFilters(
        status=status, truck_id=truck_id, start_date=start_date, end_date=end_date
    )
    return reports.trips_report(db, filters)
