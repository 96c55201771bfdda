"""Read-only aggregations for the dashboard, the trip summary and the reports."""

from collections import Counter
from datetime import UTC, date, datetime
from typing import Any

from pydantic import BaseModel
from sqlalchemy import func
from sqlalchemy.orm import Session

from fleetdesk.models import Company, Employee, EmployeeTransaction, Load, Maintenance, Trip, Truck
from fleetdesk.schemas.company import CompanyOut
from fleetdesk.schemas.employee import EmployeeOut, TransactionOut
from fleetdesk.schemas.load import LoadOut
from fleetdesk.schemas.reports import (
    DashboardCharts,
    DashboardResponse,
    DashboardSummary,
    QuickStats,
    ReportFilters,
    ReportResponse,
    StatusSlice,
)
from fleetdesk.schemas.trip import TripDetail, TripSummary
from fleetdesk.schemas.truck import MaintenanceDetail

ACTIVE = "Ativo"
INACTIVE = "Inativo"
CREDIT = "Crédito"
DEBIT = "Débito"


def _count(db: Session, model: type, *criteria: Any) -> int:
    return db.query(func.count(model.id)).filter(*criteria).scalar() or 0


def _sum(db: Session, column: Any, *criteria: Any) -> float:
    return float(db.query(func.coalesce(func.sum(column), 0)).filter(*criteria).scalar() or 0)


def _window(column: Any, start_date: date | None, end_date: date | None) -> list[Any]:
    criteria = []
    if start_date:
        criteria.append(column >= start_date)
    if end_date:
        criteria.append(column <= end_date)
    return criteria


def _rows(schema: type[BaseModel], objs: list[Any]) -> list[dict[str, Any]]:
    return [schema.model_validate(o).model_dump(mode="json") for o in objs]


def _report(rows: list[dict[str, Any]], summary: dict[str, Any], filters: ReportFilters) -> ReportResponse:
    return ReportResponse(rows=rows, summary=summary, filters=filters, generated_at=datetime.now(UTC))


# --- Trips -------------------------------------------------------------------


def trip_summary(
    db: Session,
    *,
    start_date: date | None = None,
    end_date: date | None = None,
    truck_id: int | None = None,
    status: str | None = None,
) -> TripSummary:
    criteria = _window(Trip.date, start_date, end_date)
    if truck_id:
        criteria.append(Trip.truck_id == truck_id)
    if status:
        criteria.append(Trip.status == status)

    by_status = dict(
        db.query(Trip.status, func.count(Trip.id)).filter(*criteria).group_by(Trip.status).all()
    )
    return TripSummary(
        total_trips=sum(by_status.values()),
        total_freight=_sum(db, Trip.freight_value, *criteria),
        completed_trips=by_status.get("concluida", 0),
        in_progress_trips=by_status.get("em_andamento", 0),
        cancelled_trips=by_status.get("cancelada", 0),
    )


# --- Dashboard ---------------------------------------------------------------


def quick_stats(db: Session) -> QuickStats:
    return QuickStats(
        total_employees=_count(db, Employee),
        active_employees=_count(db, Employee, Employee.status == ACTIVE),
        total_companies=_count(db, Company),
        total_loads=_count(db, Load),
        total_trucks=_count(db, Truck),
    )


def dashboard(db: Session) -> DashboardResponse:
    total_employees = _count(db, Employee)
    active_employees = _count(db, Employee, Employee.status == ACTIVE)
    inactive_employees = _count(db, Employee, Employee.status == INACTIVE)
    total_companies = _count(db, Company)
    active_companies = _count(db, Company, Company.status == ACTIVE)
    credits = _sum(db, EmployeeTransaction.amount, EmployeeTransaction.type == CREDIT)
    debits = _sum(db, EmployeeTransaction.amount, EmployeeTransaction.type == DEBIT)

    summary = DashboardSummary(
        total_employees=total_employees,
        active_employees=active_employees,
        inactive_employees=inactive_employees,
        total_salaries=_sum(db, Employee.base_salary, Employee.status == ACTIVE),
        total_companies=total_companies,
        active_companies=active_companies,
        total_loads=_count(db, Load),
        total_trucks=_count(db, Truck),
        maintenance_cost=_sum(db, Maintenance.value),
        total_credits=credits,
        total_debits=debits,
        balance=credits - debits,
    )
    charts = DashboardCharts(
        employee_status=[
            StatusSlice(name="Ativos", value=active_employees),
            StatusSlice(name="Inativos", value=inactive_employees),
        ],
        company_status=[
            StatusSlice(name="Ativas", value=active_companies),
            StatusSlice(name="Inativas", value=total_companies - active_companies),
        ],
    )
    return DashboardResponse(summary=summary, charts=charts)


# --- Reports -----------------------------------------------------------------


def system_overview_report(db: Session) -> ReportResponse:
    total_employees = _count(db, Employee)
    active_employees = _count(db, Employee, Employee.status == ACTIVE)
    total_companies = _count(db, Company)
    active_companies = _count(db, Company, Company.status == ACTIVE)
    summary = {
        "total_employees": total_employees,
        "active_employees": active_employees,
        "inactive_employees": total_employees - active_employees,
        "total_companies": total_companies,
        "active_companies": active_companies,
        "inactive_companies": total_companies - active_companies,
        "total_loads": _count(db, Load),
        "total_trucks": _count(db, Truck),
        "total_maintenance": _count(db, Maintenance),
        "total_trips": _count(db, Trip),
        "total_transactions": _count(db, EmployeeTransaction),
    }
    return _report([], summary, ReportFilters())


def employees_report(db: Session, filters: ReportFilters) -> ReportResponse:
    query = db.query(Employee)
    if filters.status:
        query = query.filter(Employee.status == filters.status)
    query = query.filter(*_window(Employee.hire_date, filters.start_date, filters.end_date))
    employees = query.order_by(Employee.name.asc()).all()

    summary = {
        "total": len(employees),
        "active": sum(1 for e in employees if e.status == ACTIVE),
        "inactive": sum(1 for e in employees if e.status == INACTIVE),
        "total_salaries": sum(e.base_salary or 0 for e in employees),
    }
    return _report(_rows(EmployeeOut, employees), summary, filters)


def companies_report(db: Session, filters: ReportFilters) -> ReportResponse:
    query = db.query(Company)
    if filters.status:
        query = query.filter(Company.status == filters.status)
    query = query.filter(*_window(Company.date_registration, filters.start_date, filters.end_date))
    companies = query.order_by(Company.name.asc()).all()

    summary = {
        "total": len(companies),
        "active": sum(1 for c in companies if c.status == ACTIVE),
        "inactive": sum(1 for c in companies if c.status == INACTIVE),
    }
    return _report(_rows(CompanyOut, companies), summary, filters)


def loads_report(db: Session, filters: ReportFilters) -> ReportResponse:
    query = db.query(Load)
    if filters.company_id:
        query = query.filter(Load.company_id == filters.company_id)
    query = query.filter(*_window(Load.date, filters.start_date, filters.end_date))
    loads = query.order_by(Load.date.desc(), Load.id.desc()).all()

    by_company_status = Counter(load.company.status for load in loads if load.company)
    summary = {
        "total": len(loads),
        "total_value": sum(load.total_value or 0 for load in loads),
        "total_freight": sum(load.total_freight or 0 for load in loads),
        "by_status": dict(by_company_status),
    }
    return _report(_rows(LoadOut, loads), summary, filters)


def maintenance_report(db: Session, filters: ReportFilters) -> ReportResponse:
    query = db.query(Maintenance)
    if filters.truck_id:
        query = query.filter(Maintenance.truck_id == filters.truck_id)
    query = query.filter(*_window(Maintenance.date, filters.start_date, filters.end_date))
    items = query.order_by(Maintenance.date.desc(), Maintenance.id.desc()).all()

    total_cost = sum(m.value or 0 for m in items)
    summary = {
        "total": len(items),
        "total_cost": total_cost,
        "average_cost": total_cost / len(items) if items else 0.0,
    }
    return _report(_rows(MaintenanceDetail, items), summary, filters)


def financial_report(db: Session, filters: ReportFilters) -> ReportResponse:
    """Employee credit/debit movements (the payroll ledger), not the closing entries."""
    query = db.query(EmployeeTransaction)
    if filters.type:
        query = query.filter(EmployeeTransaction.type == filters.type)
    query = query.filter(*_window(EmployeeTransaction.date, filters.start_date, filters.end_date))
    transactions = query.order_by(EmployeeTransaction.date.desc(), EmployeeTransaction.id.desc()).all()

    credits = sum(t.amount for t in transactions if t.type == CREDIT)
    debits = sum(t.amount for t in transactions if t.type == DEBIT)
    summary = {
        "total": len(transactions),
        "total_credits": credits,
        "total_debits": debits,
        "balance": credits - debits,
        "by_type": dict(Counter(t.type for t in transactions)),
    }
    return _report(_rows(TransactionOut, transactions), summary, filters)


def trips_report(db: Session, filters: ReportFilters) -> ReportResponse:
    query = db.query(Trip)
    if filters.status:
        query = query.filter(Trip.status == filters.status)
    if filters.truck_id:
        query = query.filter(Trip.truck_id == filters.truck_id)
    query = query.filter(*_window(Trip.date, filters.start_date, filters.end_date))
    trips = query.order_by(Trip.date.desc(), Trip.id.desc()).all()

    summary = {
        "total": len(trips),
        "total_freight": sum(t.freight_value or 0 for t in trips),
        "total_expenses": sum(e.amount for t in trips for e in t.expenses),
        "by_status": dict(Counter(t.status for t in trips)),
    }
    return _report(_rows(TripDetail, trips), summary, filters)
