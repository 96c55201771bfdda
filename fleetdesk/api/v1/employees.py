"""Employee CRUD plus the per-employee credit/debit ledger."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy import or_
from sqlalchemy.orm import Session

from fleetdesk.api.v1.auth import require_permission
from fleetdesk.core.database import get_db
from fleetdesk.models import Employee, EmployeeTransaction
from fleetdesk.schemas.auth import CurrentUser
from fleetdesk.schemas.common import MessageResponse
from fleetdesk.schemas.employee import (
    EmployeeCreate,
    EmployeeDetail,
    EmployeeOut,
    EmployeeUpdate,
    TransactionCreate,
    TransactionOut,
)
from fleetdesk.services.crud import commit_or_conflict, ensure_absent, get_or_404, icontains

router = APIRouter()

DB = Annotated[Session, Depends(get_db)]

CPF_TAKEN = "CPF already registered"
NOT_FOUND = "employee not found"


def _apply(employee: Employee, body: EmployeeCreate | EmployeeUpdate) -> None:
    data = body.model_dump()
    data["email"] = str(body.email) if body.email else None
    data["hire_date"] = body.hire_date or employee.hire_date or date.today()
    for field, value in data.items():
        setattr(employee, field, value)


@router.get("", response_model=list[EmployeeOut])
def list_employees(
    _user: Annotated[CurrentUser, Depends(require_permission("employees.view"))],
    db: DB,
    search: str | None = None,
) -> list[EmployeeOut]:
    """search matches name, job title or status (case-insensitive substring)."""
    query = db.query(Employee)
    if search and search.strip():
        text = search.strip()
        query = query.filter(
            or_(
                icontains(Employee.name, text),
                icontains(Employee.job_title, text),
                icontains(Employee.status, text),
            )
        )
    return [EmployeeOut.model_validate(e) for e in query.order_by(Employee.name.asc()).all()]


@router.get("/{employee_id}", response_model=EmployeeDetail)
def get_employee(
    employee_id: int,
    _user: Annotated[CurrentUser, Depends(require_permission("employees.view"))],
    db: DB,
) -> EmployeeDetail:
    return EmployeeDetail.model_validate(get_or_404(db, Employee, employee_id, NOT_FOUND))


@router.post("", response_model=EmployeeOut, status_code=status.HTTP_201_CREATED)
def create_employee(
    body: EmployeeCreate,
    _user: Annotated[CurrentUser, Depends(require_permission("employees.create"))],
    db: DB,
) -> EmployeeOut:
    if body.cpf:
        ensure_absent(db, db.query(Employee).filter(Employee.cpf == body.cpf), CPF_TAKEN, status_code=400)
    employee = Employee()
    _apply(employee, body)
    db.add(employee)
    commit_or_conflict(db, CPF_TAKEN, status_code=400)
    db.refresh(employee)
    return EmployeeOut.model_validate(employee)


@router.put("/{employee_id}", response_model=EmployeeOut)
def update_employee(
    employee_id: int,
    body: EmployeeUpdate,
    _user: Annotated[CurrentUser, Depends(require_permission("employees.update"))],
    db: DB,
) -> EmployeeOut:
    employee = get_or_404(db, Employee, employee_id, NOT_FOUND)
    if body.cpf:
        ensure_absent(
            db,
            db.query(Employee).filter(Employee.cpf == body.cpf, Employee.id != employee_id),
            CPF_TAKEN,
            status_code=400,
        )
    _apply(employee, body)
    commit_or_conflict(db, CPF_TAKEN, status_code=400)
    db.refresh(employee)
    return EmployeeOut.model_validate(employee)


@router.delete("/{employee_id}", response_model=MessageResponse)
def delete_employee(
    employee_id: int,
    _user: Annotated[CurrentUser, Depends(require_permission("employees.delete"))],
    db: DB,
) -> MessageResponse:
    """Deletes the employee together with their transactions."""
    db.delete(get_or_404(db, Employee, employee_id, NOT_FOUND))
    db.commit()
    return MessageResponse(message="employee deleted")


@router.get("/{employee_id}/transactions", response_model=list[TransactionOut])
def list_transactions(
    employee_id: int,
    _user: Annotated[CurrentUser, Depends(require_permission("employees.view"))],
    db: DB,
) -> list[TransactionOut]:
    get_or_404(db, Employee, employee_id, NOT_FOUND)
    rows = (
        db.query(EmployeeTransaction)
        .filter(EmployeeTransaction.employee_id == employee_id)
        .order_by(EmployeeTransaction.date.desc(), EmployeeTransaction.id.desc())
        .all()
    )
    return [TransactionOut.model_validate(t) for t in rows]


@router.post(
    "/{employee_id}/transactions",
    response_model=TransactionOut,
    status_code=status.HTTP_201_CREATED,
)
def create_transaction(
    employee_id: int,
    body: TransactionCreate,
    _user: Annotated[CurrentUser, Depends(require_permission("employees.update"))],
    db: DB,
) -> TransactionOut:
    get_or_404(db, Employee, employee_id, NOT_FOUND)
    transaction = EmployeeTransaction(
        employee_id=employee_id,
        type=body.type,
        amount=body.amount,
        date=body.date or date.today(),
    )
    db.add(transaction)
    db.commit()
    db.refresh(transaction)
    return TransactionOut.model_validate(transaction)
