"""Expenses incurred on a trip."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from fleetdesk.api.v1.auth import require_permission
from fleetdesk.core.database import get_db
from fleetdesk.core.errors import ValidationFailed
from fleetdesk.models import Trip, TripExpense
from fleetdesk.schemas.auth import CurrentUser
from fleetdesk.schemas.common import MessageResponse
from fleetdesk.schemas.trip import TripExpenseCreate, TripExpenseDetail, TripExpenseUpdate
from fleetdesk.services.crud import get_or_404, icontains

router = APIRouter()

DB = Annotated[Session, Depends(get_db)]

NOT_FOUND = "expense not found"


@router.get("", response_model=list[TripExpenseDetail])
def list_expenses(
    _user: Annotated[CurrentUser, Depends(require_permission("tripExpenses.view"))],
    db: DB,
    trip_id: int | None = None,
    category: str | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
) -> list[TripExpenseDetail]:
    query = db.query(TripExpense)
    if trip_id:
        get_or_404(db, Trip, trip_id, "trip not found")
        query = query.filter(TripExpense.trip_id == trip_id)
    if category and category.strip():
        query = query.filter(icontains(TripExpense.category, category.strip()))
    if start_date:
        query = query.filter(TripExpense.date >= start_date)
    if end_date:
        query = query.filter(TripExpense.date <= end_date)
    rows = query.order_by(TripExpense.date.desc(), TripExpense.id.desc()).all()
    return [TripExpenseDetail.model_validate(e) for e in rows]


@router.get("/{expense_id}", response_model=TripExpenseDetail)
def get_expense(
    expense_id: int,
    _user: Annotated[CurrentUser, Depends(require_permission("tripExpenses.view"))],
    db: DB,
) -> TripExpenseDetail:
    return TripExpenseDetail.model_validate(get_or_404(db, TripExpense, expense_id, NOT_FOUND))


@router.post("", response_model=TripExpenseDetail, status_code=status.HTTP_201_CREATED)
def create_expense(
    body: TripExpenseCreate,
    _user: Annotated[CurrentUser, Depends(require_permission("tripExpenses.create"))],
    db: DB,
) -> TripExpenseDetail:
    get_or_404(db, Trip, body.trip_id, "trip not found")
    expense = TripExpense(**body.model_dump())
    db.add(expense)
    db.commit()
    db.refresh(expense)
    return TripExpenseDetail.model_validate(expense)


@router.put("/{expense_id}", response_model=TripExpenseDetail)
def update_expense(
    expense_id: int,
    body: TripExpenseUpdate,
    _user: Annotated[CurrentUser, Depends(require_permission("tripExpenses.update"))],
    db: DB,
) -> TripExpenseDetail:
    expense = get_or_404(db, TripExpense, expense_id, NOT_FOUND)
    if db.get(Trip, body.trip_id) is None:
        raise ValidationFailed("trip not found")
    for field, value in body.model_dump().items():
        setattr(expense, field, value)
    db.commit()
    db.refresh(expense)
    return TripExpenseDetail.model_validate(expense)


@router.delete("/{expense_id}", response_model=MessageResponse)
def delete_expense(
    expense_id: int,
    _user: Annotated[CurrentUser, Depends(require_permission("tripExpenses.delete"))],
    db: DB,
) -> MessageResponse:
    db.delete(get_or_404(db, TripExpense, expense_id, NOT_FOUND))
    db.commit()
    return MessageResponse(message="expense deleted")
