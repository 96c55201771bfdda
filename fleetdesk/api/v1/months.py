"""Calendar months that group closings."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from fleetdesk.api.v1.auth import require_permission
from fleetdesk.core.database import get_db
from fleetdesk.models import Closing, Month
from fleetdesk.schemas.auth import CurrentUser
from fleetdesk.schemas.common import MessageResponse
from fleetdesk.schemas.financial import (
    MonthCreate,
    MonthDetail,
    MonthOut,
    MonthStatsResponse,
    MonthUpdate,
)
from fleetdesk.services.crud import commit_or_conflict, ensure_absent, get_or_404
from fleetdesk.services.financial import month_name, month_stats

router = APIRouter()

DB = Annotated[Session, Depends(get_db)]

NOT_FOUND = "month not found"
DUPLICATE = "this month is already registered"


@router.get("", response_model=list[MonthOut])
def list_months(
    _user: Annotated[CurrentUser, Depends(require_permission("months.view"))],
    db: DB,
    year: int | None = None,
) -> list[MonthOut]:
    query = db.query(Month)
    if year:
        query = query.filter(Month.year == year)
    rows = query.order_by(Month.year.desc(), Month.month.desc()).all()
    return [MonthOut.model_validate(m) for m in rows]


@router.get("/{month_id}", response_model=MonthDetail)
def get_month(
    month_id: int,
    _user: Annotated[CurrentUser, Depends(require_permission("months.view"))],
    db: DB,
) -> MonthDetail:
    return MonthDetail.model_validate(get_or_404(db, Month, month_id, NOT_FOUND))


@router.get("/{month_id}/stats", response_model=MonthStatsResponse)
def get_month_stats(
    month_id: int,
    _user: Annotated[CurrentUser, Depends(require_permission("months.view"))],
    db: DB,
) -> MonthStatsResponse:
    month = get_or_404(db, Month, month_id, NOT_FOUND)
    return MonthStatsResponse(month=MonthOut.model_validate(month), stats=month_stats(db, month))


@router.post("", response_model=MonthOut, status_code=status.HTTP_201_CREATED)
def create_month(
    body: MonthCreate,
    _user: Annotated[CurrentUser, Depends(require_permission("months.create"))],
    db: DB,
) -> MonthOut:
    ensure_absent(
        db,
        db.query(Month).filter(Month.year == body.year, Month.month == body.month),
        DUPLICATE,
    )
    month = Month(
        year=body.year,
        month=body.month,
        name=month_name(body.month, body.year),
        status="aberto",
    )
    db.add(month)
    commit_or_conflict(db, DUPLICATE)
    db.refresh(month)
    return MonthOut.model_validate(month)


@router.put("/{month_id}", response_model=MonthOut)
def update_month(
    month_id: int,
    body: MonthUpdate,
    _user: Annotated[CurrentUser, Depends(require_permission("months.update"))],
    db: DB,
) -> MonthOut:
    month = get_or_404(db, Month, month_id, NOT_FOUND)
    if body.status is not None:
        month.status = body.status
    db.commit()
    db.refresh(month)
    return MonthOut.model_validate(month)


@router.delete("/{month_id}", response_model=MessageResponse)
def delete_month(
    month_id: int,
    _user: Annotated[CurrentUser, Depends(require_permission("months.delete"))],
    db: DB,
) -> MessageResponse:
    month = get_or_404(db, Month, month_id, NOT_FOUND)
    ensure_absent(
        db,
        db.query(Closing).filter(Closing.month_id == month_id),
        "month has closings and cannot be deleted",
        status_code=400,
    )
    db.delete(month)
    db.commit()
    return MessageResponse(message="month deleted")
