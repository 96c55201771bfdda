"""Closings: open/close lifecycle, their entries and the recomputed totals."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from fleetdesk.api.v1.auth import require_permission
from fleetdesk.core.database import get_db
from fleetdesk.core.errors import ValidationFailed
from fleetdesk.models import Closing, Company, Month
from fleetdesk.schemas.auth import CurrentUser
from fleetdesk.schemas.common import MessageResponse
from fleetdesk.schemas.financial import (
    ClosingCreate,
    ClosingDetail,
    ClosingEntriesResponse,
    ClosingOut,
    ClosingStatsResponse,
    ClosingUpdate,
    FinancialEntryOut,
    PeriodStatus,
)
from fleetdesk.services.crud import get_or_404
from fleetdesk.services.financial import (
    close_closing,
    count_entries,
    query_entries,
    summarize_entries,
)

router = APIRouter()

DB = Annotated[Session, Depends(get_db)]

NOT_FOUND = "closing not found"

REQUIRED_FIELDS = ("name", "status")


@router.get("", response_model=list[ClosingOut])
def list_closings(
    _user: Annotated[CurrentUser, Depends(require_permission("closings.view"))],
    db: DB,
    month_id: int | None = None,
    company_id: int | None = None,
    status_filter: Annotated[PeriodStatus | None, Query(alias="status")] = None,
) -> list[ClosingOut]:
    query = db.query(Closing)
    if month_id:
        query = query.filter(Closing.month_id == month_id)
    if company_id:
        query = query.filter(Closing.company_id == company_id)
    if status_filter:
        query = query.filter(Closing.status == status_filter)
    rows = query.order_by(Closing.created_at.desc(), Closing.id.desc()).all()
    return [ClosingOut.model_validate(c) for c in rows]


@router.get("/{closing_id}", response_model=ClosingDetail)
def get_closing(
    closing_id: int,
    _user: Annotated[CurrentUser, Depends(require_permission("closings.view"))],
    db: DB,
) -> ClosingDetail:
    return ClosingDetail.model_validate(get_or_404(db, Closing, closing_id, NOT_FOUND))


@router.post("", response_model=ClosingOut, status_code=status.HTTP_201_CREATED)
def create_closing(
    body: ClosingCreate,
    _user: Annotated[CurrentUser, Depends(require_permission("closings.create"))],
    db: DB,
) -> ClosingOut:
    get_or_404(db, Month, body.month_id, "month not found")
    if body.company_id is not None:
        get_or_404(db, Company, body.company_id, "company not found")
    closing = Closing(**body.model_dump(), status="aberto")
    db.add(closing)
    db.commit()
    db.refresh(closing)
    return ClosingOut.model_validate(closing)


@router.put("/{closing_id}", response_model=ClosingOut)
def update_closing(
    closing_id: int,
    body: ClosingUpdate,
    _user: Annotated[CurrentUser, Depends(require_permission("closings.update"))],
    db: DB,
) -> ClosingOut:
    closing = get_or_404(db, Closing, closing_id, NOT_FOUND)
    changes = body.model_dump(exclude_unset=True)
    for field in REQUIRED_FIELDS:
        if field in changes and changes[field] is None:
            raise ValidationFailed(f"{field} cannot be null")
    if changes.get("company_id") is not None:
        get_or_404(db, Company, changes["company_id"], "company not found")
    for field, value in changes.items():
        setattr(closing, field, value)
    db.commit()
    db.refresh(closing)
    return ClosingOut.model_validate(closing)


@router.delete("/{closing_id}", response_model=MessageResponse)
def delete_closing(
    closing_id: int,
    _user: Annotated[CurrentUser, Depends(require_permission("closings.delete"))],
    db: DB,
) -> MessageResponse:
    """Closed closings must be reopened first. Their entries are detached, not deleted."""
    closing = get_or_404(db, Closing, closing_id, NOT_FOUND)
    if closing.status == "fechado":
        raise ValidationFailed("a closed closing cannot be deleted")
    for entry in closing.entries:
        entry.closing_id = None
    db.delete(closing)
    db.commit()
    return MessageResponse(message="closing deleted")


@router.post("/{closing_id}/close", response_model=ClosingOut)
def close(
    closing_id: int,
    _user: Annotated[CurrentUser, Depends(require_permission("closings.update"))],
    db: DB,
) -> ClosingOut:
    """Compute the totals snapshot from the closing's entries and mark it fechado."""
    closing = get_or_404(db, Closing, closing_id, NOT_FOUND)
    if closing.status == "fechado":
        raise ValidationFailed("closing is already closed")
    close_closing(db, closing)
    db.commit()
    db.refresh(closing)
    return ClosingOut.model_validate(closing)


@router.post("/{closing_id}/reopen", response_model=ClosingOut)
def reopen(
    closing_id: int,
    _user: Annotated[CurrentUser, Depends(require_permission("closings.update"))],
    db: DB,
) -> ClosingOut:
    closing = get_or_404(db, Closing, closing_id, NOT_FOUND)
    if closing.status != "fechado":
        raise ValidationFailed("only closed closings can be reopened")
    closing.status = "aberto"
    db.commit()
    db.refresh(closing)
    return ClosingOut.model_validate(closing)


@router.get("/{closing_id}/entries", response_model=ClosingEntriesResponse)
def list_closing_entries(
    closing_id: int,
    _user: Annotated[CurrentUser, Depends(require_permission("closings.view"))],
    db: DB,
) -> ClosingEntriesResponse:
    closing = get_or_404(db, Closing, closing_id, NOT_FOUND)
    entries = query_entries(db, closing_id=closing.id)
    return ClosingEntriesResponse(
        closing=ClosingOut.model_validate(closing),
        entries=[FinancialEntryOut.model_validate(e) for e in entries],
    )


@router.get("/{closing_id}/stats", response_model=ClosingStatsResponse)
def get_closing_stats(
    closing_id: int,
    _user: Annotated[CurrentUser, Depends(require_permission("closings.view"))],
    db: DB,
) -> ClosingStatsResponse:
    """Totals recomputed from the current entries, independent of the stored snapshot."""
    closing = get_or_404(db, Closing, closing_id, NOT_FOUND)
    entries = query_entries(db, closing_id=closing.id)
    return ClosingStatsResponse(
        closing=ClosingOut.model_validate(closing),
        totals=summarize_entries(entries),
        counts=count_entries(entries),
    )
