"""Financial entries (entrada, saida, imposto) and the windowed summary."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from fleetdesk.api.v1.auth import require_permission
from fleetdesk.core.database import get_db
from fleetdesk.core.errors import NotFound, ValidationFailed
from fleetdesk.models import Closing, Company, FinancialEntry
from fleetdesk.schemas.auth import CurrentUser
from fleetdesk.schemas.common import DateWindow, MessageResponse
from fleetdesk.schemas.financial import (
    EntryType,
    FinancialEntryCreate,
    FinancialEntryOut,
    FinancialEntryUpdate,
    FinancialSummaryResponse,
)
from fleetdesk.services.crud import get_or_404
from fleetdesk.services.financial import query_entries, summarize_entries

router = APIRouter()

DB = Annotated[Session, Depends(get_db)]

NOT_FOUND = "financial entry not found"


def _check_refs(db: Session, body: FinancialEntryCreate | FinancialEntryUpdate) -> None:
    if body.company_id is not None and db.get(Company, body.company_id) is None:
        raise NotFound("company not found")
    if body.closing_id is not None:
        closing = db.get(Closing, body.closing_id)
        if closing is None:
            raise NotFound("closing not found")
        if closing.status == "fechado":
            raise ValidationFailed("closing is closed, reopen it before changing its entries")


@router.get("/summary", response_model=FinancialSummaryResponse)
def get_summary(
    _user: Annotated[CurrentUser, Depends(require_permission("financial.view"))],
    db: DB,
    start_date: date | None = None,
    end_date: date | None = None,
    company_id: int | None = None,
) -> FinancialSummaryResponse:
    """Closing aggregation over the entries in [start_date, end_date]. Both bounds are required."""
    if start_date is None or end_date is None:
        raise ValidationFailed("start_date and end_date are required")
    if start_date > end_date:
        raise ValidationFailed("start_date must not be after end_date")
    entries = query_entries(db, start_date=start_date, end_date=end_date, company_id=company_id)
    return FinancialSummaryResponse(
        period=DateWindow(start_date=start_date, end_date=end_date),
        summary=summarize_entries(entries),
        entries=len(entries),
    )


@router.get("", response_model=list[FinancialEntryOut])
def list_entries(
    _user: Annotated[CurrentUser, Depends(require_permission("financial.view"))],
    db: DB,
    start_date: date | None = None,
    end_date: date | None = None,
    company_id: int | None = None,
    entry_type: Annotated[EntryType | None, Query(alias="type")] = None,
    category: str | None = None,
) -> list[FinancialEntryOut]:
    entries = query_entries(
        db,
        start_date=start_date,
        end_date=end_date,
        company_id=company_id,
        entry_type=entry_type,
        category=category,
    )
    return [FinancialEntryOut.model_validate(e) for e in entries]


@router.get("/{entry_id}", response_model=FinancialEntryOut)
def get_entry(
    entry_id: int,
    _user: Annotated[CurrentUser, Depends(require_permission("financial.view"))],
    db: DB,
) -> FinancialEntryOut:
    return FinancialEntryOut.model_validate(get_or_404(db, FinancialEntry, entry_id, NOT_FOUND))


@router.post("", response_model=FinancialEntryOut, status_code=status.HTTP_201_CREATED)
def create_entry(
    body: FinancialEntryCreate,
    _user: Annotated[CurrentUser, Depends(require_permission("financial.create"))],
    db: DB,
) -> FinancialEntryOut:
    _check_refs(db, body)
    entry = FinancialEntry(**body.model_dump())
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return FinancialEntryOut.model_validate(entry)


@router.put("/{entry_id}", response_model=FinancialEntryOut)
def update_entry(
    entry_id: int,
    body: FinancialEntryUpdate,
    _user: Annotated[CurrentUser, Depends(require_permission("financial.update"))],
    db: DB,
) -> FinancialEntryOut:
    entry = get_or_404(db, FinancialEntry, entry_id, NOT_FOUND)
    _check_refs(db, body)
    for field, value in body.model_dump().items():
        setattr(entry, field, value)
    db.commit()
    db.refresh(entry)
    return FinancialEntryOut.model_validate(entry)


@router.delete("/{entry_id}", response_model=MessageResponse)
def delete_entry(
    entry_id: int,
    _user: Annotated[CurrentUser, Depends(require_permission("financial.delete"))],
    db: DB,
) -> MessageResponse:
    db.delete(get_or_404(db, FinancialEntry, entry_id, NOT_FOUND))
    db.commit()
    return MessageResponse(message="financial entry deleted")
