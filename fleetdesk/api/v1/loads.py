"""Loads (shipments) per company."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from fleetdesk.api.v1.auth import require_permission
from fleetdesk.core.database import get_db
from fleetdesk.models import Company, Load
from fleetdesk.schemas.auth import CurrentUser
from fleetdesk.schemas.common import MessageResponse
from fleetdesk.schemas.load import LoadCreate, LoadOut, LoadUpdate
from fleetdesk.services.crud import ensure_absent, get_or_404

router = APIRouter()

DB = Annotated[Session, Depends(get_db)]

NOT_FOUND = "load not found"
COMPANY_NOT_FOUND = "company not found"
NUMBER_TAKEN = "a load with this number already exists for this company"


def _ensure_unique_number(db: Session, company_id: int, loading_number: str, exclude_id: int | None = None) -> None:
    query = db.query(Load).filter(Load.company_id == company_id, Load.loading_number == loading_number)
    if exclude_id is not None:
        query = query.filter(Load.id != exclude_id)
    ensure_absent(db, query, NUMBER_TAKEN, status_code=400)


@router.get("", response_model=list[LoadOut])
def list_loads(
    _user: Annotated[CurrentUser, Depends(require_permission("loads.view"))],
    db: DB,
    company_id: int | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
) -> list[LoadOut]:
    query = db.query(Load)
    if company_id:
        query = query.filter(Load.company_id == company_id)
    if start_date:
        query = query.filter(Load.date >= start_date)
    if end_date:
        query = query.filter(Load.date <= end_date)
    return [LoadOut.model_validate(x) for x in query.order_by(Load.date.desc(), Load.id.desc()).all()]


@router.get("/company/{company_id}", response_model=list[LoadOut])
def list_company_loads(
    company_id: int,
    _user: Annotated[CurrentUser, Depends(require_permission("loads.view"))],
    db: DB,
) -> list[LoadOut]:
    get_or_404(db, Company, company_id, COMPANY_NOT_FOUND)
    rows = (
        db.query(Load)
        .filter(Load.company_id == company_id)
        .order_by(Load.date.desc(), Load.id.desc())
        .all()
    )
    return [LoadOut.model_validate(x) for x in rows]


@router.get("/{load_id}", response_model=LoadOut)
def get_load(
    load_id: int,
    _user: Annotated[CurrentUser, Depends(require_permission("loads.view"))],
    db: DB,
) -> LoadOut:
    return LoadOut.model_validate(get_or_404(db, Load, load_id, NOT_FOUND))


@router.post("", response_model=LoadOut, status_code=status.HTTP_201_CREATED)
def create_load(
    body: LoadCreate,
    _user: Annotated[CurrentUser, Depends(require_permission("loads.create"))],
    db: DB,
) -> LoadOut:
    get_or_404(db, Company, body.company_id, COMPANY_NOT_FOUND)
    _ensure_unique_number(db, body.company_id, body.loading_number)
    load = Load(**body.model_dump())
    db.add(load)
    db.commit()
    db.refresh(load)
    return LoadOut.model_validate(load)


@router.put("/{load_id}", response_model=LoadOut)
def update_load(
    load_id: int,
    body: LoadUpdate,
    _user: Annotated[CurrentUser, Depends(require_permission("loads.update"))],
    db: DB,
) -> LoadOut:
    """Partial update: omitted fields keep their stored value."""
    load = get_or_404(db, Load, load_id, NOT_FOUND)
    changes = body.model_dump(exclude_unset=True)
    company_id = changes.get("company_id") or load.company_id
    if "company_id" in changes:
        get_or_404(db, Company, company_id, COMPANY_NOT_FOUND)
    if "loading_number" in changes or "company_id" in changes:
        _ensure_unique_number(
            db, company_id, changes.get("loading_number") or load.loading_number, exclude_id=load.id
        )
    for field, value in changes.items():
        if value is not None or field == "observations":
            setattr(load, field, value)
    db.commit()
    db.refresh(load)
    return LoadOut.model_validate(load)


@router.delete("/{load_id}", response_model=MessageResponse)
def delete_load(
    load_id: int,
    _user: Annotated[CurrentUser, Depends(require_permission("loads.delete"))],
    db: DB,
) -> MessageResponse:
    db.delete(get_or_404(db, Load, load_id, NOT_FOUND))
    db.commit()
    return MessageResponse(message="load deleted")
