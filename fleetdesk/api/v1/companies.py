"""Company CRUD. CNPJ is unique; a company referenced by loads or closings cannot be deleted."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy import or_
from sqlalchemy.orm import Session

from fleetdesk.api.v1.auth import require_permission
from fleetdesk.core.database import get_db
from fleetdesk.models import Closing, Company, Load
from fleetdesk.schemas.auth import CurrentUser
from fleetdesk.schemas.common import MessageResponse
from fleetdesk.schemas.company import CompanyCreate, CompanyOut, CompanyUpdate
from fleetdesk.services.crud import commit_or_conflict, ensure_absent, get_or_404, icontains

router = APIRouter()

DB = Annotated[Session, Depends(get_db)]

CNPJ_TAKEN = "a company with this CNPJ already exists"
NOT_FOUND = "company not found"


@router.get("", response_model=list[CompanyOut])
def list_companies(
    _user: Annotated[CurrentUser, Depends(require_permission("companies.view"))],
    db: DB,
    search: str | None = None,
) -> list[CompanyOut]:
    query = db.query(Company)
    if search and search.strip():
        text = search.strip()
        query = query.filter(or_(icontains(Company.name, text), icontains(Company.cnpj, text)))
    return [CompanyOut.model_validate(c) for c in query.order_by(Company.name.asc()).all()]


@router.get("/{company_id}", response_model=CompanyOut)
def get_company(
    company_id: int,
    _user: Annotated[CurrentUser, Depends(require_permission("companies.view"))],
    db: DB,
) -> CompanyOut:
    return CompanyOut.model_validate(get_or_404(db, Company, company_id, NOT_FOUND))


@router.post("", response_model=CompanyOut, status_code=status.HTTP_201_CREATED)
def create_company(
    body: CompanyCreate,
    _user: Annotated[CurrentUser, Depends(require_permission("companies.create"))],
    db: DB,
) -> CompanyOut:
    ensure_absent(db, db.query(Company).filter(Company.cnpj == body.cnpj), CNPJ_TAKEN, status_code=400)
    company = Company(**body.model_dump())
    db.add(company)
    commit_or_conflict(db, CNPJ_TAKEN, status_code=400)
    db.refresh(company)
    return CompanyOut.model_validate(company)


@router.put("/{company_id}", response_model=CompanyOut)
def update_company(
    company_id: int,
    body: CompanyUpdate,
    _user: Annotated[CurrentUser, Depends(require_permission("companies.update"))],
    db: DB,
) -> CompanyOut:
    company = get_or_404(db, Company, company_id, NOT_FOUND)
    ensure_absent(
        db,
        db.query(Company).filter(Company.cnpj == body.cnpj, Company.id != company_id),
        CNPJ_TAKEN,
        status_code=400,
    )
    for field, value in body.model_dump().items():
        setattr(company, field, value)
    commit_or_conflict(db, CNPJ_TAKEN, status_code=400)
    db.refresh(company)
    return CompanyOut.model_validate(company)


@router.delete("/{company_id}", response_model=MessageResponse)
def delete_company(
    company_id: int,
    _user: Annotated[CurrentUser, Depends(require_permission("companies.delete"))],
    db: DB,
) -> MessageResponse:
    company = get_or_404(db, Company, company_id, NOT_FOUND)
    in_use = "company has loads or closings and cannot be deleted"
    ensure_absent(db, db.query(Load).filter(Load.company_id == company_id), in_use, status_code=400)
    ensure_absent(db, db.query(Closing).filter(Closing.company_id == company_id), in_use, status_code=400)
    db.delete(company)
    commit_or_conflict(db, in_use, status_code=400)
    return MessageResponse(message="company deleted")
