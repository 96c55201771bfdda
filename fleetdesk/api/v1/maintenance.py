"""Maintenance records per truck."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from fleetdesk.api.v1.auth import require_permission
from fleetdesk.core.database import get_db
from fleetdesk.models import Maintenance, Truck
from fleetdesk.schemas.auth import CurrentUser
from fleetdesk.schemas.common import MessageResponse
from fleetdesk.schemas.truck import (
    MaintenanceCreate,
    MaintenanceDetail,
    MaintenanceOut,
    MaintenanceUpdate,
)
from fleetdesk.services.crud import get_or_404

router = APIRouter()

DB = Annotated[Session, Depends(get_db)]

NOT_FOUND = "maintenance record not found"


@router.get("", response_model=list[MaintenanceDetail])
def list_maintenance(
    _user: Annotated[CurrentUser, Depends(require_permission("maintenance.view"))],
    db: DB,
    truck_id: int | None = None,
) -> list[MaintenanceDetail]:
    query = db.query(Maintenance)
    if truck_id:
        get_or_404(db, Truck, truck_id, "truck not found")
        query = query.filter(Maintenance.truck_id == truck_id)
    rows = query.order_by(Maintenance.date.desc(), Maintenance.id.desc()).all()
    return [MaintenanceDetail.model_validate(m) for m in rows]


@router.get("/{maintenance_id}", response_model=MaintenanceDetail)
def get_maintenance(
    maintenance_id: int,
    _user: Annotated[CurrentUser, Depends(require_permission("maintenance.view"))],
    db: DB,
) -> MaintenanceDetail:
    return MaintenanceDetail.model_validate(get_or_404(db, Maintenance, maintenance_id, NOT_FOUND))


@router.post("", response_model=MaintenanceOut, status_code=status.HTTP_201_CREATED)
def create_maintenance(
    body: MaintenanceCreate,
    _user: Annotated[CurrentUser, Depends(require_permission("maintenance.create"))],
    db: DB,
) -> MaintenanceOut:
    get_or_404(db, Truck, body.truck_id, "truck not found")
    record = Maintenance(**body.model_dump())
    db.add(record)
    db.commit()
    db.refresh(record)
    return MaintenanceOut.model_validate(record)


@router.put("/{maintenance_id}", response_model=MaintenanceOut)
def update_maintenance(
    maintenance_id: int,
    body: MaintenanceUpdate,
    _user: Annotated[CurrentUser, Depends(require_permission("maintenance.update"))],
    db: DB,
) -> MaintenanceOut:
    record = get_or_404(db, Maintenance, maintenance_id, NOT_FOUND)
    for field, value in body.model_dump().items():
        setattr(record, field, value)
    db.commit()
    db.refresh(record)
    return MaintenanceOut.model_validate(record)


@router.delete("/{maintenance_id}", response_model=MessageResponse)
def delete_maintenance(
    maintenance_id: int,
    _user: Annotated[CurrentUser, Depends(require_permission("maintenance.delete"))],
    db: DB,
) -> MessageResponse:
    db.delete(get_or_404(db, Maintenance, maintenance_id, NOT_FOUND))
    db.commit()
    return MessageResponse(message="maintenance record deleted")
