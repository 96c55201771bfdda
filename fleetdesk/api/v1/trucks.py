"""Truck CRUD. Plates are unique; a truck with trips or maintenance cannot be deleted."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy import or_
from sqlalchemy.orm import Session

from fleetdesk.api.v1.auth import require_permission
from fleetdesk.core.database import get_db
from fleetdesk.models import Maintenance, Trip, Truck
from fleetdesk.schemas.auth import CurrentUser
from fleetdesk.schemas.common import MessageResponse
from fleetdesk.schemas.truck import TruckCreate, TruckDetail, TruckOut, TruckUpdate
from fleetdesk.services.crud import commit_or_conflict, ensure_absent, get_or_404, icontains

router = APIRouter()

DB = Annotated[Session, Depends(get_db)]

PLATE_TAKEN = "a truck with this plate already exists"
NOT_FOUND = "truck not found"


def _normalize_plate(plate: str) -> str:
    return plate.strip().upper()


@router.get("", response_model=list[TruckOut])
def list_trucks(
    _user: Annotated[CurrentUser, Depends(require_permission("trucks.view"))],
    db: DB,
    search: str | None = None,
) -> list[TruckOut]:
    query = db.query(Truck)
    if search and search.strip():
        text = search.strip()
        query = query.filter(
            or_(icontains(Truck.name, text), icontains(Truck.plate, text), icontains(Truck.brand, text))
        )
    return [TruckOut.model_validate(t) for t in query.order_by(Truck.name.asc()).all()]


@router.get("/{truck_id}", response_model=TruckDetail)
def get_truck(
    truck_id: int,
    _user: Annotated[CurrentUser, Depends(require_permission("trucks.view"))],
    db: DB,
) -> TruckDetail:
    """Includes the truck's maintenance history and trips, newest first."""
    return TruckDetail.model_validate(get_or_404(db, Truck, truck_id, NOT_FOUND))


@router.post("", response_model=TruckOut, status_code=status.HTTP_201_CREATED)
def create_truck(
    body: TruckCreate,
    _user: Annotated[CurrentUser, Depends(require_permission("trucks.create"))],
    db: DB,
) -> TruckOut:
    plate = _normalize_plate(body.plate)
    ensure_absent(db, db.query(Truck).filter(Truck.plate == plate), PLATE_TAKEN, status_code=400)
    truck = Truck(**body.model_dump(exclude={"plate"}), plate=plate)
    db.add(truck)
    commit_or_conflict(db, PLATE_TAKEN, status_code=400)
    db.refresh(truck)
    return TruckOut.model_validate(truck)


@router.put("/{truck_id}", response_model=TruckOut)
def update_truck(
    truck_id: int,
    body: TruckUpdate,
    _user: Annotated[CurrentUser, Depends(require_permission("trucks.update"))],
    db: DB,
) -> TruckOut:
    truck = get_or_404(db, Truck, truck_id, NOT_FOUND)
    plate = _normalize_plate(body.plate)
    ensure_absent(
        db,
        db.query(Truck).filter(Truck.plate == plate, Truck.id != truck_id),
        PLATE_TAKEN,
        status_code=400,
    )
    for field, value in body.model_dump(exclude={"plate"}).items():
        setattr(truck, field, value)
    truck.plate = plate
    commit_or_conflict(db, PLATE_TAKEN, status_code=400)
    db.refresh(truck)
    return TruckOut.model_validate(truck)


@router.delete("/{truck_id}", response_model=MessageResponse)
def delete_truck(
    truck_id: int,
    _user: Annotated[CurrentUser, Depends(require_permission("trucks.delete"))],
    db: DB,
) -> MessageResponse:
    truck = get_or_404(db, Truck, truck_id, NOT_FOUND)
    in_use = "truck has trips or maintenance records and cannot be deleted"
    ensure_absent(db, db.query(Trip).filter(Trip.truck_id == truck_id), in_use, status_code=400)
    ensure_absent(
        db, db.query(Maintenance).filter(Maintenance.truck_id == truck_id), in_use, status_code=400
    )
    db.delete(truck)
    commit_or_conflict(db, in_use, status_code=400)
    return MessageResponse(message="truck deleted")
