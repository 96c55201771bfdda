"""Trips: CRUD, status changes and the freight summary."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import or_
from sqlalchemy.orm import Session

from fleetdesk.api.v1.auth import require_permission
from fleetdesk.core.database import get_db
from fleetdesk.core.errors import ValidationFailed
from fleetdesk.models import Trip, TripExpense, Truck
from fleetdesk.schemas.auth import CurrentUser
from fleetdesk.schemas.common import DateWindow, MessageResponse
from fleetdesk.schemas.trip import (
    TripCreate,
    TripDetail,
    TripStatus,
    TripStatusUpdate,
    TripSummaryResponse,
    TripUpdate,
)
from fleetdesk.services.crud import ensure_absent, get_or_404, icontains
from fleetdesk.services.reports import trip_summary

router = APIRouter()

DB = Annotated[Session, Depends(get_db)]

NOT_FOUND = "trip not found"


def _check_truck(db: Session, truck_id: int | None) -> None:
    if truck_id is not None and db.get(Truck, truck_id) is None:
        raise ValidationFailed("truck not found")


@router.get("/summary", response_model=TripSummaryResponse)
def get_trip_summary(
    _user: Annotated[CurrentUser, Depends(require_permission("trips.view"))],
    db: DB,
    start_date: date | None = None,
    end_date: date | None = None,
    truck_id: int | None = None,
    status_filter: Annotated[TripStatus | None, Query(alias="status")] = None,
) -> TripSummaryResponse:
    summary = trip_summary(
        db, start_date=start_date, end_date=end_date, truck_id=truck_id, status=status_filter
    )
    return TripSummaryResponse(
        summary=summary,
        period=DateWindow(start_date=start_date, end_date=end_date),
    )


@router.get("", response_model=list[TripDetail])
def list_trips(
    _user: Annotated[CurrentUser, Depends(require_permission("trips.view"))],
    db: DB,
    search: str | None = None,
    truck_id: int | None = None,
    status_filter: Annotated[TripStatus | None, Query(alias="status")] = None,
    start_date: date | None = None,
    end_date: date | None = None,
) -> list[TripDetail]:
    query = db.query(Trip)
    if search and search.strip():
        text = search.strip()
        query = query.filter(or_(icontains(Trip.destination, text), icontains(Trip.driver, text)))
    if truck_id:
        query = query.filter(Trip.truck_id == truck_id)
    if status_filter:
        query = query.filter(Trip.status == status_filter)
    if start_date:
        query = query.filter(Trip.date >= start_date)
    if end_date:
        query = query.filter(Trip.date <= end_date)
    return [TripDetail.model_validate(t) for t in query.order_by(Trip.date.desc(), Trip.id.desc()).all()]


@router.get("/{trip_id}", response_model=TripDetail)
def get_trip(
    trip_id: int,
    _user: Annotated[CurrentUser, Depends(require_permission("trips.view"))],
    db: DB,
) -> TripDetail:
    return TripDetail.model_validate(get_or_404(db, Trip, trip_id, NOT_FOUND))


@router.post("", response_model=TripDetail, status_code=status.HTTP_201_CREATED)
def create_trip(
    body: TripCreate,
    _user: Annotated[CurrentUser, Depends(require_permission("trips.create"))],
    db: DB,
) -> TripDetail:
    _check_truck(db, body.truck_id)
    trip = Trip(**body.model_dump())
    db.add(trip)
    db.commit()
    db.refresh(trip)
    return TripDetail.model_validate(trip)


@router.put("/{trip_id}", response_model=TripDetail)
def update_trip(
    trip_id: int,
    body: TripUpdate,
    _user: Annotated[CurrentUser, Depends(require_permission("trips.update"))],
    db: DB,
) -> TripDetail:
    trip = get_or_404(db, Trip, trip_id, NOT_FOUND)
    _check_truck(db, body.truck_id)
    for field, value in body.model_dump().items():
        setattr(trip, field, value)
    db.commit()
    db.refresh(trip)
    return TripDetail.model_validate(trip)


@router.patch("/{trip_id}/status", response_model=TripDetail)
def update_trip_status(
    trip_id: int,
    body: TripStatusUpdate,
    _user: Annotated[CurrentUser, Depends(require_permission("trips.update"))],
    db: DB,
) -> TripDetail:
    trip = get_or_404(db, Trip, trip_id, NOT_FOUND)
    trip.status = body.status
    db.commit()
    db.refresh(trip)
    return TripDetail.model_validate(trip)


@router.delete("/{trip_id}", response_model=MessageResponse)
def delete_trip(
    trip_id: int,
    _user: Annotated[CurrentUser, Depends(require_permission("trips.delete"))],
    db: DB,
) -> MessageResponse:
    trip = get_or_404(db, Trip, trip_id, NOT_FOUND)
    ensure_absent(
        db,
        db.query(TripExpense).filter(TripExpense.trip_id == trip_id),
        "trip has expenses and cannot be deleted",
        status_code=400,
    )
    db.delete(trip)
    db.commit()
    return MessageResponse(message="trip deleted")
