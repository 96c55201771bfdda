"""ORM models for trips and the expenses booked against them."""

from sqlalchemy import Column, Date, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from fleetdesk.models.base import Base

TRIP_STATUSES = ("em_andamento", "concluida", "cancelada")


class Trip(Base):
    __tablename__ = "trips"

    id = Column(Integer, primary_key=True, autoincrement=True)
    truck_id = Column(
        Integer,
        ForeignKey("trucks.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )
    destination = Column(String(255), nullable=False)
    driver = Column(String(255), nullable=False)
    date = Column(Date, nullable=False, index=True)
    freight_value = Column(Float, nullable=False, default=0.0)
    status = Column(String(16), nullable=False, default="em_andamento", index=True)
    notes = Column(Text, nullable=True)

    truck = relationship("Truck", back_populates="trips")
    expenses = relationship(
        "TripExpense",
        back_populates="trip",
        order_by="desc(TripExpense.date)",
    )


class TripExpense(Base):
    __tablename__ = "trip_expenses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    trip_id = Column(
        Integer,
        ForeignKey("trips.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    description = Column(String(255), nullable=False)
    amount = Column(Float, nullable=False)
    date = Column(Date, nullable=False, index=True)
    category = Column(String(120), nullable=False, index=True)
    notes = Column(Text, nullable=True)

    trip = relationship("Trip", back_populates="expenses")
