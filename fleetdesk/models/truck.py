"""ORM models for trucks and their maintenance records."""

from sqlalchemy import Column, Date, DateTime, Float, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship

from fleetdesk.models.base import Base


class Truck(Base):
    __tablename__ = "trucks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    plate = Column(String(16), nullable=False, unique=True, index=True)
    brand = Column(String(120), nullable=False)
    year = Column(Integer, nullable=False)
    doc_expiry = Column(Date, nullable=False)
    renavam = Column(String(32), nullable=False)
    image = Column(Text, nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    maintenances = relationship(
        "Maintenance",
        back_populates="truck",
        order_by="desc(Maintenance.date)",
    )
    trips = relationship(
        "Trip",
        back_populates="truck",
        order_by="desc(Trip.date)",
    )


class Maintenance(Base):
    __tablename__ = "maintenances"

    id = Column(Integer, primary_key=True, autoincrement=True)
    truck_id = Column(
        Integer,
        ForeignKey("trucks.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    date = Column(Date, nullable=False, index=True)
    service = Column(String(255), nullable=False)
    km = Column(Float, nullable=False, default=0.0)
    value = Column(Float, nullable=False, default=0.0)
    notes = Column(Text, nullable=True)

    truck = relationship("Truck", back_populates="maintenances")
