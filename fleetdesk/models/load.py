"""ORM model for cargo loads carried for a company."""

from sqlalchemy import Column, Date, DateTime, Float, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship

from fleetdesk.models.base import Base


class Load(Base):
    __tablename__ = "loads"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(
        Integer,
        ForeignKey("companies.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    date = Column(Date, nullable=False, index=True)
    loading_number = Column(String(64), nullable=False)
    deliveries = Column(Integer, nullable=False, default=0)
    cargo_weight = Column(Float, nullable=False, default=0.0)
    total_value = Column(Float, nullable=False, default=0.0)
    freight4 = Column(Float, nullable=False, default=0.0)
    total_freight = Column(Float, nullable=False, default=0.0)
    closings = Column(Float, nullable=False, default=0.0)
    observations = Column(Text, nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    company = relationship("Company", back_populates="loads")
