"""ORM model for client companies."""

from sqlalchemy import Column, Date, DateTime, Float, Integer, String, func
from sqlalchemy.orm import relationship

from fleetdesk.models.base import Base


class Company(Base):
    __tablename__ = "companies"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, index=True)
    type = Column(String(120), nullable=False)
    cnpj = Column(String(32), nullable=False, unique=True)
    date_registration = Column(Date, nullable=False)
    status = Column(String(16), nullable=False, default="Ativo")
    responsible = Column(String(255), nullable=False)
    commission = Column(Float, nullable=False, default=0.0)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    loads = relationship("Load", back_populates="company")
    closings = relationship("Closing", back_populates="company")
