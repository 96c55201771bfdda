"""ORM models for the monthly financial cycle: months, closings and entries."""

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import relationship

from fleetdesk.models.base import Base

ENTRY_TYPES = ("entrada", "saida", "imposto")
PERIOD_STATUSES = ("aberto", "fechado", "cancelado")


class Month(Base):
    __tablename__ = "months"
    __table_args__ = (UniqueConstraint("year", "month", name="uq_months_year_month"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    year = Column(Integer, nullable=False)
    month = Column(Integer, nullable=False)
    name = Column(String(64), nullable=False)
    status = Column(String(16), nullable=False, default="aberto")
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    closings = relationship("Closing", back_populates="month")


class Closing(Base):
    """
    Reporting snapshot for a month (optionally per company).

    The total_* / balance / profit_margin columns are written when the
    closing is closed; they are recomputed from the entries on every close.
    """

    __tablename__ = "closings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    month_id = Column(
        Integer,
        ForeignKey("months.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    company_id = Column(
        Integer,
        ForeignKey("companies.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )
    name = Column(String(255), nullable=False)
    status = Column(String(16), nullable=False, default="aberto", index=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    total_entries = Column(Float, nullable=False, default=0.0)
    total_expenses = Column(Float, nullable=False, default=0.0)
    total_taxes = Column(Float, nullable=False, default=0.0)
    balance = Column(Float, nullable=False, default=0.0)
    profit_margin = Column(Float, nullable=False, default=0.0)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    month = relationship("Month", back_populates="closings")
    company = relationship("Company", back_populates="closings")
    entries = relationship(
        "FinancialEntry",
        back_populates="closing",
        order_by="desc(FinancialEntry.date)",
    )


class FinancialEntry(Base):
    __tablename__ = "financial_entries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    description = Column(String(255), nullable=False)
    amount = Column(Float, nullable=False)
    category = Column(String(100), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    type = Column(String(16), nullable=False, index=True)
    company_id = Column(
        Integer,
        ForeignKey("companies.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    closing_id = Column(
        Integer,
        ForeignKey("closings.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    observations = Column(Text, nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    company = relationship("Company")
    closing = relationship("Closing", back_populates="entries")
