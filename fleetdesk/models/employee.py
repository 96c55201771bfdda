"""ORM models for employees and their credit/debit transactions."""

from sqlalchemy import Column, Date, DateTime, Float, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship

from fleetdesk.models.base import Base


class Employee(Base):
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, index=True)
    job_title = Column(String(120), nullable=False)
    base_salary = Column(Float, nullable=False, default=0.0)
    status = Column(String(16), nullable=False, default="Ativo")
    cpf = Column(String(32), nullable=True, unique=True)
    phone = Column(String(64), nullable=True)
    email = Column(String(255), nullable=True)
    address = Column(String(512), nullable=True)
    hire_date = Column(Date, nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    transactions = relationship(
        "EmployeeTransaction",
        back_populates="employee",
        cascade="all, delete-orphan",
        order_by="desc(EmployeeTransaction.date)",
    )


class EmployeeTransaction(Base):
    """Credit (Crédito) or debit (Débito) posted against an employee."""

    __tablename__ = "employee_transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    employee_id = Column(
        Integer,
        ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    type = Column(String(16), nullable=False)
    amount = Column(Float, nullable=False)
    date = Column(Date, nullable=False)

    employee = relationship("Employee", back_populates="transactions")
