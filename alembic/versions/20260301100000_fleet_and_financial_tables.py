"""Companies, employees, trucks, trips, loads and the monthly financial cycle.

Revision ID: 20260301100000
Revises: 20260301000000
Create Date: 2026-03-01

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "20260301100000"
down_revision: Union[str, None] = "20260301000000"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False
    )


def upgrade() -> None:
    op.create_table(
        "companies",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("type", sa.String(length=120), nullable=False),
        sa.Column("cnpj", sa.String(length=32), nullable=False),
        sa.Column("date_registration", sa.Date(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("responsible", sa.String(length=255), nullable=False),
        sa.Column("commission", sa.Float(), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("cnpj"),
    )
    op.create_index(op.f("ix_companies_name"), "companies", ["name"], unique=False)

    op.create_table(
        "employees",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("job_title", sa.String(length=120), nullable=False),
        sa.Column("base_salary", sa.Float(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("cpf", sa.String(length=32), nullable=True),
        sa.Column("phone", sa.String(length=64), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("address", sa.String(length=512), nullable=True),
        sa.Column("hire_date", sa.Date(), nullable=False),
        _created_at(),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("cpf"),
    )
    op.create_index(op.f("ix_employees_name"), "employees", ["name"], unique=False)

    op.create_table(
        "employee_transactions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("employee_id", sa.Integer(), nullable=False),
        sa.Column("type", sa.String(length=16), nullable=False),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.ForeignKeyConstraint(["employee_id"], ["employees.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_employee_transactions_employee_id"), "employee_transactions", ["employee_id"], unique=False
    )

    op.create_table(
        "trucks",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("plate", sa.String(length=16), nullable=False),
        sa.Column("brand", sa.String(length=120), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("doc_expiry", sa.Date(), nullable=False),
        sa.Column("renavam", sa.String(length=32), nullable=False),
        sa.Column("image", sa.Text(), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_trucks_plate"), "trucks", ["plate"], unique=True)

    op.create_table(
        "maintenances",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("truck_id", sa.Integer(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("service", sa.String(length=255), nullable=False),
        sa.Column("km", sa.Float(), nullable=False),
        sa.Column("value", sa.Float(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(["truck_id"], ["trucks.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_maintenances_truck_id"), "maintenances", ["truck_id"], unique=False)
    op.create_index(op.f("ix_maintenances_date"), "maintenances", ["date"], unique=False)

    op.create_table(
        "trips",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("truck_id", sa.Integer(), nullable=True),
        sa.Column("destination", sa.String(length=255), nullable=False),
        sa.Column("driver", sa.String(length=255), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("freight_value", sa.Float(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(["truck_id"], ["trucks.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_trips_truck_id"), "trips", ["truck_id"], unique=False)
    op.create_index(op.f("ix_trips_date"), "trips", ["date"], unique=False)
    op.create_index(op.f("ix_trips_status"), "trips", ["status"], unique=False)

    op.create_table(
        "trip_expenses",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("trip_id", sa.Integer(), nullable=False),
        sa.Column("description", sa.String(length=255), nullable=False),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("category", sa.String(length=120), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(["trip_id"], ["trips.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_trip_expenses_trip_id"), "trip_expenses", ["trip_id"], unique=False)
    op.create_index(op.f("ix_trip_expenses_date"), "trip_expenses", ["date"], unique=False)
    op.create_index(op.f("ix_trip_expenses_category"), "trip_expenses", ["category"], unique=False)

    op.create_table(
        "loads",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("company_id", sa.Integer(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("loading_number", sa.String(length=64), nullable=False),
        sa.Column("deliveries", sa.Integer(), nullable=False),
        sa.Column("cargo_weight", sa.Float(), nullable=False),
        sa.Column("total_value", sa.Float(), nullable=False),
        sa.Column("freight4", sa.Float(), nullable=False),
        sa.Column("total_freight", sa.Float(), nullable=False),
        sa.Column("closings", sa.Float(), nullable=False),
        sa.Column("observations", sa.Text(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["company_id"], ["companies.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_loads_company_id"), "loads", ["company_id"], unique=False)
    op.create_index(op.f("ix_loads_date"), "loads", ["date"], unique=False)

    op.create_table(
        "months",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("month", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=64), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("year", "month", name="uq_months_year_month"),
    )

    op.create_table(
        "closings",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("month_id", sa.Integer(), nullable=False),
        sa.Column("company_id", sa.Integer(), nullable=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("total_entries", sa.Float(), nullable=False),
        sa.Column("total_expenses", sa.Float(), nullable=False),
        sa.Column("total_taxes", sa.Float(), nullable=False),
        sa.Column("balance", sa.Float(), nullable=False),
        sa.Column("profit_margin", sa.Float(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["month_id"], ["months.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["company_id"], ["companies.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_closings_month_id"), "closings", ["month_id"], unique=False)
    op.create_index(op.f("ix_closings_company_id"), "closings", ["company_id"], unique=False)
    op.create_index(op.f("ix_closings_status"), "closings", ["status"], unique=False)

    op.create_table(
        "financial_entries",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("description", sa.String(length=255), nullable=False),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("category", sa.String(length=100), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("type", sa.String(length=16), nullable=False),
        sa.Column("company_id", sa.Integer(), nullable=True),
        sa.Column("closing_id", sa.Integer(), nullable=True),
        sa.Column("observations", sa.Text(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["company_id"], ["companies.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["closing_id"], ["closings.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_financial_entries_category"), "financial_entries", ["category"], unique=False)
    op.create_index(op.f("ix_financial_entries_date"), "financial_entries", ["date"], unique=False)
    op.create_index(op.f("ix_financial_entries_type"), "financial_entries", ["type"], unique=False)
    op.create_index(op.f("ix_financial_entries_company_id"), "financial_entries", ["company_id"], unique=False)
    op.create_index(op.f("ix_financial_entries_closing_id"), "financial_entries", ["closing_id"], unique=False)


def downgrade() -> None:
    op.drop_table("financial_entries")
    op.drop_table("closings")
    op.drop_table("months")
    op.drop_table("loads")
    op.drop_table("trip_expenses")
    op.drop_table("trips")
    op.drop_table("maintenances")
    op.drop_table("trucks")
    op.drop_table("employee_transactions")
    op.drop_table("employees")
    op.drop_table("companies")
