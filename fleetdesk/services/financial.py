"""Closing aggregation over financial entries, and the store queries that feed it."""

from collections.abc import Iterable
from datetime import date
from typing import Any

from sqlalchemy.orm import Session

from fleetdesk.models import Closing, FinancialEntry, Month
from fleetdesk.schemas.financial import EntryCounts, FinancialTotals, MonthStats
from fleetdesk.services.crud import icontains

MONTH_NAMES_PT = (
    "Janeiro",
    "Fevereiro",
    "Março",
    "Abril",
    "Maio",
    "Junho",
    "Julho",
    "Agosto",
    "Setembro",
    "Outubro",
    "Novembro",
    "Dezembro",
)


def _field(entry: Any, name: str) -> Any:
    if isinstance(entry, dict):
        return entry.get(name)
    return getattr(entry, name, None)


def summarize_entries(entries: Iterable[Any]) -> FinancialTotals:
    """
    Fold entries (ORM rows, objects or dicts with `type` and `amount`) into closing totals.

    entrada adds to total_entries, saida to total_expenses, imposto to
    total_taxes; any other type is ignored. profit_margin is a percentage of
    total_entries and 0 when there are no entries.
    """
    totals = {"entrada": 0.0, "saida": 0.0, "imposto": 0.0}
    for entry in entries:
        entry_type = _field(entry, "type")
        if entry_type in totals:
            totals[entry_type] += float(_field(entry, "amount") or 0)

    total_entries = totals["entrada"]
    balance = total_entries - totals["saida"] - totals["imposto"]
    margin = (balance / total_entries) * 100 if total_entries > 0 else 0.0
    return FinancialTotals(
        total_entries=total_entries,
        total_expenses=totals["saida"],
        total_taxes=totals["imposto"],
        balance=balance,
        profit_margin=margin,
    )


def count_entries(entries: Iterable[Any]) -> EntryCounts:
    counts = {"entrada": 0, "saida": 0, "imposto": 0}
    total = 0
    for entry in entries:
        total += 1
        entry_type = _field(entry, "type")
        if entry_type in counts:
            counts[entry_type] += 1
    return EntryCounts(
        entries=counts["entrada"],
        expenses=counts["saida"],
        taxes=counts["imposto"],
        total=total,
    )


def month_name(month: int, year: int) -> str:
    return f"{MONTH_NAMES_PT[month - 1]} {year}"


def query_entries(
    db: Session,
    *,
    start_date: date | None = None,
    end_date: date | None = None,
    company_id: int | None = None,
    entry_type: str | None = None,
    category: str | None = None,
    closing_id: int | None = None,
) -> list[FinancialEntry]:
    query = db.query(FinancialEntry)
    if start_date:
        query = query.filter(FinancialEntry.date >= start_date)
    if end_date:
        query = query.filter(FinancialEntry.date <= end_date)
    if company_id:
        query = query.filter(FinancialEntry.company_id == company_id)
    if entry_type:
        query = query.filter(FinancialEntry.type == entry_type)
    if category:
        query = query.filter(icontains(FinancialEntry.category, category))
    if closing_id:
        query = query.filter(FinancialEntry.closing_id == closing_id)
    return query.order_by(FinancialEntry.date.desc(), FinancialEntry.id.desc()).all()


def close_closing(db: Session, closing: Closing) -> Closing:
    """Store the totals snapshot computed from the closing's entries and mark it fechado."""
    totals = summarize_entries(query_entries(db, closing_id=closing.id))
    closing.total_entries = totals.total_entries
    closing.total_expenses = totals.total_expenses
    closing.total_taxes = totals.total_taxes
    closing.balance = totals.balance
    closing.profit_margin = totals.profit_margin
    closing.status = "fechado"
    return closing


def month_stats(db: Session, month: Month) -> MonthStats:
    closings = db.query(Closing).filter(Closing.month_id == month.id).all()
    closing_ids = [c.id for c in closings]
    entries = (
        db.query(FinancialEntry).filter(FinancialEntry.closing_id.in_(closing_ids)).all()
        if closing_ids
        else []
    )
    totals = summarize_entries(entries)
    closed = sum(1 for c in closings if c.status == "fechado")
    return MonthStats(
        **totals.model_dump(),
        total_closings=len(closings),
        closed_closings=closed,
        open_closings=sum(1 for c in closings if c.status == "aberto"),
    )
