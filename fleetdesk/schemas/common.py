"""Shared schema building blocks: flexible dates and simple message bodies."""

from datetime import date, datetime
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, Field


def parse_flexible_date(value: Any) -> Any:
    """
    Accept DD/MM/YYYY (as typed in the back-office forms) or ISO 8601 date/datetime.

    Returns a date; anything else is handed to pydantic unchanged so it reports the error.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date) or not isinstance(value, str):
        return value
    s = value.strip()
    if not s:
        raise ValueError("date must be non-empty")
    if "/" in s:
        parts = s.split("/")
        if len(parts) != 3 or not all(p.strip().isdigit() for p in parts):
            raise ValueError("invalid date, use DD/MM/YYYY or ISO 8601")
        day, month, year = (int(p) for p in parts)
        if not 1900 <= year <= 2100:
            raise ValueError("invalid date, year must be between 1900 and 2100")
        try:
            return date(year, month, day)
        except ValueError as e:
            raise ValueError("invalid date, this day does not exist in the calendar") from e
    try:
        if "T" in s or " " in s:
            return datetime.fromisoformat(s).date()
        return date.fromisoformat(s)
    except ValueError as e:
        raise ValueError("invalid date, use DD/MM/YYYY or ISO 8601") from e


FlexibleDate = Annotated[date, BeforeValidator(parse_flexible_date)]


def blank_to_none(value: Any) -> Any:
    """Treat empty/whitespace strings from forms as missing."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


OptionalText = Annotated[str | None, BeforeValidator(blank_to_none)]


class MessageResponse(BaseModel):
    """Plain acknowledgement body."""

    message: str = Field(..., description="Human-readable result")


class DateWindow(BaseModel):
    """Inclusive date window echoed back by summaries."""

    start_date: date | None = None
    end_date: date | None = None
