"""Small helpers shared by the CRUD routes: fetch-or-404, commit-or-conflict and search filters."""

import logging
from typing import TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fleetdesk.core.errors import Conflict, NotFound
from fleetdesk.models.base import Base

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


def get_or_404(db: Session, model: type[ModelT], obj_id: int, message: str) -> ModelT:
    """Load a row by primary key or raise NotFound with the given message."""
    obj = db.get(model, obj_id)
    if obj is None:
        raise NotFound(message)
    return obj


def commit_or_conflict(db: Session, message: str, *, status_code: int | None = None) -> None:
    """
    Commit the session; a unique/foreign key violation rolls back and becomes Conflict.

    Routes pre-check the common duplicates; this catches the race between check and write.
    """
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.info("Integrity violation converted to conflict: %s", e.orig)
        raise Conflict(message, status_code=status_code) from e


def ensure_absent(db: Session, query, message: str, *, status_code: int | None = None) -> None:
    """Raise Conflict when the query matches a row (duplicate pre-check)."""
    if db.query(query.exists()).scalar():
        raise Conflict(message, status_code=status_code)


LIKE_ESCAPE = "\\"


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so `text` matches literally."""
    return (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def icontains(column, text: str):
    """Case-insensitive substring filter on `column`; `%` and `_` in `text` are literal."""
    return column.ilike(f"%{escape_like(text)}%", escape=LIKE_ESCAPE)
