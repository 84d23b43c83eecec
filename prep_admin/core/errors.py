# prep_admin/core/errors.py
import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

NOT_IMPLEMENTED_MESSAGE = "This operation is not implemented for the relational backend"


class NotImplementedBackendError(Exception):
    """Raised by data-access operations that are not wired to the database yet."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"{NOT_IMPLEMENTED_MESSAGE}: {operation}")


def error_details(exc: Exception) -> dict:
    """
    Pull message / details / hint / code out of a database error.

    SQLAlchemy wraps the DB-API exception in ``orig``; psycopg2 exposes the
    server diagnostics on ``orig.diag``.
    """
    orig = getattr(exc, "orig", None) or exc
    diag = getattr(orig, "diag", None)

    message = getattr(diag, "message_primary", None) or str(orig)
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlite_errorname", None)
    if code is None and getattr(exc, "code", None):
        code = exc.code

    return {
        "message": message,
        "details": getattr(diag, "message_detail", None),
        "hint": getattr(diag, "message_hint", None),
        "code": code,
    }


def log_db_error(operation: str, exc: Exception) -> None:
    logger.error(f"Database error in {operation}: {error_details(exc)}")


@contextmanager
def db_errors(db: Session, operation: str) -> Iterator[None]:
    """Roll back, log the structured error fields and re-raise unchanged."""
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        log_db_error(operation, e)
        raise
