"""Helpers for reading driver errors.

MySQL and SQLite word constraint failures differently, so the checks look for
the constraint name or the driver's phrasing in the original error message.
"""
import logging
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.errors import StorageError

logger = logging.getLogger(__name__)


def _message(error: IntegrityError) -> str:
    return str(getattr(error, "orig", error)).lower()


def is_unique_violation(error: IntegrityError, constraint: str, table: str) -> bool:
    """True when the error is a duplicate key on ``constraint`` of ``table``."""
    message = _message(error)
    if constraint.lower() in message:
        return True
    # SQLite: "UNIQUE constraint failed: table.col"; MySQL 1062: "Duplicate entry"
    return ("unique constraint failed" in message and f"{table}." in message) or (
        "duplicate entry" in message and table in message
    )


def is_foreign_key_violation(error: IntegrityError) -> bool:
    """True when the error is a failed foreign key (insert or restricted delete)."""
    message = _message(error)
    return "foreign key constraint" in message


@contextmanager
def storage_errors(session: Session, action: str):
    """Turn driver errors raised inside the block into ``StorageError``.

    Usage:
        with storage_errors(self.session, "load the vehicle"):
            row = self.session.get(models.Vehicle, vehicle_id)
    """
    try:
        yield
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Database error while trying to {action}: {e}", exc_info=True)
        raise StorageError(f"Error trying to {action}", cause=e) from e
