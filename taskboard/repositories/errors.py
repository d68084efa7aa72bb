"""Translate SQLAlchemy failures into the application's StoreError."""

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError

from taskboard.errors import StoreError

logger = logging.getLogger(__name__)


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """Wrap a block of repository calls; any SQLAlchemy error becomes StoreError."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.exception("Store operation failed: %s", operation)
        raise StoreError(f"Storage failure during {operation}") from exc
