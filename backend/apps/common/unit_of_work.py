from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator

from django.db import DatabaseError, transaction

from .errors import StorageFailureError
from .logger import get_logger

logger = get_logger(__name__).bind(component="common", layer="storage")


@contextmanager
def storage_errors(operation: str, **context: Any) -> Iterator[None]:
    """Re-raise database errors from the wrapped block as ``StorageFailureError``."""
    try:
        yield
    except DatabaseError as exc:
        logger.exception(
            "Storage operation failed",
            operation=operation,
            error_type=exc.__class__.__name__,
            **context,
        )
        raise StorageFailureError(details={"operation": operation}) from exc


@contextmanager
def unit_of_work(operation: str, **context: Any) -> Iterator[None]:
    """
    Run the wrapped block as one database transaction.

    The transaction commits when the block exits normally and rolls back on any
    exception, including domain errors raised from inside the block. Database
    errors surface to the caller as ``StorageFailureError`` after the rollback.
    """
    logger.debug("Opening unit of work", operation=operation, **context)
    with storage_errors(operation, **context):
        with transaction.atomic():
            yield
    logger.debug("Unit of work committed", operation=operation, **context)
