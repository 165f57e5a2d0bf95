"""
Database utilities and error translation.
"""

import contextlib
import logging
from typing import Iterator

from django.db import DatabaseError, IntegrityError

from core.domain.exceptions import ConflictError, StorageError

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def translate_storage_errors(action: str) -> Iterator[None]:
    """
    Translate Django database errors into domain exceptions.

    IntegrityError becomes ConflictError so callers can react to
    "already exists"; any other DatabaseError becomes StorageError.

    Args:
        action: Short description used in log lines and messages
    """
    try:
        yield
    except IntegrityError as exc:
        logger.warning("Conflict while %s: %s", action, exc)
        raise ConflictError(str(exc)) from exc
    except DatabaseError as exc:
        logger.error("Storage error while %s: %s", action, exc, exc_info=True)
        raise StorageError(f"Storage error while {action}") from exc
