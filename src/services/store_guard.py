"""Translate unexpected collaborator failures into InternalError."""

import logging
from contextlib import contextmanager

from domain.model.errors import DomainError, InternalError

logger = logging.getLogger(__name__)


@contextmanager
def collaborator_errors(action: str):
    """Re-raise domain errors as-is; wrap anything else in InternalError."""
    try:
        yield
    except DomainError:
        raise
    except Exception as e:
        logger.error(f"Failed to {action}", exc_info=True)
        raise InternalError(f"Failed to {action}") from e
