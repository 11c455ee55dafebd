"""
Shared route dependencies and error translation.
"""
from contextlib import contextmanager
import logging

from fastapi import HTTPException, status

from ledger.core.config import LedgerDefaults, get_defaults
from ledger.core.exceptions import CategoryNotFound, LedgerError, MemberNotFound

logger = logging.getLogger(__name__)


def get_ledger_defaults() -> LedgerDefaults:
    """Dependency for the engine defaults."""
    return get_defaults()


@contextmanager
def ledger_errors():
    """Translate engine errors raised inside the block into HTTP errors."""
    try:
        yield
    except (MemberNotFound, CategoryNotFound) as e:
        logger.warning(f"Lookup rejected: {e}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"code": e.code, "message": str(e)}
        )
    except LedgerError as e:
        logger.warning(f"Ledger rule rejected request: {e}")
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"code": e.code, "message": str(e)}
        )
