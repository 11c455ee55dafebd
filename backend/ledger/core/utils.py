"""
Date utilities.
"""
from datetime import datetime, timezone
from typing import Annotated, Optional

from pydantic import AfterValidator


def to_utc_naive(value: Optional[datetime]) -> Optional[datetime]:
    """
    Convert an aware datetime to naive UTC.

    Naive datetimes are taken to be UTC already and returned unchanged, so
    naive and aware inputs can be compared after conversion.
    """
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


# Datetime field stored as naive UTC
UtcDatetime = Annotated[datetime, AfterValidator(to_utc_naive)]
