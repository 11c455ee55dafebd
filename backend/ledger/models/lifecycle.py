"""
Soft-delete lifecycle shared by expenses and groups.
"""
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from ledger.core.utils import UtcDatetime


class Active(BaseModel):
    model_config = ConfigDict(frozen=True)
    state: Literal["active"] = "active"


class Archived(BaseModel):
    model_config = ConfigDict(frozen=True)
    state: Literal["archived"] = "archived"


class Deleted(BaseModel):
    """Soft-deleted record; kept for audit but excluded from aggregation."""
    model_config = ConfigDict(frozen=True)
    state: Literal["deleted"] = "deleted"
    at: UtcDatetime


Lifecycle = Annotated[Union[Active, Archived, Deleted], Field(discriminator="state")]


def is_active(lifecycle) -> bool:
    return isinstance(lifecycle, Active)
