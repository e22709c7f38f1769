from __future__ import annotations

from typing import Any
from uuid import UUID

from pydantic import BaseModel


class MessageOut(BaseModel):
    detail: str


class UserSummary(BaseModel):
    id: UUID
    name: str
    email: str

    class Config:
        from_attributes = True


def upper_if_str(v: Any) -> Any:
    """Accept enum values case-insensitively (``"cash"`` → ``"CASH"``)."""
    return v.upper() if isinstance(v, str) else v


def reject_null(v: Any, field: str) -> Any:
    """Refuse an explicit ``null`` for a field that cannot be cleared."""
    if v is None:
        raise ValueError(f"{field} cannot be null")
    return v
