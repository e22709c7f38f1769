from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, ValidationInfo, field_validator

from backend.app.models.user import RoleEnum
from backend.app.schemas.common import reject_null, upper_if_str


class UserOut(BaseModel):
    id: UUID
    email: str
    name: str
    role: RoleEnum
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class UserCreate(BaseModel):
    email: EmailStr
    name: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)
    role: RoleEnum = RoleEnum.USER

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, v: object) -> object:
        return upper_if_str(v)


class UserUpdate(BaseModel):
    """Partial update. Only fields present in the request body are applied."""

    email: EmailStr | None = None
    name: str | None = Field(None, min_length=1, max_length=255)
    password: str | None = Field(None, min_length=1, max_length=128)
    role: RoleEnum | None = None
    is_active: bool | None = None

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, v: object) -> object:
        return upper_if_str(v)

    @field_validator("email", "name", "password", "role", "is_active")
    @classmethod
    def not_null(cls, v: object, info: ValidationInfo) -> object:
        return reject_null(v, info.field_name or "value")
