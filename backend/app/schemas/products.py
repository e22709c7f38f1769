from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from backend.app.schemas.common import reject_null


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    price: Decimal
    description: str | None = None
    image_uri: str | None = Field(None, max_length=1024)

    @field_validator("price")
    @classmethod
    def price_positive(cls, v: Decimal) -> Decimal:
        if v <= 0:
            raise ValueError("Price must be greater than zero")
        return v


class ProductUpdate(BaseModel):
    """Partial update.

    ``description`` and ``image_uri`` may be cleared by sending ``null``;
    ``name``, ``price`` and ``is_active`` may not.
    """

    name: str | None = Field(None, min_length=1, max_length=255)
    price: Decimal | None = None
    description: str | None = None
    image_uri: str | None = Field(None, max_length=1024)
    is_active: bool | None = None

    @field_validator("name", "is_active")
    @classmethod
    def not_null(cls, v: object, info: ValidationInfo) -> object:
        return reject_null(v, info.field_name or "value")

    @field_validator("price")
    @classmethod
    def price_positive(cls, v: Decimal | None) -> Decimal:
        if v is None or v <= 0:
            raise ValueError("Price must be greater than zero")
        return v


class ProductOut(BaseModel):
    id: UUID
    name: str
    description: str | None
    price: Decimal
    image_uri: str | None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
