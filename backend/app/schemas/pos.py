from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ValidationInfo, field_validator

from backend.app.models.pos import CashRegisterStatus, PaymentMethod, SaleStatus
from backend.app.schemas.common import UserSummary, reject_null, upper_if_str


# ─── Sale items ───────────────────────────────────────────────────────────────


class SaleItem(BaseModel):
    product_id: UUID
    quantity: Decimal
    price: Decimal

    @field_validator("quantity")
    @classmethod
    def quantity_positive(cls, v: Decimal) -> Decimal:
        if v <= 0:
            raise ValueError("Quantity must be greater than zero")
        return v

    @field_validator("price")
    @classmethod
    def price_positive(cls, v: Decimal) -> Decimal:
        if v <= 0:
            raise ValueError("Price must be greater than zero")
        return v


def _non_empty_items(v: list[SaleItem] | None) -> list[SaleItem]:
    if not v:
        raise ValueError("Sale must contain at least one item")
    return v


def _positive_total(v: Decimal | None) -> Decimal:
    if v is None or v <= 0:
        raise ValueError("Total must be greater than zero")
    return v


# ─── Cash registers ───────────────────────────────────────────────────────────


class CashRegisterCreate(BaseModel):
    user_id: UUID
    initial_amount: Decimal = Decimal("0")

    @field_validator("initial_amount")
    @classmethod
    def amount_non_negative(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("Initial amount must be non-negative")
        return v


class CashRegisterUpdate(BaseModel):
    """Partial update. Only fields present in the request body are applied."""

    status: CashRegisterStatus | None = None
    current_amount: Decimal | None = None
    final_amount: Decimal | None = None

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, v: object) -> object:
        return upper_if_str(v)

    @field_validator("status")
    @classmethod
    def status_not_null(cls, v: object, info: ValidationInfo) -> object:
        return reject_null(v, info.field_name or "status")

    @field_validator("current_amount", "final_amount")
    @classmethod
    def amount_non_negative(cls, v: Decimal | None, info: ValidationInfo) -> Decimal:
        v = reject_null(v, info.field_name or "amount")
        if v < 0:
            raise ValueError(f"{info.field_name} must be non-negative")
        return v


class SaleSummary(BaseModel):
    id: UUID
    total: Decimal
    payment_method: PaymentMethod
    status: SaleStatus
    items: list[SaleItem]
    created_at: datetime

    class Config:
        from_attributes = True


class CashRegisterOut(BaseModel):
    id: UUID
    user_id: UUID
    status: CashRegisterStatus
    initial_amount: Decimal
    current_amount: Decimal
    final_amount: Decimal | None
    created_at: datetime
    updated_at: datetime
    closed_at: datetime | None
    user: UserSummary
    sales: list[SaleSummary] = []

    class Config:
        from_attributes = True


class CashRegisterSummary(BaseModel):
    id: UUID
    status: CashRegisterStatus
    initial_amount: Decimal
    current_amount: Decimal
    created_at: datetime

    class Config:
        from_attributes = True


# ─── Sales ────────────────────────────────────────────────────────────────────


class SaleCreate(BaseModel):
    cash_register_id: UUID
    user_id: UUID
    items: list[SaleItem]
    total: Decimal
    payment_method: PaymentMethod
    status: SaleStatus = SaleStatus.COMPLETED

    @field_validator("payment_method", "status", mode="before")
    @classmethod
    def normalize_enums(cls, v: object) -> object:
        return upper_if_str(v)

    @field_validator("items")
    @classmethod
    def at_least_one_item(cls, v: list[SaleItem]) -> list[SaleItem]:
        return _non_empty_items(v)

    @field_validator("total")
    @classmethod
    def total_positive(cls, v: Decimal) -> Decimal:
        return _positive_total(v)


class SaleUpdate(BaseModel):
    """Partial update. Only fields present in the request body are applied."""

    items: list[SaleItem] | None = None
    total: Decimal | None = None
    payment_method: PaymentMethod | None = None
    status: SaleStatus | None = None

    @field_validator("payment_method", "status", mode="before")
    @classmethod
    def normalize_enums(cls, v: object) -> object:
        return upper_if_str(v)

    @field_validator("payment_method", "status")
    @classmethod
    def not_null(cls, v: object, info: ValidationInfo) -> object:
        return reject_null(v, info.field_name or "value")

    @field_validator("items")
    @classmethod
    def at_least_one_item(cls, v: list[SaleItem] | None) -> list[SaleItem]:
        return _non_empty_items(v)

    @field_validator("total")
    @classmethod
    def total_positive(cls, v: Decimal | None) -> Decimal:
        return _positive_total(v)


class SaleOut(BaseModel):
    id: UUID
    cash_register_id: UUID
    user_id: UUID
    items: list[SaleItem]
    total: Decimal
    payment_method: PaymentMethod
    status: SaleStatus
    created_at: datetime
    updated_at: datetime
    user: UserSummary
    cash_register: CashRegisterSummary

    class Config:
        from_attributes = True
