from __future__ import annotations

import enum
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import (
    JSON,
    CheckConstraint,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Numeric,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backend.app.core.database import Base
from backend.app.models.user import User


class PaymentMethod(str, enum.Enum):
    CASH = "CASH"
    CARD = "CARD"
    PIX = "PIX"


class CashRegisterStatus(str, enum.Enum):
    OPEN = "OPEN"
    CLOSED = "CLOSED"


class SaleStatus(str, enum.Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class CashRegister(Base):
    """A user's cash drawer for one work session.

    ``current_amount`` is a running balance: the initial amount plus the
    totals of every COMPLETED sale attached to the register. It is adjusted
    incrementally by the sale service and never recomputed from scratch.
    """

    __tablename__ = "cash_registers"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id"), nullable=False
    )
    status: Mapped[CashRegisterStatus] = mapped_column(
        Enum(CashRegisterStatus), nullable=False, default=CashRegisterStatus.OPEN
    )
    initial_amount: Mapped[Decimal] = mapped_column(
        Numeric(precision=20, scale=4), nullable=False, default=Decimal("0")
    )
    current_amount: Mapped[Decimal] = mapped_column(
        Numeric(precision=20, scale=4), nullable=False, default=Decimal("0")
    )
    final_amount: Mapped[Decimal | None] = mapped_column(
        Numeric(precision=20, scale=4), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
    closed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    user: Mapped[User] = relationship(back_populates="cash_registers")
    sales: Mapped[list[Sale]] = relationship(
        back_populates="cash_register", order_by="Sale.created_at.desc()"
    )

    __table_args__ = (
        CheckConstraint("initial_amount >= 0", name="ck_cash_register_initial_non_negative"),
        Index("ix_cash_registers_user", "user_id"),
        Index("ix_cash_registers_status", "status"),
        Index("ix_cash_registers_created_at", "created_at"),
    )


class Sale(Base):
    __tablename__ = "sales"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    cash_register_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("cash_registers.id"), nullable=False
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id"), nullable=False
    )
    # [{"product_id": "...", "quantity": "1.5", "price": "10.50"}, ...]
    items: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False)
    total: Mapped[Decimal] = mapped_column(
        Numeric(precision=20, scale=4), nullable=False
    )
    payment_method: Mapped[PaymentMethod] = mapped_column(
        Enum(PaymentMethod), nullable=False
    )
    status: Mapped[SaleStatus] = mapped_column(
        Enum(SaleStatus), nullable=False, default=SaleStatus.COMPLETED
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    cash_register: Mapped[CashRegister] = relationship(back_populates="sales")
    user: Mapped[User] = relationship(back_populates="sales")

    __table_args__ = (
        CheckConstraint("total > 0", name="ck_sale_total_positive"),
        Index("ix_sales_cash_register", "cash_register_id"),
        Index("ix_sales_user", "user_id"),
        Index("ix_sales_status", "status"),
        Index("ix_sales_created_at", "created_at"),
    )
