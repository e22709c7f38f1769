"""Sale service: sale CRUD with register balance reconciliation.

Every mutation writes the sale row and the register balance adjustment in
the same session; the caller commits once, so both persist or neither does.
This module does NOT call db.commit().
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy.orm import Session

from backend.app.core.errors import conflict, not_found
from backend.app.models.pos import (
    CashRegister,
    CashRegisterStatus,
    PaymentMethod,
    Sale,
    SaleStatus,
)
from backend.app.models.user import User
from backend.app.schemas.pos import SaleCreate, SaleItem, SaleUpdate
from backend.app.services.reconciliation import apply_balance_delta, balance_delta

logger = logging.getLogger(__name__)


def _serialize_items(items: list[SaleItem]) -> list[dict]:
    return [item.model_dump(mode="json") for item in items]


def _as_utc(value: datetime) -> datetime:
    # SQLite drops the offset when binding, so compare in UTC
    return value.astimezone(timezone.utc) if value.tzinfo is not None else value


def _ensure_register_open(register: CashRegister, action: str) -> None:
    if register.status != CashRegisterStatus.OPEN:
        logger.warning("Refused to %s on closed register %s", action, register.id)
        raise conflict(f"Cannot {action} on a closed cash register")


def list_sales(
    db: Session,
    *,
    status: SaleStatus | None = None,
    user_id: UUID | None = None,
    cash_register_id: UUID | None = None,
    payment_method: PaymentMethod | None = None,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
) -> list[Sale]:
    """Return sales newest first. Both date bounds are inclusive."""
    query = db.query(Sale)
    if status is not None:
        query = query.filter(Sale.status == status)
    if user_id is not None:
        query = query.filter(Sale.user_id == user_id)
    if cash_register_id is not None:
        query = query.filter(Sale.cash_register_id == cash_register_id)
    if payment_method is not None:
        query = query.filter(Sale.payment_method == payment_method)
    if start_date is not None:
        query = query.filter(Sale.created_at >= _as_utc(start_date))
    if end_date is not None:
        query = query.filter(Sale.created_at <= _as_utc(end_date))
    return query.order_by(Sale.created_at.desc()).all()


def get_sale(db: Session, sale_id: UUID) -> Sale:
    sale = db.query(Sale).filter(Sale.id == sale_id).first()
    if not sale:
        raise not_found("Sale not found")
    return sale


def create_sale(db: Session, payload: SaleCreate) -> Sale:
    """Record a sale on an OPEN register.

    A COMPLETED sale credits its total to the register; PENDING and
    CANCELLED sales leave the balance untouched.
    """
    user = db.query(User).filter(User.id == payload.user_id).first()
    if not user:
        raise not_found("User not found")

    register = (
        db.query(CashRegister)
        .filter(CashRegister.id == payload.cash_register_id)
        .first()
    )
    if not register:
        raise not_found("Cash register not found")
    _ensure_register_open(register, "record sales")

    sale = Sale(
        cash_register_id=register.id,
        user_id=user.id,
        items=_serialize_items(payload.items),
        total=payload.total,
        payment_method=payload.payment_method,
        status=payload.status,
    )
    db.add(sale)
    db.flush()

    delta = balance_delta(None, sale.status, None, sale.total)
    apply_balance_delta(db, register.id, delta)
    db.flush()

    logger.info(
        "Sale created: %s register=%s status=%s total=%s delta=%s",
        sale.id,
        register.id,
        sale.status.value,
        sale.total,
        delta,
    )
    return sale


def update_sale(db: Session, sale_id: UUID, payload: SaleUpdate) -> Sale:
    """Apply the fields present in ``payload`` and reconcile the register balance."""
    sale = get_sale(db, sale_id)
    _ensure_register_open(sale.cash_register, "modify sales")

    fields = payload.model_dump(exclude_unset=True)
    old_status, old_total = sale.status, sale.total

    if "items" in fields:
        sale.items = _serialize_items(payload.items or [])
    if "total" in fields:
        sale.total = fields["total"]
    if "payment_method" in fields:
        sale.payment_method = fields["payment_method"]
    if "status" in fields:
        sale.status = fields["status"]

    delta = balance_delta(old_status, sale.status, old_total, sale.total)
    db.flush()
    apply_balance_delta(db, sale.cash_register_id, delta)
    db.flush()

    logger.info(
        "Sale updated: %s fields=%s status=%s->%s delta=%s",
        sale.id,
        sorted(fields),
        old_status.value,
        sale.status.value,
        delta,
    )
    return sale


def delete_sale(db: Session, sale_id: UUID) -> None:
    """Remove a sale, debiting its total from the register if it was COMPLETED."""
    sale = get_sale(db, sale_id)
    _ensure_register_open(sale.cash_register, "delete sales")

    delta = balance_delta(sale.status, None, sale.total, None)
    cash_register_id = sale.cash_register_id
    apply_balance_delta(db, cash_register_id, delta)
    db.delete(sale)
    db.flush()

    logger.info("Sale deleted: %s register=%s delta=%s", sale_id, cash_register_id, delta)
