"""Cash register lifecycle: open, adjust, close, delete.

A user holds at most one OPEN register at a time. This module does NOT call
db.commit(); the caller (endpoint) is responsible for committing.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy.orm import Session

from backend.app.core.errors import conflict, not_found
from backend.app.models.pos import CashRegister, CashRegisterStatus, Sale
from backend.app.models.user import User
from backend.app.schemas.pos import CashRegisterCreate, CashRegisterUpdate

logger = logging.getLogger(__name__)


def _open_register_for(
    db: Session, user_id: UUID, exclude_id: UUID | None = None
) -> CashRegister | None:
    query = db.query(CashRegister).filter(
        CashRegister.user_id == user_id,
        CashRegister.status == CashRegisterStatus.OPEN,
    )
    if exclude_id is not None:
        query = query.filter(CashRegister.id != exclude_id)
    return query.first()


def list_cash_registers(
    db: Session,
    *,
    status: CashRegisterStatus | None = None,
    user_id: UUID | None = None,
) -> list[CashRegister]:
    """Return registers newest first, optionally filtered by status and owner."""
    query = db.query(CashRegister)
    if status is not None:
        query = query.filter(CashRegister.status == status)
    if user_id is not None:
        query = query.filter(CashRegister.user_id == user_id)
    return query.order_by(CashRegister.created_at.desc()).all()


def get_cash_register(db: Session, cash_register_id: UUID) -> CashRegister:
    register = (
        db.query(CashRegister).filter(CashRegister.id == cash_register_id).first()
    )
    if not register:
        raise not_found("Cash register not found")
    return register


def open_cash_register(db: Session, payload: CashRegisterCreate) -> CashRegister:
    """Open a new register for a user. The running balance starts at the initial amount."""
    user = db.query(User).filter(User.id == payload.user_id).first()
    if not user:
        raise not_found("User not found")

    if _open_register_for(db, payload.user_id):
        logger.warning("User %s already has an open register", payload.user_id)
        raise conflict("User already has an open cash register")

    register = CashRegister(
        user_id=payload.user_id,
        status=CashRegisterStatus.OPEN,
        initial_amount=payload.initial_amount,
        current_amount=payload.initial_amount,
    )
    db.add(register)
    db.flush()
    logger.info(
        "Cash register opened: %s user=%s initial=%s",
        register.id,
        register.user_id,
        register.initial_amount,
    )
    return register


def update_cash_register(
    db: Session, cash_register_id: UUID, payload: CashRegisterUpdate
) -> CashRegister:
    """Adjust amounts and/or move the register between OPEN and CLOSED.

    Closing without ``final_amount`` records the current balance as the
    final amount. Re-opening is refused while the owner has another OPEN
    register.
    """
    register = get_cash_register(db, cash_register_id)
    fields = payload.model_dump(exclude_unset=True)
    new_status = fields.get("status")

    if "current_amount" in fields:
        register.current_amount = fields["current_amount"]
    if "final_amount" in fields:
        register.final_amount = fields["final_amount"]

    if new_status == CashRegisterStatus.CLOSED and register.status == CashRegisterStatus.OPEN:
        register.status = CashRegisterStatus.CLOSED
        register.closed_at = datetime.now(timezone.utc)
        if "final_amount" not in fields:
            register.final_amount = register.current_amount
        logger.info(
            "Cash register closed: %s final=%s", register.id, register.final_amount
        )
    elif new_status == CashRegisterStatus.OPEN and register.status == CashRegisterStatus.CLOSED:
        if _open_register_for(db, register.user_id, exclude_id=register.id):
            raise conflict("User already has an open cash register")
        register.status = CashRegisterStatus.OPEN
        register.closed_at = None
        if "final_amount" not in fields:
            register.final_amount = None
        logger.info("Cash register reopened: %s", register.id)

    db.flush()
    return register


def delete_cash_register(db: Session, cash_register_id: UUID) -> None:
    """Delete a register that has never had a sale recorded against it."""
    register = get_cash_register(db, cash_register_id)

    has_sales = (
        db.query(Sale.id).filter(Sale.cash_register_id == cash_register_id).first()
    )
    if has_sales:
        logger.warning("Refused to delete register %s: has sales", cash_register_id)
        raise conflict("Cannot delete a cash register with associated sales")

    db.delete(register)
    db.flush()
    logger.info("Cash register deleted: %s", cash_register_id)
