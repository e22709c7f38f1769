"""Cash register balance reconciliation.

A register's ``current_amount`` equals its ``initial_amount`` plus the total
of every COMPLETED sale attached to it. Sale create, update and delete keep
that true by applying one signed delta per mutation:

    old status   new status   delta
    ----------   ----------   -----------------------
    COMPLETED    COMPLETED    new_total - old_total
    COMPLETED    other/None   -old_total
    other/None   COMPLETED    new_total
    other/None   other/None   0

``None`` stands for "no sale": the old side of a creation and the new side
of a deletion. Old and new status are compared exactly once, so a request
that changes both status and total is never counted twice.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.orm import Session

from backend.app.models.pos import CashRegister, SaleStatus

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def _contributes(status: SaleStatus | None) -> bool:
    return status == SaleStatus.COMPLETED


def balance_delta(
    old_status: SaleStatus | None,
    new_status: SaleStatus | None,
    old_total: Decimal | None,
    new_total: Decimal | None,
) -> Decimal:
    """Return the signed adjustment for a sale moving from old to new state.

    Pure function: no I/O, safe to call with any combination of inputs.
    """
    was_counted = _contributes(old_status)
    is_counted = _contributes(new_status)

    if was_counted and is_counted:
        return Decimal(new_total) - Decimal(old_total)
    if was_counted:
        return -Decimal(old_total)
    if is_counted:
        return Decimal(new_total)
    return ZERO


def apply_balance_delta(db: Session, cash_register_id: UUID, delta: Decimal) -> None:
    """Add ``delta`` to the register's running balance inside the caller's transaction.

    The increment is computed by the database (``SET current_amount =
    current_amount + :delta``) so concurrent writers serialize on the row
    instead of overwriting each other. A zero delta issues no statement.
    Does NOT call db.commit().
    """
    if delta == ZERO:
        return
    db.execute(
        update(CashRegister)
        .where(CashRegister.id == cash_register_id)
        .values(current_amount=CashRegister.current_amount + delta)
        .execution_options(synchronize_session="fetch")
    )
    logger.debug("Register %s balance adjusted by %s", cash_register_id, delta)
