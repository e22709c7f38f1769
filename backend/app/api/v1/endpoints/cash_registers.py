from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from backend.app.core.database import get_db
from backend.app.models.pos import CashRegister, CashRegisterStatus
from backend.app.schemas.common import MessageOut
from backend.app.schemas.pos import (
    CashRegisterCreate,
    CashRegisterOut,
    CashRegisterUpdate,
)
from backend.app.services.cash_registers import (
    delete_cash_register,
    get_cash_register,
    list_cash_registers,
    open_cash_register,
    update_cash_register,
)

router = APIRouter()


@router.get("", response_model=list[CashRegisterOut])
def list_all_cash_registers(
    status_filter: CashRegisterStatus | None = Query(None, alias="status"),
    user_id: UUID | None = Query(None),
    db: Session = Depends(get_db),
) -> list[CashRegister]:
    return list_cash_registers(db, status=status_filter, user_id=user_id)


@router.post("", response_model=CashRegisterOut, status_code=status.HTTP_201_CREATED)
def open_new_cash_register(
    body: CashRegisterCreate, db: Session = Depends(get_db)
) -> CashRegister:
    register = open_cash_register(db, body)
    db.commit()
    db.refresh(register)
    return register


@router.get("/{cash_register_id}", response_model=CashRegisterOut)
def read_cash_register(
    cash_register_id: UUID, db: Session = Depends(get_db)
) -> CashRegister:
    return get_cash_register(db, cash_register_id)


@router.put("/{cash_register_id}", response_model=CashRegisterOut)
def update_existing_cash_register(
    cash_register_id: UUID,
    body: CashRegisterUpdate,
    db: Session = Depends(get_db),
) -> CashRegister:
    register = update_cash_register(db, cash_register_id, body)
    db.commit()
    db.refresh(register)
    return register


@router.delete("/{cash_register_id}", response_model=MessageOut)
def delete_existing_cash_register(
    cash_register_id: UUID, db: Session = Depends(get_db)
) -> dict[str, str]:
    delete_cash_register(db, cash_register_id)
    db.commit()
    return {"detail": "Cash register deleted"}
