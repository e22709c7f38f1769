from __future__ import annotations

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from backend.app.core.database import get_db
from backend.app.models.pos import PaymentMethod, Sale, SaleStatus
from backend.app.schemas.common import MessageOut
from backend.app.schemas.pos import SaleCreate, SaleOut, SaleUpdate
from backend.app.services.sales import (
    create_sale,
    delete_sale,
    get_sale,
    list_sales,
    update_sale,
)

router = APIRouter()


@router.get("", response_model=list[SaleOut])
def list_all_sales(
    status_filter: SaleStatus | None = Query(None, alias="status"),
    user_id: UUID | None = Query(None),
    cash_register_id: UUID | None = Query(None),
    payment_method: PaymentMethod | None = Query(None),
    start_date: datetime | None = Query(None),
    end_date: datetime | None = Query(None),
    db: Session = Depends(get_db),
) -> list[Sale]:
    """List sales newest first. ``start_date`` and ``end_date`` are inclusive."""
    return list_sales(
        db,
        status=status_filter,
        user_id=user_id,
        cash_register_id=cash_register_id,
        payment_method=payment_method,
        start_date=start_date,
        end_date=end_date,
    )


@router.post("", response_model=SaleOut, status_code=status.HTTP_201_CREATED)
def create_new_sale(body: SaleCreate, db: Session = Depends(get_db)) -> Sale:
    sale = create_sale(db, body)
    db.commit()
    db.refresh(sale)
    return sale


@router.get("/{sale_id}", response_model=SaleOut)
def read_sale(sale_id: UUID, db: Session = Depends(get_db)) -> Sale:
    return get_sale(db, sale_id)


@router.put("/{sale_id}", response_model=SaleOut)
def update_existing_sale(
    sale_id: UUID,
    body: SaleUpdate,
    db: Session = Depends(get_db),
) -> Sale:
    sale = update_sale(db, sale_id, body)
    db.commit()
    db.refresh(sale)
    return sale


@router.delete("/{sale_id}", response_model=MessageOut)
def delete_existing_sale(sale_id: UUID, db: Session = Depends(get_db)) -> dict[str, str]:
    delete_sale(db, sale_id)
    db.commit()
    return {"detail": "Sale deleted"}
