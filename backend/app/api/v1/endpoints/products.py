from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from backend.app.core.database import get_db
from backend.app.models.product import Product
from backend.app.schemas.common import MessageOut
from backend.app.schemas.products import ProductCreate, ProductOut, ProductUpdate
from backend.app.services.products import (
    create_product,
    delete_product,
    get_product,
    list_products,
    update_product,
)

router = APIRouter()


@router.get("", response_model=list[ProductOut])
def list_all_products(
    active: bool | None = Query(None),
    db: Session = Depends(get_db),
) -> list[Product]:
    return list_products(db, active=active)


@router.post("", response_model=ProductOut, status_code=status.HTTP_201_CREATED)
def create_new_product(body: ProductCreate, db: Session = Depends(get_db)) -> Product:
    product = create_product(db, body)
    db.commit()
    db.refresh(product)
    return product


@router.get("/{product_id}", response_model=ProductOut)
def read_product(product_id: UUID, db: Session = Depends(get_db)) -> Product:
    return get_product(db, product_id)


@router.put("/{product_id}", response_model=ProductOut)
def update_existing_product(
    product_id: UUID,
    body: ProductUpdate,
    db: Session = Depends(get_db),
) -> Product:
    product = update_product(db, product_id, body)
    db.commit()
    db.refresh(product)
    return product


@router.delete("/{product_id}", response_model=MessageOut)
def delete_existing_product(
    product_id: UUID, db: Session = Depends(get_db)
) -> dict[str, str]:
    delete_product(db, product_id)
    db.commit()
    return {"detail": "Product deleted"}
