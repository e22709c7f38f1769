from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy.orm import Session

from backend.app.core.errors import conflict, not_found
from backend.app.models.product import Product
from backend.app.schemas.products import ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)


def _name_taken(db: Session, name: str, exclude_id: UUID | None = None) -> bool:
    query = db.query(Product.id).filter(Product.name == name)
    if exclude_id is not None:
        query = query.filter(Product.id != exclude_id)
    return query.first() is not None


def list_products(db: Session, *, active: bool | None = None) -> list[Product]:
    query = db.query(Product)
    if active is not None:
        query = query.filter(Product.is_active == active)
    return query.order_by(Product.name).all()


def get_product(db: Session, product_id: UUID) -> Product:
    product = db.query(Product).filter(Product.id == product_id).first()
    if not product:
        raise not_found("Product not found")
    return product


def create_product(db: Session, payload: ProductCreate) -> Product:
    if _name_taken(db, payload.name):
        raise conflict("A product with this name already exists")

    product = Product(
        name=payload.name,
        description=payload.description,
        price=payload.price,
        image_uri=payload.image_uri,
    )
    db.add(product)
    db.flush()
    logger.info("Product created: %s (%s)", product.id, product.name)
    return product


def update_product(db: Session, product_id: UUID, payload: ProductUpdate) -> Product:
    """Apply the fields present in ``payload``. Keeping the own name is allowed."""
    product = get_product(db, product_id)
    fields = payload.model_dump(exclude_unset=True)

    if "name" in fields and fields["name"] != product.name:
        if _name_taken(db, fields["name"], exclude_id=product_id):
            raise conflict("A product with this name already exists")

    for attr in ("name", "description", "price", "image_uri", "is_active"):
        if attr in fields:
            setattr(product, attr, fields[attr])

    db.flush()
    logger.info("Product updated: %s fields=%s", product.id, sorted(fields))
    return product


def delete_product(db: Session, product_id: UUID) -> None:
    product = get_product(db, product_id)
    db.delete(product)
    db.flush()
    logger.info("Product deleted: %s", product_id)
