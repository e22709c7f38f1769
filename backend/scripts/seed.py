"""Seed the database with an admin user and a starter product catalogue.

Usage:
    python -m backend.scripts.seed

Run the migrations first (``alembic upgrade head``).
"""

from __future__ import annotations

import os
from decimal import Decimal

from backend.app.core.database import SessionLocal
from backend.app.core.security import get_password_hash
# Import all models so SQLAlchemy resolves relationships
import backend.app.models.pos  # noqa: F401
from backend.app.models.product import Product
from backend.app.models.user import RoleEnum, User

ADMIN_EMAIL = "admin@pos.local"
ADMIN_PASSWORD = os.environ.get("SEED_ADMIN_PASSWORD", "change-me-admin")

PRODUCTS: list[tuple[str, str | None, Decimal]] = [
    ("Espresso", "Single shot", Decimal("6.50")),
    ("Cappuccino", "Espresso with steamed milk foam", Decimal("9.00")),
    ("Cheese Bread", "Pão de queijo, unit", Decimal("4.50")),
    ("Orange Juice", "Freshly squeezed, 300 ml", Decimal("8.00")),
    ("Croissant", None, Decimal("7.25")),
]


def seed() -> None:
    db = SessionLocal()
    try:
        # ── Admin user ─────────────────────────────────────────────────
        admin = db.query(User).filter_by(email=ADMIN_EMAIL).first()
        if admin:
            admin.hashed_password = get_password_hash(ADMIN_PASSWORD)
            admin.is_active = True
            print("Updated admin password.")
        else:
            db.add(
                User(
                    email=ADMIN_EMAIL,
                    name="Administrator",
                    hashed_password=get_password_hash(ADMIN_PASSWORD),
                    role=RoleEnum.ADMIN,
                )
            )
            print("Created admin user.")

        # ── Products ───────────────────────────────────────────────────
        for name, description, price in PRODUCTS:
            if db.query(Product).filter_by(name=name).first():
                continue
            db.add(Product(name=name, description=description, price=price))
            print(f"Created product: {name}")

        db.commit()
        print("Seed complete.")
    finally:
        db.close()


if __name__ == "__main__":
    seed()
