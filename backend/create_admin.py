"""One-time script to create an admin user.

Usage:
    python -m backend.create_admin
"""

from __future__ import annotations

import getpass

from sqlalchemy import func

from backend.app.core.database import SessionLocal
from backend.app.core.security import get_password_hash

# Import all models so SQLAlchemy resolves relationships
import backend.app.models.pos  # noqa: F401

from backend.app.models.user import RoleEnum, User


def main() -> None:
    email = input("Email [admin@pos.local]: ").strip() or "admin@pos.local"
    name = input("Name [Administrator]: ").strip() or "Administrator"
    password = getpass.getpass("Password: ")
    if not password:
        print("Error: password cannot be empty.")
        return

    db = SessionLocal()
    try:
        existing = db.query(User).filter(func.lower(User.email) == email.lower()).first()
        if existing:
            # Reset password, activate and promote
            existing.hashed_password = get_password_hash(password)
            existing.is_active = True
            existing.role = RoleEnum.ADMIN
            db.commit()
            print("Admin user already exists, password reset.")
            print(f"  ID:    {existing.id}")
            print(f"  Email: {existing.email}")
            return

        user = User(
            email=email,
            name=name,
            hashed_password=get_password_hash(password),
            role=RoleEnum.ADMIN,
        )
        db.add(user)
        db.commit()
        db.refresh(user)

        print("Admin user created successfully!")
        print(f"  ID:    {user.id}")
        print(f"  Email: {email}")
        print("  Role:  ADMIN")
    finally:
        db.close()


if __name__ == "__main__":
    main()
