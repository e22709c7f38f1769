"""User management service: CRUD operations for user accounts.

This module does NOT call db.commit(); the caller (endpoint) is responsible
for committing.
"""

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from backend.app.core.errors import conflict, not_found
from backend.app.core.security import get_password_hash
from backend.app.models.pos import CashRegister, Sale
from backend.app.models.user import User
from backend.app.schemas.users import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


def _email_taken(db: Session, email: str, exclude_id: UUID | None = None) -> bool:
    query = db.query(User.id).filter(func.lower(User.email) == email.lower())
    if exclude_id is not None:
        query = query.filter(User.id != exclude_id)
    return query.first() is not None


def list_users(db: Session, *, active: bool | None = None) -> list[User]:
    """Return all users ordered by creation date descending."""
    query = db.query(User)
    if active is not None:
        query = query.filter(User.is_active == active)
    return query.order_by(User.created_at.desc()).all()


def get_user(db: Session, user_id: UUID) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise not_found("User not found")
    return user


def create_user(db: Session, payload: UserCreate) -> User:
    """Create a user account. Raises a conflict if the email is taken."""
    if _email_taken(db, payload.email):
        raise conflict("Email already in use")

    user = User(
        email=payload.email,
        name=payload.name,
        hashed_password=get_password_hash(payload.password),
        role=payload.role,
    )
    db.add(user)
    db.flush()
    logger.info("User created: %s (%s)", user.id, user.role.value)
    return user


def update_user(db: Session, user_id: UUID, payload: UserUpdate) -> User:
    user = get_user(db, user_id)
    fields = payload.model_dump(exclude_unset=True)

    email = fields.get("email")
    if email is not None and email.lower() != user.email.lower():
        if _email_taken(db, email, exclude_id=user_id):
            raise conflict("Email already in use")
    if email is not None:
        user.email = email

    if "name" in fields:
        user.name = fields["name"]
    if "role" in fields:
        user.role = fields["role"]
    if "is_active" in fields:
        user.is_active = fields["is_active"]
    if "password" in fields:
        user.hashed_password = get_password_hash(fields["password"])

    db.flush()
    logger.info("User updated: %s fields=%s", user.id, sorted(fields))
    return user


def delete_user(db: Session, user_id: UUID) -> None:
    """Delete a user that owns no registers and no sales."""
    user = get_user(db, user_id)

    owns_registers = (
        db.query(CashRegister.id).filter(CashRegister.user_id == user_id).first()
    )
    owns_sales = db.query(Sale.id).filter(Sale.user_id == user_id).first()
    if owns_registers or owns_sales:
        logger.warning("Refused to delete user %s: has registers or sales", user_id)
        raise conflict("Cannot delete a user with cash registers or sales")

    db.delete(user)
    db.flush()
    logger.info("User deleted: %s", user_id)
