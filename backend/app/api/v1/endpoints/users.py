from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from backend.app.core.database import get_db
from backend.app.models.user import User
from backend.app.schemas.common import MessageOut
from backend.app.schemas.users import UserCreate, UserOut, UserUpdate
from backend.app.services.users import (
    create_user,
    delete_user,
    get_user,
    list_users,
    update_user,
)

router = APIRouter()


@router.get("", response_model=list[UserOut])
def list_all_users(
    active: bool | None = Query(None),
    db: Session = Depends(get_db),
) -> list[User]:
    return list_users(db, active=active)


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_new_user(body: UserCreate, db: Session = Depends(get_db)) -> User:
    """Create a user account. The password is stored hashed and never returned."""
    user = create_user(db, body)
    db.commit()
    db.refresh(user)
    return user


@router.get("/{user_id}", response_model=UserOut)
def read_user(user_id: UUID, db: Session = Depends(get_db)) -> User:
    return get_user(db, user_id)


@router.put("/{user_id}", response_model=UserOut)
def update_existing_user(
    user_id: UUID,
    body: UserUpdate,
    db: Session = Depends(get_db),
) -> User:
    user = update_user(db, user_id, body)
    db.commit()
    db.refresh(user)
    return user


@router.delete("/{user_id}", response_model=MessageOut)
def delete_existing_user(user_id: UUID, db: Session = Depends(get_db)) -> dict[str, str]:
    delete_user(db, user_id)
    db.commit()
    return {"detail": "User deleted"}
