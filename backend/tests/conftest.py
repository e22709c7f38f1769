"""Shared test fixtures.

Every test gets a fresh schema on an in-memory SQLite database, so tests
never pollute each other. The API client shares the test's session.
"""

from __future__ import annotations

import os

os.environ["DATABASE_URL"] = "sqlite://"

from collections.abc import Callable  # noqa: E402
from datetime import datetime  # noqa: E402
from decimal import Decimal  # noqa: E402
from typing import Any, Generator  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402

from backend.app.core.database import Base, SessionLocal, engine, get_db  # noqa: E402
from backend.app.core.security import get_password_hash  # noqa: E402
from backend.app.main import app  # noqa: E402
from backend.app.models.pos import (  # noqa: E402
    CashRegister,
    CashRegisterStatus,
    PaymentMethod,
    Sale,
    SaleStatus,
)
from backend.app.models.product import Product  # noqa: E402
from backend.app.models.user import RoleEnum, User  # noqa: E402

# bcrypt is slow on purpose; hash the fixture password once
_FIXTURE_PASSWORD_HASH = get_password_hash("fixture-pass")


# ─── DB session on a fresh schema ────────────────────────────────────────────


@pytest.fixture()
def db() -> Generator[Session, None, None]:
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()

    yield session

    session.close()
    Base.metadata.drop_all(bind=engine)


def _client_for(db: Session, **kwargs: Any) -> Generator[TestClient, None, None]:
    def _override_get_db() -> Generator[Session, None, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app, **kwargs) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def client(db: Session) -> Generator[TestClient, None, None]:
    """FastAPI TestClient wired to the test session."""
    yield from _client_for(db)


@pytest.fixture()
def safe_client(db: Session) -> Generator[TestClient, None, None]:
    """TestClient that returns 500 responses instead of re-raising."""
    yield from _client_for(db, raise_server_exceptions=False)


# ─── Users ───────────────────────────────────────────────────────────────────


@pytest.fixture()
def make_user(db: Session) -> Callable[..., User]:
    def _make(
        email: str,
        name: str = "Test User",
        role: RoleEnum = RoleEnum.USER,
        is_active: bool = True,
    ) -> User:
        user = User(
            email=email,
            name=name,
            hashed_password=_FIXTURE_PASSWORD_HASH,
            role=role,
            is_active=is_active,
        )
        db.add(user)
        db.commit()
        return user

    return _make


@pytest.fixture()
def cashier(make_user: Callable[..., User]) -> User:
    return make_user("cashier@pos-shop.com", name="Carla Cashier")


@pytest.fixture()
def other_cashier(make_user: Callable[..., User]) -> User:
    return make_user("second@pos-shop.com", name="Otto Cashier")


@pytest.fixture()
def admin(make_user: Callable[..., User]) -> User:
    return make_user("admin@pos-shop.com", name="Ada Admin", role=RoleEnum.ADMIN)


# ─── Products ────────────────────────────────────────────────────────────────


@pytest.fixture()
def product_a(db: Session) -> Product:
    p = Product(name="Espresso", description="Single shot", price=Decimal("6.5000"))
    db.add(p)
    db.commit()
    return p


@pytest.fixture()
def product_b(db: Session) -> Product:
    p = Product(name="Croissant", price=Decimal("7.2500"))
    db.add(p)
    db.commit()
    return p


# ─── Cash registers & sales ──────────────────────────────────────────────────


@pytest.fixture()
def make_register(db: Session) -> Callable[..., CashRegister]:
    def _make(
        user: User,
        initial_amount: Decimal = Decimal("100"),
        status: CashRegisterStatus = CashRegisterStatus.OPEN,
        created_at: datetime | None = None,
    ) -> CashRegister:
        register = CashRegister(
            user_id=user.id,
            status=status,
            initial_amount=initial_amount,
            current_amount=initial_amount,
        )
        if created_at is not None:
            register.created_at = created_at
        db.add(register)
        db.commit()
        return register

    return _make


@pytest.fixture()
def open_register(
    cashier: User, make_register: Callable[..., CashRegister]
) -> CashRegister:
    """OPEN register for the cashier with an initial amount of 100."""
    return make_register(cashier)


@pytest.fixture()
def closed_register(
    other_cashier: User, make_register: Callable[..., CashRegister]
) -> CashRegister:
    return make_register(other_cashier, status=CashRegisterStatus.CLOSED)


@pytest.fixture()
def make_sale(db: Session, product_a: Product) -> Callable[..., Sale]:
    """Insert a sale row directly, bypassing the balance bookkeeping.

    Only the row is written; callers that need a consistent register balance
    should go through the API or the sale service instead.
    """

    def _make(
        register: CashRegister,
        total: Decimal = Decimal("10"),
        status: SaleStatus = SaleStatus.COMPLETED,
        payment_method: PaymentMethod = PaymentMethod.CASH,
        created_at: datetime | None = None,
    ) -> Sale:
        sale = Sale(
            cash_register_id=register.id,
            user_id=register.user_id,
            items=[{"product_id": str(product_a.id), "quantity": 1, "price": str(total)}],
            total=total,
            payment_method=payment_method,
            status=status,
        )
        if created_at is not None:
            sale.created_at = created_at
        db.add(sale)
        db.commit()
        return sale

    return _make


def sale_payload(
    register: CashRegister,
    product: Product,
    total: str = "50",
    **overrides: Any,
) -> dict[str, Any]:
    """JSON body for POST /sales with one line item summing to ``total``."""
    body: dict[str, Any] = {
        "cash_register_id": str(register.id),
        "user_id": str(register.user_id),
        "items": [{"product_id": str(product.id), "quantity": 1, "price": total}],
        "total": total,
        "payment_method": "CASH",
    }
    body.update(overrides)
    return body


@pytest.fixture()
def build_sale_payload() -> Callable[..., dict[str, Any]]:
    return sale_payload


def register_balance(db: Session, register_id: Any) -> Decimal:
    db.expire_all()
    register = db.get(CashRegister, register_id)
    assert register is not None
    return Decimal(register.current_amount)


def completed_total(db: Session, register_id: Any) -> Decimal:
    db.expire_all()
    sales = (
        db.query(Sale)
        .filter(Sale.cash_register_id == register_id, Sale.status == SaleStatus.COMPLETED)
        .all()
    )
    return sum((Decimal(s.total) for s in sales), Decimal("0"))


@pytest.fixture()
def assert_balanced(db: Session) -> Callable[[CashRegister], None]:
    """Check current_amount == initial_amount + Σ COMPLETED sale totals."""

    def _check(register: CashRegister) -> None:
        balance = register_balance(db, register.id)
        register = db.get(CashRegister, register.id)
        assert balance == Decimal(register.initial_amount) + completed_total(db, register.id)

    return _check


@pytest.fixture()
def balance_of(db: Session) -> Callable[[CashRegister], Decimal]:
    def _balance(register: CashRegister) -> Decimal:
        return register_balance(db, register.id)

    return _balance
