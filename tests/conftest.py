"""
Pytest fixtures for stockdesk tests.

Every test gets a fresh app bound to an in-memory SQLite database, plus
helpers for users, tokens, catalog rows and sale logs.
"""
from datetime import timedelta

import bcrypt
import pytest
from fastapi.testclient import TestClient

from stockdesk.config import Settings
from stockdesk.main import create_app
from stockdesk.models import Brand, Category, Customer, Item, OrderStatus, SaleLog, User, STOCK_OUT
from stockdesk.utils.log_parser import format_sale_details
from stockdesk.utils.time_utils import utcnow
from stockdesk.utils.tokenJWT import create_access_token


@pytest.fixture(scope='function')
def settings():
    return Settings(
        SECRET_KEY="test-secret",
        ALGORITHM="HS256",
        ACCESS_TOKEN_EXPIRE_MINUTES=30,
        DATABASE_URL="sqlite:///:memory:",
        LOW_STOCK_THRESHOLD=10,
    )


@pytest.fixture(scope='function')
def app(settings):
    """Create application for testing."""
    app = create_app(settings)
    yield app
    app.state.engine.dispose()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    with TestClient(app) as c:
        yield c


@pytest.fixture(scope='function')
def db_session(app):
    session = app.state.session_factory()
    yield session
    session.close()


def _make_user(db, email, role, password="Password123!"):
    user = User(
        email=email,
        username=email.split("@")[0],
        fullname=email.split("@")[0].title(),
        # Low work factor keeps the suite fast; verification works for any cost
        password_hash=bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=4)).decode(),
        role=role,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture(scope='function')
def admin_user(db_session):
    return _make_user(db_session, "admin@stockdesk.io", "admin")


@pytest.fixture(scope='function')
def staff_user(db_session):
    return _make_user(db_session, "staff@stockdesk.io", "staff")


@pytest.fixture(scope='function')
def admin_headers(settings, admin_user):
    token = create_access_token(settings, {"sub": admin_user.email, "role": admin_user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope='function')
def staff_headers(settings, staff_user):
    token = create_access_token(settings, {"sub": staff_user.email, "role": staff_user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope='function')
def catalog(db_session):
    """Two categories, one brand and three items (one uncategorized)."""
    phones = Category(name="Phones")
    laptops = Category(name="Laptops")
    acme = Brand(name="Acme")
    db_session.add_all([phones, laptops, acme])
    db_session.flush()

    phone = Item(name="Acme Phone", model="P1", price=100, amount=5, category_id=phones.id, brand_id=acme.id)
    laptop = Item(name="Acme Laptop", model="L1", price=25, amount=40, category_id=laptops.id, brand_id=acme.id)
    cable = Item(name="USB Cable", price=5, amount=3)
    db_session.add_all([phone, laptop, cable])
    db_session.commit()
    return {"phones": phones, "laptops": laptops, "acme": acme, "phone": phone, "laptop": laptop, "cable": cable}


@pytest.fixture(scope='function')
def customer(db_session):
    c = Customer(name="Jane Doe", email="jane@example.com")
    db_session.add(c)
    db_session.commit()
    return c


@pytest.fixture(scope='function')
def make_sale(db_session):
    """Insert a stock_out log; structured=False writes only the free-text details."""
    def _make(item, quantity=1, order_number=1042, when=None, customer=None,
              status=None, structured=False, details=None):
        log = SaleLog(
            item_id=item.id,
            customer_id=customer.id if customer else None,
            action=STOCK_OUT,
            timestamp=when or (utcnow() - timedelta(hours=1)),
            details=details if details is not None else format_sale_details(quantity, order_number),
            quantity=quantity if structured else None,
            order_number=order_number if structured else None,
            unit_price=item.price if structured else None,
        )
        db_session.add(log)
        db_session.flush()
        if status:
            db_session.add(OrderStatus(log_id=log.id, status=status))
        db_session.commit()
        return log
    return _make
