"""
Pytest configuration and fixtures for Finance Tracker tests

Provides:
1. Test settings and an application over in-memory SQLite
2. FastAPI test client (lifespan creates schema and reference data)
3. Seeded identities: admin, jonas, katrin, each with one account
4. Bearer headers for each identity
"""

import os

# Settings are read from the environment when app.main is imported
os.environ.setdefault("JWT_SECRET", "test_secret_key_for_testing_only")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.core.security import hash_password
from app.db.init_db import init_db
from app.main import create_application
from app.models import Account, User
from app.models.user import Role
from app.schemas.auth import CurrentUser

TEST_SECRET = "test_secret_key_for_testing_only"
TEST_PASSWORD = "secret123"


@dataclass
class SeededUsers:
    admin: User
    jonas: User
    katrin: User
    admin_account: Account
    jonas_account: Account
    katrin_account: Account


# === SETTINGS AND APPLICATION ===

@pytest.fixture
def test_settings():
    """Settings for an isolated in-memory database"""
    return Settings(
        _env_file=None,
        jwt_secret=TEST_SECRET,
        database_url="sqlite://",
        token_lifetime=3600,
        log_level="DEBUG",
    )


@pytest.fixture
def test_app(test_settings):
    """Fresh application (and fresh database) per test"""
    app = create_application(test_settings)
    yield app
    app.state.engine.dispose()


@pytest.fixture
def test_client(test_app):
    """FastAPI test client; entering it runs the lifespan startup"""
    with TestClient(test_app) as client:
        yield client


@pytest.fixture
def token_service(test_app):
    return test_app.state.token_service


# === DATABASE ===

@pytest.fixture
def db_session(test_app):
    """Session on the test database with schema and reference data in place"""
    init_db(test_app.state.engine, test_app.state.session_factory)
    session = test_app.state.session_factory()
    yield session
    session.close()


@pytest.fixture
def fresh_session(test_app):
    """Open a new session to read what requests committed"""
    sessions = []

    def _open():
        session = test_app.state.session_factory()
        sessions.append(session)
        return session

    yield _open
    for session in sessions:
        session.close()


@pytest.fixture(scope="session")
def password_hash():
    """bcrypt is slow on purpose; hash the shared test password once"""
    return hash_password(TEST_PASSWORD)


def _create_user(db, username: str, password_hash: str, admin: bool = False) -> User:
    user = User(
        username=username,
        email=f"{username}@example.com",
        password_hash=password_hash,
        admin=admin,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def _create_account(db, owner: User, name: str, balance: str) -> Account:
    account = Account(
        user_id=owner.id,
        name=name,
        balance=Decimal(balance),
        slug=f"account_{owner.username}",
    )
    db.add(account)
    db.commit()
    db.refresh(account)
    return account


@pytest.fixture
def seeded_users(db_session, password_hash) -> SeededUsers:
    """admin, jonas and katrin, each owning one account"""
    admin = _create_user(db_session, "admin", password_hash, admin=True)
    jonas = _create_user(db_session, "jonas", password_hash)
    katrin = _create_user(db_session, "katrin", password_hash)

    return SeededUsers(
        admin=admin,
        jonas=jonas,
        katrin=katrin,
        admin_account=_create_account(db_session, admin, "Aðalreikningur", "5000.00"),
        jonas_account=_create_account(db_session, jonas, "Jónas reikningur", "2500.00"),
        katrin_account=_create_account(db_session, katrin, "Katrínar reikningur", "3000.00"),
    )


# === IDENTITY CONTEXTS AND TOKENS ===

def context_for(user: User) -> CurrentUser:
    return CurrentUser(id=user.id, username=user.username, role=Role.from_admin_flag(user.admin))


def bearer(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def jonas_headers(seeded_users, token_service):
    return bearer(token_service.issue(seeded_users.jonas))


@pytest.fixture
def katrin_headers(seeded_users, token_service):
    return bearer(token_service.issue(seeded_users.katrin))


@pytest.fixture
def admin_headers(seeded_users, token_service):
    return bearer(token_service.issue(seeded_users.admin))


@pytest.fixture
def transaction_payload(seeded_users):
    """Valid payload booking an expense on jonas's account"""
    return {
        "account_id": seeded_users.jonas_account.id,
        "payment_method_id": 2,
        "transaction_type": "expense",
        "category": "matur",
        "amount": 42.5,
        "description": "Groceries",
    }
