"""
Shared test fixtures.

Sets up an isolated test database so tests never touch
the real database. Tables are created before and dropped
after every test, so no test data persists.
"""

import os

# The application engine is built at import time; keep it off the
# configured database as well.
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from backoffice_ledger.main import app
from backoffice_ledger.models import (
    Base,
    CustomerLedgerEntry,
    SupplierLedgerEntry,
)
from backoffice_ledger.models.base import get_db


# SQLite for tests; no database server needed.
TEST_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
)

TestSessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


@pytest.fixture(autouse=True)
def setup_database():
    """Create all tables before each test, drop them after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    """Provide a database session for direct service testing."""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def session_factory():
    """
    Open extra sessions on the test database.

    Used to play a second, concurrent writer against db_session.
    """
    sessions = []

    def make():
        session = TestSessionLocal()
        sessions.append(session)
        return session

    yield make
    for session in sessions:
        session.rollback()
        session.close()


@pytest.fixture
def drop_journals(db_session):
    """
    Return a callable that drops the ledger journal tables.

    Simulates a database migrated only up to the transaction tables.
    Whatever db_session has pending is committed first so the drop
    is not blocked by an open transaction.
    """
    def drop():
        db_session.commit()
        CustomerLedgerEntry.__table__.drop(bind=engine, checkfirst=True)
        SupplierLedgerEntry.__table__.drop(bind=engine, checkfirst=True)

    return drop


@pytest.fixture
def client(db_session):
    """
    Provide a test client with the test database.

    The get_db dependency is overridden so the app uses the
    test session instead of the real database.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
