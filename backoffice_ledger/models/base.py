"""
Database engine, session management, and base model.

Every model inherits from Base. Every request gets a session
from get_db(). Services receive that session and never commit
it themselves; the route decides.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from backoffice_ledger.config import get_settings

settings = get_settings()

# --- Engine ---
# pool_pre_ping=True tests connections before handing them out,
# so a restarted database does not fail the first posting after it.
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
)

# --- Session Factory ---
# autocommit=False: a ledger entry and the party balance it moves
# are committed together or not at all.
# autoflush=False: SQL is only sent on explicit flush/commit, which
# keeps the order of the posting writes under our control.
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    pass


# --- Dependency for FastAPI ---
def get_db():
    """
    Provide a database session for a single request.

    The try/finally guarantees the session is closed when the
    request finishes, even if an error occurs, so connections
    are returned to the pool.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
