"""
Health check endpoint.

Reports database connectivity and whether the ledger journal
tables exist. A missing journal is not unhealthy; statements are
then derived from the transaction tables.
"""

from fastapi import APIRouter, Depends
from sqlalchemy import inspect, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backoffice_ledger.models.base import get_db
from backoffice_ledger.services.ledger_books import BOOKS

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(db: Session = Depends(get_db)):
    """Return application health including database connectivity."""
    journals = {}
    try:
        db.execute(text("SELECT 1"))
        db_status = "healthy"
        inspector = inspect(db.get_bind())
        for party_type, book in BOOKS.items():
            table = book.journal_model.__tablename__
            journals[party_type.value] = (
                "present" if inspector.has_table(table) else "absent"
            )
    except SQLAlchemyError:
        db_status = "unhealthy"

    return {
        "status": "healthy" if db_status == "healthy" else "degraded",
        "service": "backoffice-ledger",
        "database": db_status,
        "ledger_journals": journals,
    }
