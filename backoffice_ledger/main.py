"""
Back-Office Ledger: FastAPI Application.

This is the entry point for the application.
All routers are registered here.
"""

from fastapi import FastAPI

from backoffice_ledger.config import get_settings
from backoffice_ledger.logging_config import configure_logging
from backoffice_ledger.api.health import router as health_router
from backoffice_ledger.api.parties import router as parties_router
from backoffice_ledger.api.ledgers import router as ledgers_router
from backoffice_ledger.api.transactions import router as transactions_router

settings = get_settings()
configure_logging()

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Customer and supplier ledgers with running balances",
)

# Register routers
app.include_router(health_router)
app.include_router(parties_router)
app.include_router(ledgers_router)
app.include_router(transactions_router)
