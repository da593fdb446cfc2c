"""Business logic services."""

from backoffice_ledger.services.posting_service import BalancePoster, run_with_retry
from backoffice_ledger.services.reconciliation_service import (
    ReconciliationService,
    ALL_ACCOUNTS,
)
from backoffice_ledger.services.party_service import PartyService
from backoffice_ledger.services.transaction_service import TransactionService

__all__ = [
    "BalancePoster",
    "run_with_retry",
    "ReconciliationService",
    "ALL_ACCOUNTS",
    "PartyService",
    "TransactionService",
]
