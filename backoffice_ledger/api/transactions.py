"""
Transaction API endpoints.

One set of routes serves all four source transaction kinds:
/transactions/sales-invoices, /purchase-orders, /payments-in
and /payments-out.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from backoffice_ledger.models.base import get_db
from backoffice_ledger.models.enums import SourceKind
from backoffice_ledger.services.errors import NotFoundError, PostingConflictError
from backoffice_ledger.services.posting_service import run_with_retry
from backoffice_ledger.services.transaction_service import TransactionService
from backoffice_ledger.schemas.transaction import (
    TransactionCreate,
    TransactionResponse,
    TransactionDeleteResponse,
)

router = APIRouter(prefix="/transactions", tags=["Transactions"])


def _run(db: Session, operation):
    """Commit a posting operation, mapping service errors to HTTP."""
    try:
        return run_with_retry(db, operation)
    except PostingConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except NotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/{kind}", response_model=TransactionResponse, status_code=201)
def record_transaction(
    kind: SourceKind,
    request: TransactionCreate,
    db: Session = Depends(get_db),
):
    """Record an invoice, purchase order or payment and post it."""
    service = TransactionService(db)
    return _run(db, lambda: service.record(kind, request))


@router.get("/{kind}/{transaction_id}", response_model=TransactionResponse)
def get_transaction(
    kind: SourceKind,
    transaction_id: int,
    db: Session = Depends(get_db),
):
    service = TransactionService(db)
    try:
        return service.get(kind, transaction_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/{kind}/{transaction_id}", response_model=TransactionResponse)
def amend_transaction(
    kind: SourceKind,
    transaction_id: int,
    request: TransactionCreate,
    db: Session = Depends(get_db),
):
    """
    Amend a transaction.

    Its ledger entry is rewritten and every later balance of the
    party is recomputed.
    """
    service = TransactionService(db)
    return _run(db, lambda: service.amend(kind, transaction_id, request))


@router.delete(
    "/{kind}/{transaction_id}",
    response_model=TransactionDeleteResponse,
)
def delete_transaction(
    kind: SourceKind,
    transaction_id: int,
    db: Session = Depends(get_db),
):
    """Delete a transaction and reverse its effect on the party balance."""
    service = TransactionService(db)

    def operation():
        party_id = service.get(kind, transaction_id).party_id
        balance = service.remove(kind, transaction_id)
        return TransactionDeleteResponse(
            id=transaction_id, party_id=party_id, party_balance=balance
        )

    return _run(db, operation)
