"""
Ledger API endpoints.

The statement endpoint reconciles first and filters second:
date range inside the engine (after the replay), then search,
kind and side filters, then pagination. Totals are the engine's
totals for the date range.
"""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from backoffice_ledger.config import get_settings
from backoffice_ledger.models.base import get_db
from backoffice_ledger.models.enums import PartyType, TransactionKind
from backoffice_ledger.services.errors import NotFoundError, PostingConflictError
from backoffice_ledger.services.ledger_books import get_book
from backoffice_ledger.services.ledger_lines import DateRange
from backoffice_ledger.services.posting_service import BalancePoster, run_with_retry
from backoffice_ledger.services.reconciliation_service import (
    ReconciliationService,
    ALL_ACCOUNTS,
)
from backoffice_ledger.services.statement_filters import (
    SideFilter,
    StatementFilter,
    paginate,
)
from backoffice_ledger.schemas.ledger import (
    PostingRequest,
    LedgerEntryResponse,
    LedgerLineResponse,
    LedgerTotalsResponse,
    LedgerStatementResponse,
)

router = APIRouter(prefix="/ledgers", tags=["Ledgers"])


def _parse_account(account: str) -> int | str:
    if account == ALL_ACCOUNTS:
        return ALL_ACCOUNTS
    if not account.isdigit():
        raise HTTPException(
            status_code=400,
            detail=f"account must be '{ALL_ACCOUNTS}' or a numeric id",
        )
    return int(account)


@router.get("/{party_type}", response_model=LedgerStatementResponse)
def get_statement(
    party_type: PartyType,
    account: str = ALL_ACCOUNTS,
    start_date: date | None = None,
    end_date: date | None = None,
    as_of: date | None = None,
    search: str | None = None,
    kind: TransactionKind | None = None,
    side: SideFilter = SideFilter.ALL,
    page: int = Query(default=1, ge=1),
    page_size: int | None = Query(default=None, ge=1, le=500),
    db: Session = Depends(get_db),
):
    """
    Get a party statement, newest first.

    Running balances are computed over the full history; the date
    range and the other filters only hide lines.
    """
    selector = _parse_account(account)
    try:
        date_range = DateRange(start=start_date, end=end_date)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    service = ReconciliationService(db)
    try:
        statement = service.reconcile(
            party_type, selector, date_range=date_range, as_of=as_of
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    visible = StatementFilter(
        search=search,
        kind=kind,
        side=side,
        outstanding_side=get_book(party_type).outstanding_side,
    ).apply(statement.entries)
    result = paginate(
        visible, page, page_size or get_settings().STATEMENT_PAGE_SIZE
    )

    return LedgerStatementResponse(
        party_type=statement.party_type,
        account=statement.account,
        source=statement.source,
        totals=LedgerTotalsResponse.model_validate(statement.totals),
        entries=[LedgerLineResponse.model_validate(line) for line in result.items],
        page=result.page,
        page_size=result.page_size,
        total_entries=result.total_items,
        total_pages=result.total_pages,
    )


@router.post(
    "/{party_type}/{party_id}/entries",
    response_model=LedgerEntryResponse,
    status_code=201,
)
def post_entry(
    party_type: PartyType,
    party_id: int,
    request: PostingRequest,
    db: Session = Depends(get_db),
):
    """
    Post a manual entry (adjustment, opening balance, sale order).

    The entry and the party's new balance are committed together.
    """
    poster = BalancePoster(db)
    try:
        return run_with_retry(
            db, lambda: poster.post(party_type, party_id, request)
        )
    except PostingConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except NotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/{party_type}/{party_id}/recompute")
def recompute_balances(
    party_type: PartyType,
    party_id: int,
    db: Session = Depends(get_db),
):
    """Replay a party's journal and repair stored running balances."""
    poster = BalancePoster(db)
    try:
        balance = run_with_retry(
            db, lambda: poster.recompute(party_type, party_id)
        )
    except PostingConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except NotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))

    return {
        "party_type": party_type.value,
        "party_id": party_id,
        "current_balance": balance,
    }
