"""
Pydantic schemas for ledger postings and statements.

These define the API contract. They are separate from the
database models because a statement line may come from the
journal or be derived from a transaction, and the API should
not care which.
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field, model_validator

from backoffice_ledger.models.enums import (
    PartyType,
    TransactionKind,
    StatementSource,
)


# --- Request Schemas ---

class PostingRequest(BaseModel):
    """
    One ledger posting against a single party.

    Exactly one of debit or credit is positive. The replay math
    assumes it, so it is checked here rather than trusted.
    """
    kind: TransactionKind
    transaction_date: date
    debit: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=4)
    credit: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=4)
    reference_id: int | None = None
    reference_no: str | None = Field(default=None, max_length=50)
    description: str | None = Field(default=None, max_length=255)
    # Ordering tie-break for same-day entries; defaults to now.
    created_at: datetime | None = None

    @model_validator(mode="after")
    def exactly_one_side(self) -> "PostingRequest":
        if (self.debit > 0) == (self.credit > 0):
            raise ValueError("exactly one of debit or credit must be positive")
        return self


# --- Response Schemas ---

class LedgerEntryResponse(BaseModel):
    """A stored journal entry."""
    id: int
    party_id: int
    transaction_type: TransactionKind
    transaction_date: date
    reference_id: int | None
    reference_no: str | None
    description: str | None
    debit: Decimal
    credit: Decimal
    balance: Decimal
    created_at: datetime

    model_config = {"from_attributes": True}


class LedgerLineResponse(BaseModel):
    """A statement line, journal-backed or derived."""
    line_id: str
    party_id: int
    party_name: str
    kind: TransactionKind
    transaction_date: date
    created_at: datetime
    reference_no: str
    description: str
    debit: Decimal
    credit: Decimal
    balance: Decimal

    model_config = {"from_attributes": True}


class LedgerTotalsResponse(BaseModel):
    total_debit: Decimal
    total_credit: Decimal
    outstanding: Decimal
    entry_count: int
    document_count: int

    model_config = {"from_attributes": True}


class LedgerStatementResponse(BaseModel):
    """Reconciled statement, newest first, one page of it."""
    party_type: PartyType
    account: int | str
    source: StatementSource
    totals: LedgerTotalsResponse
    entries: list[LedgerLineResponse]
    page: int
    page_size: int
    total_entries: int
    total_pages: int
