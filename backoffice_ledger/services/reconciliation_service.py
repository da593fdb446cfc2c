"""
Reconciliation service: party statements with running balances.

A statement is read from the party's ledger journal when the journal
table exists. When it does not, the same statement is rebuilt from
the source transactions (invoices/orders and payments). Both paths
produce LedgerLines and go through the same replay.

Order of operations matters and is fixed:
1. fetch (journal, or sources as fallback), oldest first
2. replay running balances
3. reverse to newest first
4. apply the date range
5. total the filtered lines

Filtering before step 2 would change balances; reversing before
step 2 would replay backwards.
"""

import logging
from dataclasses import dataclass, field
from datetime import date

from sqlalchemy import select
from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Session

from backoffice_ledger.models.enums import PartyType, StatementSource
from backoffice_ledger.services.errors import (
    NotFoundError,
    LedgerJournalUnavailable,
)
from backoffice_ledger.services.ledger_books import PartyBook, get_book
from backoffice_ledger.services.ledger_lines import (
    LedgerLine,
    DateRange,
    replay,
    newest_first,
)
from backoffice_ledger.services.statistics import LedgerTotals, summarize

logger = logging.getLogger(__name__)

# Selector meaning "every party of this type".
ALL_ACCOUNTS = "all"

# PostgreSQL SQLSTATE for undefined_table.
UNDEFINED_TABLE = "42P01"


def is_missing_relation(exc: DBAPIError) -> bool:
    """True if the driver error says the queried table does not exist."""
    orig = getattr(exc, "orig", None)
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code == UNDEFINED_TABLE:
        return True
    return "no such table" in str(orig).lower()


@dataclass
class LedgerStatement:
    party_type: PartyType
    account: int | str
    source: StatementSource
    entries: list[LedgerLine] = field(default_factory=list)
    totals: LedgerTotals = field(default_factory=LedgerTotals)


class ReconciliationService:
    """
    Builds statements. Read-only: never writes, never commits.
    """

    def __init__(self, db: Session):
        self.db = db

    def reconcile(
        self,
        party_type: PartyType,
        account: int | str = ALL_ACCOUNTS,
        date_range: DateRange | None = None,
        as_of: date | None = None,
    ) -> LedgerStatement:
        """
        Return the statement for one party, or for all parties of a type.

        as_of cuts history before the replay (nothing dated after it is
        considered). date_range only hides lines after the replay, so
        balances shown are always the true running balances.
        """
        book = get_book(party_type)
        date_range = date_range or DateRange()

        if account != ALL_ACCOUNTS:
            account = int(account)
            if self.db.get(book.party_model, account) is None:
                raise NotFoundError(f"{book.label} {account} not found")

        try:
            lines = self._journal_lines(book, account, as_of)
            source = StatementSource.JOURNAL
        except LedgerJournalUnavailable:
            logger.info(
                "%s not found, building %s statement from transactions",
                book.journal_model.__tablename__,
                book.party_type.value,
            )
            lines = self._derived_lines(book, account, as_of)
            source = StatementSource.DERIVED

        balanced = newest_first(replay(lines))
        entries = [
            line for line in balanced
            if date_range.contains(line.transaction_date)
        ]

        return LedgerStatement(
            party_type=book.party_type,
            account=account,
            source=source,
            entries=entries,
            totals=summarize(entries, book.outstanding_side, book.document_kinds),
        )

    def _journal_lines(
        self, book: PartyBook, account: int | str, as_of: date | None
    ) -> list[LedgerLine]:
        """
        Read journal rows oldest first.

        Runs inside a SAVEPOINT: on PostgreSQL a failed statement aborts
        the whole transaction, and the fallback queries still need it.
        """
        journal = book.journal_model
        party = book.party_model

        stmt = (
            select(journal, party.name)
            .outerjoin(party, journal.party_id == party.id)
            .order_by(journal.transaction_date, journal.created_at, journal.id)
        )
        if account != ALL_ACCOUNTS:
            stmt = stmt.where(journal.party_id == account)
        if as_of is not None:
            stmt = stmt.where(journal.transaction_date <= as_of)

        try:
            with self.db.begin_nested():
                rows = self.db.execute(stmt).all()
        except DBAPIError as exc:
            if is_missing_relation(exc):
                raise LedgerJournalUnavailable(journal.__tablename__) from exc
            raise

        return [book.journal_line(entry, name) for entry, name in rows]

    def _derived_lines(
        self, book: PartyBook, account: int | str, as_of: date | None
    ) -> list[LedgerLine]:
        """Tag every source transaction of the book as a debit or credit line."""
        party = book.party_model
        lines = []

        for binding in book.sources:
            model = binding.model
            stmt = (
                select(model, party.name)
                .outerjoin(party, model.party_id == party.id)
                .order_by(model.transaction_date, model.created_at, model.id)
            )
            if account != ALL_ACCOUNTS:
                stmt = stmt.where(model.party_id == account)
            if as_of is not None:
                stmt = stmt.where(model.transaction_date <= as_of)

            rows = self.db.execute(stmt).all()
            lines.extend(binding.to_line(document, name) for document, name in rows)

        return lines
