"""
Balance poster: the only writer of party balances.

Every posting does three things that must land together:
1. read the party's current_balance (locked)
2. write the ledger entry carrying the new running balance
3. write the new current_balance back to the party

All of it is flushed in the caller's transaction. The caller commits
(or uses run_with_retry, which commits), so a failure anywhere leaves
neither the entry nor the balance behind.

Concurrent postings to the same party are serialized by a row lock
(SELECT ... FOR UPDATE) and, where the database ignores that, caught
by the optimistic version counter on the party row.

Invariant kept after every call: current_balance equals the balance
of the party's chronologically last entry, and every entry's balance
equals the replay of all entries up to it.
"""

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, TypeVar

from sqlalchemy import select, and_, or_
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from backoffice_ledger.config import get_settings
from backoffice_ledger.models.enums import PartyType, TransactionKind
from backoffice_ledger.schemas.ledger import PostingRequest
from backoffice_ledger.services.errors import NotFoundError, PostingConflictError
from backoffice_ledger.services.ledger_books import PartyBook, get_book
from backoffice_ledger.services.ledger_lines import ZERO, to_amount

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BalancePoster:

    def __init__(self, db: Session):
        self.db = db

    def post(
        self, party_type: PartyType, party_id: int, request: PostingRequest
    ):
        """
        Append a ledger entry and move the party balance.

        new balance = previous balance + debit - credit.

        A back-dated posting lands in the middle of the history; the
        party is then replayed so later entries and current_balance
        include it.
        """
        book = get_book(party_type)
        party = self._lock_party(book, party_id)

        previous_balance = to_amount(party.current_balance)
        new_balance = previous_balance + request.debit - request.credit

        entry = book.journal_model(
            party_id=party.id,
            transaction_type=request.kind,
            transaction_date=request.transaction_date,
            reference_id=request.reference_id,
            reference_no=request.reference_no,
            description=request.description,
            debit=request.debit,
            credit=request.credit,
            balance=new_balance,
            created_at=request.created_at or datetime.utcnow(),
        )
        self.db.add(entry)
        party.current_balance = new_balance
        self.db.flush()

        if self._has_later_entries(book, entry):
            new_balance = self._replay_party(book, party)

        logger.info(
            "Posted %s %s to %s %s: dr=%s cr=%s balance %s -> %s",
            request.kind.value,
            request.reference_no or "-",
            book.party_type.value,
            party.id,
            request.debit,
            request.credit,
            previous_balance,
            new_balance,
        )
        return entry

    def repost(
        self, party_type: PartyType, party_id: int, request: PostingRequest
    ):
        """
        Rewrite the entry for an amended transaction and replay the party.

        The entry is found by (party, kind, reference_id). Every later
        balance and the party's current_balance are recomputed, so an
        edit anywhere in the history keeps the ledger consistent.
        """
        book = get_book(party_type)
        party = self._lock_party(book, party_id)
        entry = self._find_entry(book, party.id, request.kind, request.reference_id)

        entry.transaction_date = request.transaction_date
        entry.debit = request.debit
        entry.credit = request.credit
        entry.reference_no = request.reference_no
        entry.description = request.description
        self.db.flush()

        new_balance = self._replay_party(book, party)
        logger.info(
            "Reposted %s ref=%s on %s %s, balance now %s",
            request.kind.value,
            request.reference_id,
            book.party_type.value,
            party.id,
            new_balance,
        )
        return entry

    def unpost(
        self,
        party_type: PartyType,
        party_id: int,
        kind: TransactionKind,
        reference_id: int,
    ) -> Decimal:
        """Remove the entry for a deleted transaction; return the new balance."""
        book = get_book(party_type)
        party = self._lock_party(book, party_id)
        entry = self._find_entry(book, party.id, kind, reference_id)

        self.db.delete(entry)
        self.db.flush()

        new_balance = self._replay_party(book, party)
        logger.info(
            "Removed %s ref=%s from %s %s, balance now %s",
            kind.value,
            reference_id,
            book.party_type.value,
            party.id,
            new_balance,
        )
        return new_balance

    def open_balance(
        self,
        party_type: PartyType,
        party_id: int,
        amount: Decimal,
        on: date | None = None,
    ):
        """
        Post an opening balance as the party's first entry.

        Positive amounts are debits, negative amounts credits. Zero
        posts nothing and returns None.
        """
        amount = to_amount(amount)
        if amount == ZERO:
            return None

        return self.post(party_type, party_id, PostingRequest(
            kind=TransactionKind.OPENING,
            transaction_date=on or date.today(),
            debit=amount if amount > ZERO else ZERO,
            credit=-amount if amount < ZERO else ZERO,
            description="Opening Balance",
        ))

    def recompute(self, party_type: PartyType, party_id: int) -> Decimal:
        """Replay one party's journal and repair stored balances."""
        book = get_book(party_type)
        party = self._lock_party(book, party_id)
        return self._replay_party(book, party)

    def lock_parties(self, party_type: PartyType, party_ids) -> list:
        """
        Lock several party rows, lowest id first.

        Work that touches two parties takes both locks up front, always
        in ascending id order.
        """
        book = get_book(party_type)
        return [self._lock_party(book, party_id) for party_id in sorted(set(party_ids))]

    # --- internals ---

    def _lock_party(self, book: PartyBook, party_id: int):
        """
        Load the party row for update.

        populate_existing makes sure the balance comes from the
        database, not from an object already sitting in the session.
        """
        model = book.party_model
        party = self.db.execute(
            select(model)
            .where(model.id == party_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

        if party is None:
            raise NotFoundError(f"{book.label} {party_id} not found")
        return party

    def _find_entry(
        self,
        book: PartyBook,
        party_id: int,
        kind: TransactionKind,
        reference_id: int | None,
    ):
        journal = book.journal_model
        entry = self.db.execute(
            select(journal).where(
                journal.party_id == party_id,
                journal.transaction_type == kind,
                journal.reference_id == reference_id,
            ).order_by(journal.id)
        ).scalars().first()

        if entry is None:
            raise NotFoundError(
                f"No {kind.value} ledger entry for reference {reference_id} "
                f"on {book.party_type.value} {party_id}"
            )
        return entry

    def _has_later_entries(self, book: PartyBook, entry) -> bool:
        journal = book.journal_model
        later = self.db.execute(
            select(journal.id).where(
                journal.party_id == entry.party_id,
                journal.id != entry.id,
                or_(
                    journal.transaction_date > entry.transaction_date,
                    and_(
                        journal.transaction_date == entry.transaction_date,
                        journal.created_at > entry.created_at,
                    ),
                ),
            ).limit(1)
        ).first()
        return later is not None

    def _replay_party(self, book: PartyBook, party) -> Decimal:
        """
        Recompute every balance of one party from zero.

        Same ordering as the statement replay: date, then created_at,
        then id for rows that share both.
        """
        journal = book.journal_model
        entries = self.db.execute(
            select(journal)
            .where(journal.party_id == party.id)
            .order_by(journal.transaction_date, journal.created_at, journal.id)
        ).scalars().all()

        running = ZERO
        for entry in entries:
            running += to_amount(entry.debit) - to_amount(entry.credit)
            if to_amount(entry.balance) != running:
                entry.balance = running

        if to_amount(party.current_balance) != running:
            party.current_balance = running
        self.db.flush()
        return running


def run_with_retry(
    db: Session,
    operation: Callable[[], T],
    max_attempts: int | None = None,
) -> T:
    """
    Run a posting unit of work and commit it.

    If the commit loses the optimistic version check on a party
    balance, the session is rolled back and the whole operation runs
    again against fresh data. Any other error propagates untouched;
    the caller rolls back.
    """
    attempts = max_attempts or get_settings().POSTING_MAX_ATTEMPTS

    for attempt in range(1, attempts + 1):
        try:
            result = operation()
            db.commit()
            return result
        except StaleDataError:
            db.rollback()
            logger.warning(
                "Party balance changed concurrently (attempt %s of %s)",
                attempt,
                attempts,
            )

    raise PostingConflictError(
        f"Party balance kept changing; gave up after {attempts} attempts"
    )
