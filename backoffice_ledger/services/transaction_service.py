"""
Transaction service: invoices, purchase orders and payments.

Each operation:
1. Validates the party and the document number
2. Writes the source transaction
3. Posts, reposts or removes its ledger entry through BalancePoster
4. Stores the party balance before/after on the transaction

The document row and its ledger entry share one created_at, so a
statement derived from the transaction tables orders exactly like
the journal does. The caller controls the commit.
"""

import logging
from datetime import datetime
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from backoffice_ledger.models.enums import SourceKind
from backoffice_ledger.schemas.ledger import PostingRequest
from backoffice_ledger.schemas.transaction import TransactionCreate
from backoffice_ledger.services.errors import NotFoundError
from backoffice_ledger.services.ledger_books import SourceBinding, get_book, get_source
from backoffice_ledger.services.posting_service import BalancePoster

logger = logging.getLogger(__name__)


class TransactionService:

    def __init__(self, db: Session):
        self.db = db
        self.poster = BalancePoster(db)

    def record(self, source_kind: SourceKind, request: TransactionCreate):
        """Record a new transaction and post it to the party ledger."""
        binding = get_source(source_kind)
        self._validate_party(binding, request.party_id)
        self._check_reference_no(binding, request.reference_no)

        document = binding.model(
            party_id=request.party_id,
            created_at=datetime.utcnow(),
        )
        self._apply(binding, document, request)
        self.db.add(document)
        self.db.flush()

        entry = self.poster.post(
            binding.party_type, document.party_id, self._posting(binding, document)
        )
        self._snapshot(binding, document, entry.balance)

        self.db.flush()
        return document

    def amend(
        self, source_kind: SourceKind, document_id: int, request: TransactionCreate
    ):
        """
        Change a recorded transaction and repost it.

        Moving a transaction to another party removes it from the old
        party's ledger and posts it fresh on the new one.
        """
        binding = get_source(source_kind)
        document = self.get(source_kind, document_id)
        self._validate_party(binding, request.party_id)
        if request.reference_no != document.reference_no:
            self._check_reference_no(binding, request.reference_no)

        old_party_id = document.party_id
        self._apply(binding, document, request)
        document.party_id = request.party_id
        self.db.flush()

        posting = self._posting(binding, document)
        if old_party_id != document.party_id:
            self.poster.lock_parties(
                binding.party_type, [old_party_id, document.party_id]
            )
            self.poster.unpost(
                binding.party_type, old_party_id, binding.ledger_kind, document.id
            )
            entry = self.poster.post(binding.party_type, document.party_id, posting)
        else:
            entry = self.poster.repost(binding.party_type, document.party_id, posting)

        self._snapshot(binding, document, entry.balance)
        self.db.flush()
        return document

    def remove(self, source_kind: SourceKind, document_id: int) -> Decimal:
        """Delete a transaction and its ledger entry; return the party's new balance."""
        binding = get_source(source_kind)
        document = self.get(source_kind, document_id)

        new_balance = self.poster.unpost(
            binding.party_type, document.party_id, binding.ledger_kind, document.id
        )
        self.db.delete(document)
        self.db.flush()
        logger.info(
            "Deleted %s %s (%s)",
            binding.source_kind.value,
            document.id,
            document.reference_no,
        )
        return new_balance

    def get(self, source_kind: SourceKind, document_id: int):
        binding = get_source(source_kind)
        document = self.db.get(binding.model, document_id)
        if not document:
            raise NotFoundError(f"{binding.label} {document_id} not found")
        return document

    # --- internals ---

    def _validate_party(self, binding: SourceBinding, party_id: int) -> None:
        book = get_book(binding.party_type)
        if self.db.get(book.party_model, party_id) is None:
            raise NotFoundError(f"{book.label} {party_id} not found")

    def _check_reference_no(self, binding: SourceBinding, reference_no: str) -> None:
        model = binding.model
        existing = self.db.execute(
            select(model.id).where(model.reference_no == reference_no).limit(1)
        ).first()
        if existing:
            raise ValueError(
                f"{binding.label} number '{reference_no}' already exists"
            )

    def _apply(self, binding: SourceBinding, document, request: TransactionCreate) -> None:
        document.reference_no = request.reference_no
        document.transaction_date = request.transaction_date
        document.amount = request.amount
        document.notes = request.notes
        if hasattr(binding.model, "payment_method"):
            document.payment_method = request.payment_method

    def _posting(self, binding: SourceBinding, document) -> PostingRequest:
        debit, credit = binding.split(document.amount)
        return PostingRequest(
            kind=binding.ledger_kind,
            transaction_date=document.transaction_date,
            debit=debit,
            credit=credit,
            reference_id=document.id,
            reference_no=document.reference_no,
            description=binding.describe(document),
            created_at=document.created_at,
        )

    def _snapshot(self, binding: SourceBinding, document, balance_after: Decimal) -> None:
        debit, credit = binding.split(document.amount)
        document.final_balance = balance_after
        document.previous_balance = balance_after - debit + credit
