"""
Party ledger books.

Customers and suppliers keep mirrored ledgers. Everything that
differs between the two lives here, in one table, instead of in
if/else branches across the services:

    Customer (receivable)              Supplier (payable)
    ---------------------------------  ---------------------------------
    journal: customer_ledger           journal: supplier_ledger
    sales invoice  -> DEBIT            purchase order -> CREDIT
    payment in     -> CREDIT           payment out    -> DEBIT
    outstanding = debits - credits     outstanding = credits - debits

The running balance itself is always debit - credit for both, and
so is current_balance. A customer who owes us has a positive
balance. A supplier we owe has a NEGATIVE balance: purchases are
credits, so a payable of 600 is stored and reported as -600, while
the statement's outstanding total reports it as +600.
"""

from dataclasses import dataclass

from backoffice_ledger.models.customer import Customer
from backoffice_ledger.models.supplier import Supplier
from backoffice_ledger.models.ledger_entry import (
    CustomerLedgerEntry,
    SupplierLedgerEntry,
)
from backoffice_ledger.models.source_document import (
    SalesInvoice,
    PurchaseOrder,
    PaymentIn,
    PaymentOut,
)
from backoffice_ledger.models.enums import (
    PartyType,
    EntryType,
    TransactionKind,
    SourceKind,
)
from backoffice_ledger.services.ledger_lines import LedgerLine, ZERO, to_amount


@dataclass(frozen=True)
class SourceBinding:
    """How one kind of source transaction posts to its party ledger."""

    source_kind: SourceKind
    party_type: PartyType
    model: type
    ledger_kind: TransactionKind
    side: EntryType
    label: str
    line_prefix: str

    def split(self, amount) -> tuple:
        """Return (debit, credit) for an amount on this binding's side."""
        value = to_amount(amount)
        if self.side == EntryType.DEBIT:
            return value, ZERO
        return ZERO, value

    def describe(self, document) -> str:
        method = getattr(document, "payment_method", None)
        if self.ledger_kind == TransactionKind.PAYMENT:
            return f"{self.label} - {method}" if method else self.label
        return f"{self.label} {document.reference_no}"

    def to_line(self, document, party_name: str | None) -> LedgerLine:
        """Turn a raw source row into an unbalanced ledger line."""
        debit, credit = self.split(document.amount)
        return LedgerLine(
            line_id=f"{self.line_prefix}-{document.id}",
            party_id=document.party_id,
            party_name=party_name or f"Unknown {self.party_type.value.title()}",
            kind=self.ledger_kind,
            transaction_date=document.transaction_date,
            created_at=document.created_at,
            reference_no=document.reference_no or "-",
            description=self.describe(document),
            debit=debit,
            credit=credit,
            reference_id=document.id,
        )


@dataclass(frozen=True)
class PartyBook:
    """Models and sign conventions for one party type."""

    party_type: PartyType
    party_model: type
    journal_model: type
    sources: tuple[SourceBinding, ...]
    # The side whose total minus the other side's total is "outstanding".
    outstanding_side: EntryType
    document_kinds: frozenset

    @property
    def label(self) -> str:
        return self.party_type.value.title()

    def journal_line(self, entry, party_name: str | None) -> LedgerLine:
        """Turn a journal row into a ledger line carrying its stored balance."""
        return LedgerLine(
            line_id=f"ledger-{entry.id}",
            party_id=entry.party_id,
            party_name=party_name or f"Unknown {self.label}",
            kind=entry.transaction_type,
            transaction_date=entry.transaction_date,
            created_at=entry.created_at,
            reference_no=entry.reference_no or "-",
            description=entry.description or "-",
            debit=to_amount(entry.debit),
            credit=to_amount(entry.credit),
            balance=to_amount(entry.balance),
            reference_id=entry.reference_id,
        )


SOURCES: dict[SourceKind, SourceBinding] = {
    SourceKind.SALES_INVOICE: SourceBinding(
        source_kind=SourceKind.SALES_INVOICE,
        party_type=PartyType.CUSTOMER,
        model=SalesInvoice,
        ledger_kind=TransactionKind.SALES_INVOICE,
        side=EntryType.DEBIT,
        label="Sales Invoice",
        line_prefix="inv",
    ),
    SourceKind.PAYMENT_IN: SourceBinding(
        source_kind=SourceKind.PAYMENT_IN,
        party_type=PartyType.CUSTOMER,
        model=PaymentIn,
        ledger_kind=TransactionKind.PAYMENT,
        side=EntryType.CREDIT,
        label="Payment received",
        line_prefix="pay",
    ),
    SourceKind.PURCHASE_ORDER: SourceBinding(
        source_kind=SourceKind.PURCHASE_ORDER,
        party_type=PartyType.SUPPLIER,
        model=PurchaseOrder,
        ledger_kind=TransactionKind.PURCHASE,
        side=EntryType.CREDIT,
        label="Purchase Order",
        line_prefix="po",
    ),
    SourceKind.PAYMENT_OUT: SourceBinding(
        source_kind=SourceKind.PAYMENT_OUT,
        party_type=PartyType.SUPPLIER,
        model=PaymentOut,
        ledger_kind=TransactionKind.PAYMENT,
        side=EntryType.DEBIT,
        label="Payment made",
        line_prefix="pay",
    ),
}


BOOKS: dict[PartyType, PartyBook] = {
    PartyType.CUSTOMER: PartyBook(
        party_type=PartyType.CUSTOMER,
        party_model=Customer,
        journal_model=CustomerLedgerEntry,
        sources=(
            SOURCES[SourceKind.SALES_INVOICE],
            SOURCES[SourceKind.PAYMENT_IN],
        ),
        outstanding_side=EntryType.DEBIT,
        document_kinds=frozenset({
            TransactionKind.SALES_INVOICE,
            TransactionKind.SALE_ORDER,
        }),
    ),
    PartyType.SUPPLIER: PartyBook(
        party_type=PartyType.SUPPLIER,
        party_model=Supplier,
        journal_model=SupplierLedgerEntry,
        sources=(
            SOURCES[SourceKind.PURCHASE_ORDER],
            SOURCES[SourceKind.PAYMENT_OUT],
        ),
        outstanding_side=EntryType.CREDIT,
        document_kinds=frozenset({TransactionKind.PURCHASE}),
    ),
}


def get_book(party_type: PartyType | str) -> PartyBook:
    return BOOKS[PartyType(party_type)]


def get_source(source_kind: SourceKind | str) -> SourceBinding:
    return SOURCES[SourceKind(source_kind)]
