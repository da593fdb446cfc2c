"""
Shared enumerations for database models.

Ledger kinds are stored by value ("opening", "po", ...) so the
journal tables stay readable from plain SQL.
"""

import enum


class PartyType(str, enum.Enum):
    """Who the statement is kept for."""
    CUSTOMER = "customer"
    SUPPLIER = "supplier"


class EntryType(str, enum.Enum):
    """Side of a ledger entry."""
    DEBIT = "DEBIT"
    CREDIT = "CREDIT"


class TransactionKind(str, enum.Enum):
    """What produced a ledger entry."""
    OPENING = "opening"
    SALE_ORDER = "sale_order"
    SALES_INVOICE = "sales_invoice"
    PURCHASE = "po"
    PAYMENT = "payment"


class SourceKind(str, enum.Enum):
    """Business transactions that post to a party ledger."""
    SALES_INVOICE = "sales-invoices"
    PURCHASE_ORDER = "purchase-orders"
    PAYMENT_IN = "payments-in"
    PAYMENT_OUT = "payments-out"


class StatementSource(str, enum.Enum):
    """Where a reconciled statement was read from."""
    JOURNAL = "journal"
    DERIVED = "derived"
