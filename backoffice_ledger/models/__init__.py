"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from backoffice_ledger.models.base import Base
from backoffice_ledger.models.enums import (
    PartyType,
    EntryType,
    TransactionKind,
    SourceKind,
    StatementSource,
)
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

__all__ = [
    "Base",
    "PartyType",
    "EntryType",
    "TransactionKind",
    "SourceKind",
    "StatementSource",
    "Customer",
    "Supplier",
    "CustomerLedgerEntry",
    "SupplierLedgerEntry",
    "SalesInvoice",
    "PurchaseOrder",
    "PaymentIn",
    "PaymentOut",
]
