"""
Source transaction models.

Sales invoices, purchase orders and payments are the business
records that post to party ledgers. Each keeps the party balance
before and after it was recorded, as seen at creation time.

These tables are also the input of the derive-on-read path when a
ledger journal table does not exist.
"""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import String, Date, DateTime, Numeric, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, declared_attr

from backoffice_ledger.models.base import Base


class SourceDocumentMixin:
    """Columns shared by all source transactions."""

    # Subclasses set __party_column__ and __party_fk__.

    id: Mapped[int] = mapped_column(primary_key=True)
    reference_no: Mapped[str] = mapped_column(String(50), nullable=False)
    transaction_date: Mapped[date] = mapped_column(Date, nullable=False)
    amount: Mapped[Decimal | None] = mapped_column(Numeric(19, 4), nullable=True)
    previous_balance: Mapped[Decimal | None] = mapped_column(
        Numeric(19, 4), nullable=True
    )
    final_balance: Mapped[Decimal | None] = mapped_column(
        Numeric(19, 4), nullable=True
    )
    notes: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    @declared_attr
    def party_id(cls) -> Mapped[int]:
        return mapped_column(
            cls.__party_column__,
            ForeignKey(cls.__party_fk__),
            nullable=False,
            index=True,
        )


class SalesInvoice(SourceDocumentMixin, Base):
    __tablename__ = "sales_invoices"
    __party_column__ = "customer_id"
    __party_fk__ = "customers.id"


class PurchaseOrder(SourceDocumentMixin, Base):
    __tablename__ = "purchase_orders"
    __party_column__ = "supplier_id"
    __party_fk__ = "suppliers.id"


class PaymentIn(SourceDocumentMixin, Base):
    __tablename__ = "payments_in"
    __party_column__ = "customer_id"
    __party_fk__ = "customers.id"

    payment_method: Mapped[str | None] = mapped_column(String(30), nullable=True)


class PaymentOut(SourceDocumentMixin, Base):
    __tablename__ = "payments_out"
    __party_column__ = "supplier_id"
    __party_fk__ = "suppliers.id"

    payment_method: Mapped[str | None] = mapped_column(String(30), nullable=True)
