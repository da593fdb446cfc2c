"""
Ledger journal models.

One row per posted transaction per party, each carrying the
running balance after it. Customers and suppliers keep separate
journals with the same shape. Either table may be missing in a
deployment; the reconciliation service then derives the statement
from the source transactions instead.

Entries are not edited in place by hand. The BalancePoster
rewrites debit/credit/balance when the originating transaction is
amended and replays every later balance of the same party.
"""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import (
    String, Date, DateTime, Numeric, ForeignKey, Integer,
    Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, declared_attr

from backoffice_ledger.models.base import Base
from backoffice_ledger.models.enums import TransactionKind


def _enum_values(enum_cls) -> list[str]:
    return [member.value for member in enum_cls]


class LedgerEntryMixin:
    """Columns shared by both journals; the party FK is set per table."""

    # Subclasses set __party_column__ and __party_fk__.

    id: Mapped[int] = mapped_column(primary_key=True)
    transaction_type: Mapped[TransactionKind] = mapped_column(
        SAEnum(
            TransactionKind,
            name="ledger_transaction_type_enum",
            values_callable=_enum_values,
        ),
        nullable=False,
    )
    transaction_date: Mapped[date] = mapped_column(Date, nullable=False)
    # Id of the invoice/order/payment this entry was posted for.
    reference_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    reference_no: Mapped[str | None] = mapped_column(String(50), nullable=True)
    description: Mapped[str | None] = mapped_column(String(255), nullable=True)
    debit: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )
    credit: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )
    balance: Mapped[Decimal] = mapped_column(Numeric(19, 4), nullable=False)
    # Full-precision timestamp; only used to order entries that
    # share a transaction_date.
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

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__} {self.transaction_type.value} "
            f"{self.transaction_date} dr={self.debit} cr={self.credit} "
            f"bal={self.balance}>"
        )


class CustomerLedgerEntry(LedgerEntryMixin, Base):
    __tablename__ = "customer_ledger"
    __party_column__ = "customer_id"
    __party_fk__ = "customers.id"


class SupplierLedgerEntry(LedgerEntryMixin, Base):
    __tablename__ = "supplier_ledger"
    __party_column__ = "supplier_id"
    __party_fk__ = "suppliers.id"
