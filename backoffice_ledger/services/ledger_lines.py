"""
Ledger lines and the running-balance replay.

Journal rows and rows derived from invoices/orders/payments are both
normalized to LedgerLine before anything else happens to them, so
there is exactly one place that orders a statement and computes
running balances: replay().

Ordering rule: transaction_date first, created_at only to break ties
between lines on the same date. Balances are kept per party, so a
statement covering every customer never mixes two customers' totals.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, replace
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Iterable

from backoffice_ledger.models.enums import TransactionKind

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def to_amount(value) -> Decimal:
    """
    Coerce a stored or submitted amount to Decimal.

    None, empty strings, garbage and non-finite values become zero.
    Floats go through str() so 0.1 stays 0.1.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        return value if value.is_finite() else ZERO
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return ZERO
    return amount if amount.is_finite() else ZERO


@dataclass(frozen=True)
class LedgerLine:
    """One line of a party statement, journal-backed or derived."""

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
    # None until replayed, for lines that were not read from the journal.
    balance: Decimal | None = None
    reference_id: int | None = None


@dataclass(frozen=True)
class DateRange:
    """Inclusive date window; an open end means unbounded."""

    start: date | None = None
    end: date | None = None

    def __post_init__(self):
        if self.start and self.end and self.start > self.end:
            raise ValueError(
                f"start date {self.start} is after end date {self.end}"
            )

    def contains(self, day: date) -> bool:
        if self.start and day < self.start:
            return False
        if self.end and day > self.end:
            return False
        return True


def chronological_key(line: LedgerLine) -> tuple[date, datetime]:
    return (line.transaction_date, line.created_at)


def replay(lines: Iterable[LedgerLine]) -> list[LedgerLine]:
    """
    Order lines oldest first and attach running balances.

    Lines without a balance get the replayed one. Lines that already
    carry a stored balance (journal rows) keep it; if it disagrees with
    the replay, the party balance has drifted and that is logged.
    """
    running: dict[int, Decimal] = defaultdict(lambda: ZERO)
    balanced = []

    for line in sorted(lines, key=chronological_key):
        running[line.party_id] += line.debit - line.credit
        replayed = running[line.party_id]

        if line.balance is None:
            line = replace(line, balance=replayed)
        elif line.balance != replayed:
            logger.warning(
                "Ledger drift on party %s at %s (%s): stored %s, replayed %s",
                line.party_id,
                line.transaction_date,
                line.line_id,
                line.balance,
                replayed,
            )

        balanced.append(line)

    return balanced


def newest_first(lines: list[LedgerLine]) -> list[LedgerLine]:
    """Display order. Only ever applied to an already replayed list."""
    return list(reversed(lines))
