"""Aggregate totals over a reconciled statement."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from backoffice_ledger.models.enums import EntryType
from backoffice_ledger.services.ledger_lines import LedgerLine, ZERO


@dataclass(frozen=True)
class LedgerTotals:
    total_debit: Decimal = ZERO
    total_credit: Decimal = ZERO
    outstanding: Decimal = ZERO
    entry_count: int = 0
    document_count: int = 0


def summarize(
    lines: Iterable[LedgerLine],
    outstanding_side: EntryType,
    document_kinds: frozenset = frozenset(),
) -> LedgerTotals:
    """
    Total the debit and credit columns of a balanced, filtered statement.

    outstanding_side decides the sign: DEBIT for a receivable
    (customer owes us), CREDIT for a payable (we owe the supplier).
    """
    total_debit = ZERO
    total_credit = ZERO
    entry_count = 0
    document_count = 0

    for line in lines:
        total_debit += line.debit
        total_credit += line.credit
        entry_count += 1
        if line.kind in document_kinds:
            document_count += 1

    if outstanding_side == EntryType.DEBIT:
        outstanding = total_debit - total_credit
    else:
        outstanding = total_credit - total_debit

    return LedgerTotals(
        total_debit=total_debit,
        total_credit=total_credit,
        outstanding=outstanding,
        entry_count=entry_count,
        document_count=document_count,
    )
