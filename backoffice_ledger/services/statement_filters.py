"""
Presentation filters and pagination for reconciled statements.

These only narrow down what is shown. They run on lines that are
already replayed, so no filter here can change a balance.
"""

import enum
import math
from dataclasses import dataclass

from backoffice_ledger.models.enums import EntryType, TransactionKind
from backoffice_ledger.services.ledger_lines import LedgerLine, ZERO


class SideFilter(str, enum.Enum):
    ALL = "all"
    DEBIT = "debit"
    CREDIT = "credit"
    OUTSTANDING = "outstanding"


@dataclass(frozen=True)
class StatementFilter:
    search: str | None = None
    kind: TransactionKind | None = None
    side: SideFilter = SideFilter.ALL
    # Which side of the book is owed: DEBIT keeps positive balances,
    # CREDIT keeps negative ones.
    outstanding_side: EntryType = EntryType.DEBIT

    def matches(self, line: LedgerLine) -> bool:
        if self.search:
            needle = self.search.lower()
            haystack = (line.reference_no, line.description, line.party_name)
            if not any(needle in (text or "").lower() for text in haystack):
                return False

        if self.kind is not None and line.kind != self.kind:
            return False

        if self.side == SideFilter.DEBIT:
            return line.debit > ZERO
        if self.side == SideFilter.CREDIT:
            return line.credit > ZERO
        if self.side == SideFilter.OUTSTANDING:
            if line.balance is None:
                return False
            if self.outstanding_side == EntryType.CREDIT:
                return line.balance < ZERO
            return line.balance > ZERO
        return True

    def apply(self, lines: list[LedgerLine]) -> list[LedgerLine]:
        return [line for line in lines if self.matches(line)]


@dataclass(frozen=True)
class Page:
    items: list
    page: int
    page_size: int
    total_items: int
    total_pages: int


def paginate(items: list, page: int, page_size: int) -> Page:
    """Slice one 1-based page; pages past the end come back empty."""
    if page < 1:
        raise ValueError("page must be 1 or greater")
    if page_size < 1:
        raise ValueError("page_size must be 1 or greater")

    start = (page - 1) * page_size
    return Page(
        items=items[start:start + page_size],
        page=page,
        page_size=page_size,
        total_items=len(items),
        total_pages=math.ceil(len(items) / page_size),
    )
