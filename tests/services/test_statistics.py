"""
Tests for statement totals.
"""

from datetime import date, datetime
from decimal import Decimal

from backoffice_ledger.models.enums import EntryType, TransactionKind
from backoffice_ledger.services.ledger_lines import LedgerLine, ZERO
from backoffice_ledger.services.statistics import LedgerTotals, summarize


def line(kind, debit="0", credit="0"):
    return LedgerLine(
        line_id=f"{kind.value}-{debit}-{credit}",
        party_id=1,
        party_name="Acme",
        kind=kind,
        transaction_date=date(2026, 3, 1),
        created_at=datetime(2026, 3, 1, 9),
        reference_no="-",
        description="-",
        debit=Decimal(debit),
        credit=Decimal(credit),
    )


class TestSummarize:

    def test_receivable_outstanding(self):
        totals = summarize(
            [
                line(TransactionKind.SALES_INVOICE, debit="1000"),
                line(TransactionKind.SALES_INVOICE, debit="200"),
                line(TransactionKind.PAYMENT, credit="400"),
            ],
            EntryType.DEBIT,
            frozenset({TransactionKind.SALES_INVOICE}),
        )
        assert totals.total_debit == Decimal("1200")
        assert totals.total_credit == Decimal("400")
        assert totals.outstanding == Decimal("800")
        assert totals.entry_count == 3
        assert totals.document_count == 2

    def test_payable_outstanding(self):
        totals = summarize(
            [
                line(TransactionKind.PURCHASE, credit="1000"),
                line(TransactionKind.PAYMENT, debit="250"),
            ],
            EntryType.CREDIT,
            frozenset({TransactionKind.PURCHASE}),
        )
        assert totals.outstanding == Decimal("750")
        assert totals.document_count == 1

    def test_overpaid_receivable_goes_negative(self):
        totals = summarize(
            [
                line(TransactionKind.SALES_INVOICE, debit="100"),
                line(TransactionKind.PAYMENT, credit="150"),
            ],
            EntryType.DEBIT,
        )
        assert totals.outstanding == Decimal("-50")

    def test_opening_and_payments_are_not_documents(self):
        totals = summarize(
            [
                line(TransactionKind.OPENING, debit="500"),
                line(TransactionKind.PAYMENT, credit="100"),
            ],
            EntryType.DEBIT,
            frozenset({TransactionKind.SALES_INVOICE}),
        )
        assert totals.entry_count == 2
        assert totals.document_count == 0

    def test_empty_statement(self):
        assert summarize([], EntryType.DEBIT) == LedgerTotals()
        assert LedgerTotals().outstanding == ZERO
