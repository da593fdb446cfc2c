"""
Tests for ledger lines and the running-balance replay.

No database here: replay() works on plain LedgerLine values.
"""

import logging
import random
from datetime import date, datetime
from decimal import Decimal

import pytest

from backoffice_ledger.models.enums import TransactionKind
from backoffice_ledger.services.ledger_lines import (
    LedgerLine,
    DateRange,
    ZERO,
    to_amount,
    replay,
    newest_first,
)


def make_line(
    line_id,
    day,
    debit="0",
    credit="0",
    party_id=1,
    created=None,
    balance=None,
    kind=TransactionKind.SALES_INVOICE,
):
    """Helper: build a line dated 2026-01-<day>."""
    return LedgerLine(
        line_id=line_id,
        party_id=party_id,
        party_name=f"Party {party_id}",
        kind=kind,
        transaction_date=date(2026, 1, day),
        created_at=created or datetime(2026, 1, day, 9, 0),
        reference_no=line_id.upper(),
        description=line_id,
        debit=Decimal(debit),
        credit=Decimal(credit),
        balance=balance,
    )


class TestToAmount:

    def test_none_is_zero(self):
        assert to_amount(None) == ZERO

    def test_garbage_is_zero(self):
        assert to_amount("abc") == ZERO
        assert to_amount("") == ZERO

    def test_non_finite_is_zero(self):
        assert to_amount(float("nan")) == ZERO
        assert to_amount(float("inf")) == ZERO
        assert to_amount(Decimal("Infinity")) == ZERO

    def test_numeric_strings_and_floats(self):
        assert to_amount(" 12.50 ") == Decimal("12.50")
        assert to_amount(0.1) == Decimal("0.1")
        assert to_amount(7) == Decimal("7")


class TestDateRange:

    def test_inclusive_bounds(self):
        window = DateRange(start=date(2026, 1, 2), end=date(2026, 1, 4))
        assert window.contains(date(2026, 1, 2))
        assert window.contains(date(2026, 1, 4))
        assert not window.contains(date(2026, 1, 1))
        assert not window.contains(date(2026, 1, 5))

    def test_open_ends(self):
        assert DateRange().contains(date(1999, 12, 31))
        assert DateRange(start=date(2026, 1, 2)).contains(date(2030, 1, 1))
        assert not DateRange(end=date(2026, 1, 2)).contains(date(2026, 1, 3))

    def test_start_after_end_rejected(self):
        with pytest.raises(ValueError, match="after end date"):
            DateRange(start=date(2026, 2, 1), end=date(2026, 1, 1))


class TestReplay:

    def test_running_balance_is_debit_minus_credit(self):
        lines = replay([
            make_line("a", 1, debit="1000"),
            make_line("b", 2, credit="400"),
            make_line("c", 3, debit="50"),
        ])
        assert [line.balance for line in lines] == [
            Decimal("1000"), Decimal("600"), Decimal("650"),
        ]

    def test_same_date_ordered_by_creation_time(self):
        """
        Worked example: invoice 1000 on day 1, then on day 2 an
        invoice of 200 created before a payment of 400.
        """
        lines = replay([
            make_line("pay", 2, credit="400", created=datetime(2026, 1, 2, 12)),
            make_line("inv2", 2, debit="200", created=datetime(2026, 1, 2, 10)),
            make_line("inv1", 1, debit="1000"),
        ])
        assert [line.line_id for line in lines] == ["inv1", "inv2", "pay"]
        assert [line.balance for line in lines] == [
            Decimal("1000"), Decimal("1200"), Decimal("800"),
        ]

    def test_date_wins_over_creation_time(self):
        lines = replay([
            make_line("late", 5, debit="10", created=datetime(2026, 1, 1)),
            make_line("early", 1, debit="20", created=datetime(2026, 1, 9)),
        ])
        assert [line.line_id for line in lines] == ["early", "late"]

    def test_result_independent_of_input_order(self):
        lines = [
            make_line(f"l{i}", (i % 5) + 1, debit=str(i * 10),
                      created=datetime(2026, 1, (i % 5) + 1, i))
            for i in range(1, 12)
        ]
        expected = [(l.line_id, l.balance) for l in replay(lines)]

        shuffled = lines[:]
        random.Random(7).shuffle(shuffled)
        assert [(l.line_id, l.balance) for l in replay(shuffled)] == expected

    def test_balances_are_kept_per_party(self):
        lines = replay([
            make_line("a1", 1, debit="100", party_id=1),
            make_line("b1", 2, debit="30", party_id=2),
            make_line("a2", 3, credit="40", party_id=1),
            make_line("b2", 4, credit="10", party_id=2),
        ])
        balances = {line.line_id: line.balance for line in lines}
        assert balances == {
            "a1": Decimal("100"),
            "b1": Decimal("30"),
            "a2": Decimal("60"),
            "b2": Decimal("20"),
        }

    def test_stored_balance_kept(self):
        lines = replay([
            make_line("a", 1, debit="100", balance=Decimal("100")),
            make_line("b", 2, credit="30", balance=Decimal("70")),
        ])
        assert [line.balance for line in lines] == [Decimal("100"), Decimal("70")]

    def test_drifted_stored_balance_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING):
            lines = replay([
                make_line("a", 1, debit="100", balance=Decimal("999")),
            ])

        assert lines[0].balance == Decimal("999")
        assert "Ledger drift" in caplog.text

    def test_empty_input(self):
        assert replay([]) == []


class TestNewestFirst:

    def test_reverses_replayed_order(self):
        lines = replay([
            make_line("a", 1, debit="1"),
            make_line("b", 2, debit="1"),
        ])
        assert [line.line_id for line in newest_first(lines)] == ["b", "a"]
        assert [line.balance for line in newest_first(lines)] == [
            Decimal("2"), Decimal("1"),
        ]
