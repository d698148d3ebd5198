"""Tests for the double-entry balance rules."""

from decimal import Decimal

import pytest

from ledgerbook.domain.balance import (
    check_balance,
    normalize_lines,
    quantize,
    to_amount,
    within_tolerance,
)
from ledgerbook.domain.entities import LineInput, PostingLine
from ledgerbook.domain.errors import ImbalanceError, ValidationError


class TestToAmount:
    """Tests for parsing posting amounts."""

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_missing_amount_is_zero(self, raw):
        assert to_amount(raw) == Decimal("0.00")

    def test_accepts_decimal_int_float_and_str(self):
        assert to_amount(Decimal("12.5")) == Decimal("12.50")
        assert to_amount(7) == Decimal("7.00")
        assert to_amount(0.1) == Decimal("0.10")
        assert to_amount(" 99.99 ") == Decimal("99.99")

    def test_rejects_negative(self):
        with pytest.raises(ValidationError, match="negative"):
            to_amount("-5")

    def test_rejects_more_than_two_places(self):
        with pytest.raises(ValidationError, match="two decimal places"):
            to_amount("1.005")

    def test_trailing_zeros_are_fine(self):
        assert to_amount("1.2300") == Decimal("1.23")

    def test_largest_storable_amount(self):
        assert to_amount("999999999999.99") == Decimal("999999999999.99")

    @pytest.mark.parametrize("raw", ["1000000000000", "12345678901234567.89", "1e30"])
    def test_rejects_amounts_too_large_for_storage(self, raw):
        with pytest.raises(ValidationError, match="too large"):
            to_amount(raw)

    @pytest.mark.parametrize("raw", ["abc", "NaN", "Infinity", True, [1]])
    def test_rejects_garbage(self, raw):
        with pytest.raises(ValidationError):
            to_amount(raw)


def test_quantize_handles_store_values():
    assert quantize(None) == Decimal("0.00")
    assert quantize(100.0) == Decimal("100.00")
    assert quantize(Decimal("3.1")) == Decimal("3.10")


def test_within_tolerance_boundary():
    assert within_tolerance(Decimal("100.00"), Decimal("100.01"))
    assert not within_tolerance(Decimal("100.00"), Decimal("100.02"))


class TestNormalizeLines:
    """Tests for turning submitted lines into postings."""

    def test_balanced_lines_pass_through_in_order(self):
        postings = normalize_lines(
            [
                LineInput(account_id=1, debit_amount="100"),
                LineInput(account_id=2, credit_amount="60"),
                LineInput(account_id=3, credit_amount="40"),
            ]
        )
        assert postings == [
            PostingLine(account_id=1, debit_amount=Decimal("100.00"), credit_amount=Decimal("0.00")),
            PostingLine(account_id=2, debit_amount=Decimal("0.00"), credit_amount=Decimal("60.00")),
            PostingLine(account_id=3, debit_amount=Decimal("0.00"), credit_amount=Decimal("40.00")),
        ]

    def test_accepts_mappings(self):
        postings = normalize_lines(
            [
                {"account_id": 1, "debit_amount": 50, "credit_amount": 0},
                {"account_id": "2", "debit_amount": None, "credit_amount": "50.00"},
            ]
        )
        assert [p.account_id for p in postings] == [1, 2]

    def test_imbalance_raises_imbalance_error(self):
        lines = [
            LineInput(account_id=1, debit_amount="100"),
            LineInput(account_id=2, credit_amount="90"),
        ]
        with pytest.raises(ImbalanceError, match="Debits must equal credits"):
            normalize_lines(lines)

    def test_imbalance_is_a_validation_error(self):
        assert issubclass(ImbalanceError, ValidationError)

    def test_difference_within_one_cent_is_accepted(self):
        postings = normalize_lines(
            [
                LineInput(account_id=1, debit_amount="100.01"),
                LineInput(account_id=2, credit_amount="100.00"),
            ]
        )
        assert len(postings) == 2

    def test_both_sides_on_one_line_rejected(self):
        with pytest.raises(ValidationError, match="both a debit and a credit"):
            normalize_lines(
                [
                    LineInput(account_id=1, debit_amount="10", credit_amount="10"),
                    LineInput(account_id=2, debit_amount="0", credit_amount="0"),
                ]
            )

    def test_zero_lines_are_dropped_before_counting(self):
        with pytest.raises(ValidationError, match="at least 2 lines"):
            normalize_lines(
                [
                    LineInput(account_id=1, debit_amount="0"),
                    LineInput(account_id=2, credit_amount="0"),
                ]
            )

    def test_blank_rows_are_ignored(self):
        postings = normalize_lines(
            [
                LineInput(account_id=1, debit_amount="25"),
                LineInput(account_id=None),
                LineInput(account_id=2, credit_amount="25"),
            ]
        )
        assert len(postings) == 2

    def test_amount_without_account_rejected(self):
        with pytest.raises(ValidationError, match="account is required"):
            normalize_lines(
                [
                    LineInput(account_id=1, debit_amount="25"),
                    LineInput(account_id=None, credit_amount="25"),
                ]
            )

    def test_single_line_rejected(self):
        with pytest.raises(ValidationError):
            normalize_lines([LineInput(account_id=1, debit_amount="25")])

    def test_none_rejected(self):
        with pytest.raises(ValidationError):
            normalize_lines(None)


def test_check_balance_returns_totals():
    debit, credit = check_balance(
        [
            PostingLine(account_id=1, debit_amount=Decimal("10.00"), credit_amount=Decimal("0.00")),
            PostingLine(account_id=2, debit_amount=Decimal("0.00"), credit_amount=Decimal("10.00")),
        ]
    )
    assert debit == credit == Decimal("10.00")
