"""Double-entry balance rules.

Everything here is pure: amounts in, validated postings out. The ledger
service runs these checks before any store write, so a rejected transaction
never leaves rows behind.
"""

from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Union

from ledgerbook.domain.entities import LineInput, PostingLine
from ledgerbook.domain.errors import (
    ImbalanceError,
    ValidationError,
    unbalanced_transaction,
)

CENT = Decimal("0.01")
BALANCE_TOLERANCE = Decimal("0.01")
MIN_TRANSACTION_LINES = 2
ZERO = Decimal("0.00")
# Amount columns are Numeric(14, 2): at most 12 integer digits
MAX_AMOUNT = Decimal("1e12")


def quantize(value: Any) -> Decimal:
    """Coerce a store value (Decimal, float, int or None) to a 2-place Decimal."""
    if value is None:
        return ZERO
    if isinstance(value, float):
        value = Decimal(repr(value))
    return Decimal(value).quantize(CENT)


def within_tolerance(left: Decimal, right: Decimal) -> bool:
    """Return True if two amounts agree within the balance tolerance."""
    return abs(left - right) <= BALANCE_TOLERANCE


def is_negligible(amount: Decimal) -> bool:
    """Return True if an amount is indistinguishable from zero."""
    return within_tolerance(amount, ZERO)


def to_amount(value: Union[Decimal, int, float, str, None], field_name: str = "amount") -> Decimal:
    """Parse a posting amount.

    Missing values (None or blank string) count as zero.

    Args:
        value: Raw amount
        field_name: Name used in error messages

    Returns:
        Non-negative Decimal with two fraction digits

    Raises:
        ValidationError: If the amount is not a finite, non-negative number
            below MAX_AMOUNT with at most two fraction digits
    """
    if value is None:
        return ZERO
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {field_name}: {value!r}")
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return ZERO

    try:
        amount = Decimal(repr(value)) if isinstance(value, float) else Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        raise ValidationError(f"Invalid {field_name}: {value!r}")

    if not amount.is_finite():
        raise ValidationError(f"Invalid {field_name}: {value!r}")
    if amount < 0:
        raise ValidationError(f"{field_name.capitalize()} cannot be negative: {amount}")
    if amount >= MAX_AMOUNT:
        raise ValidationError(
            f"{field_name.capitalize()} is too large: {amount} (must be below {MAX_AMOUNT:,.0f})"
        )
    if amount != amount.quantize(CENT):
        raise ValidationError(
            f"{field_name.capitalize()} has more than two decimal places: {amount}"
        )
    return amount.quantize(CENT)


def _coerce_line(line: Union[LineInput, Mapping]) -> LineInput:
    if isinstance(line, LineInput):
        return line
    if isinstance(line, Mapping):
        return LineInput(
            account_id=line.get("account_id"),
            debit_amount=line.get("debit_amount"),
            credit_amount=line.get("credit_amount"),
        )
    raise ValidationError(f"Unsupported transaction line: {line!r}")


def _account_id(value: Any, position: int) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"Line {position}: invalid account reference {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Line {position}: invalid account reference {value!r}")


def totals(lines: Iterable[PostingLine]) -> tuple[Decimal, Decimal]:
    """Return (total debit, total credit) of a set of postings."""
    total_debit = ZERO
    total_credit = ZERO
    for line in lines:
        total_debit += line.debit_amount
        total_credit += line.credit_amount
    return total_debit, total_credit


def check_balance(lines: Iterable[PostingLine]) -> tuple[Decimal, Decimal]:
    """Verify that debits equal credits.

    Returns:
        Tuple of (total debit, total credit)

    Raises:
        ImbalanceError: If the totals differ by more than the tolerance
    """
    total_debit, total_credit = totals(lines)
    if not within_tolerance(total_debit, total_credit):
        raise ImbalanceError(unbalanced_transaction(total_debit, total_credit))
    return total_debit, total_credit


def normalize_lines(lines: Iterable[Union[LineInput, Mapping]]) -> list[PostingLine]:
    """Validate submitted lines and return the postings to write.

    Lines whose debit and credit are both zero are dropped before the
    minimum line count is checked.

    Args:
        lines: LineInput objects or mappings with account_id, debit_amount
            and credit_amount keys

    Returns:
        List of PostingLine in submission order

    Raises:
        ValidationError: If a line is malformed, has both sides set, lacks an
            account, or fewer than two usable lines remain
        ImbalanceError: If debits and credits differ
    """
    if lines is None:
        raise ValidationError("Transaction lines are required")

    postings: list[PostingLine] = []
    for position, raw in enumerate(lines, start=1):
        line = _coerce_line(raw)
        debit = to_amount(line.debit_amount, "debit amount")
        credit = to_amount(line.credit_amount, "credit amount")

        if debit > 0 and credit > 0:
            raise ValidationError(
                f"Line {position}: a line cannot carry both a debit and a credit"
            )
        if debit == 0 and credit == 0:
            continue
        if line.account_id is None or line.account_id == "":
            raise ValidationError(f"Line {position}: account is required")

        postings.append(
            PostingLine(
                account_id=_account_id(line.account_id, position),
                debit_amount=debit,
                credit_amount=credit,
            )
        )

    if len(postings) < MIN_TRANSACTION_LINES:
        raise ValidationError(
            f"A transaction needs at least {MIN_TRANSACTION_LINES} lines "
            "with an account and a non-zero amount"
        )

    check_balance(postings)
    return postings
