"""Amount parsing utilities."""

import re
from decimal import Decimal, InvalidOperation

_CURRENCY_SYMBOLS = re.compile(r"[$€£¥]")


def parse_amount(amount_str: str) -> Decimal:
    """Parse a money string into a Decimal.

    Handles "123.45", "$1,234.56" and surrounding whitespace. Signs are
    kept as written; posting amounts are checked for sign by the ledger.

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    cleaned = _CURRENCY_SYMBOLS.sub("", amount_str).replace(",", "").strip()
    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return amount


def parse_posting(posting: str) -> tuple[str, Decimal]:
    """Split an ``ACCOUNT=AMOUNT`` posting argument.

    The account part may itself contain '=', so the string is split on the
    last one.

    Returns:
        Tuple of (account reference, amount)

    Raises:
        ValueError: If the string is not of the form ACCOUNT=AMOUNT
    """
    account, sep, amount = posting.rpartition("=")
    if not sep or not account.strip():
        raise ValueError(f"Expected ACCOUNT=AMOUNT, got '{posting}'")
    return account.strip(), parse_amount(amount)
