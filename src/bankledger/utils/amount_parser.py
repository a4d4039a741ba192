"""Amount parsing utilities."""

import re
from decimal import Decimal, InvalidOperation

_CURRENCY_SYMBOLS = re.compile(r"[$€£¥₹]")


def parse_amount(amount_str: str) -> Decimal:
    """Parse a user-entered amount into a Decimal.

    Accepts "123.45", "$1,234.56" and similar. Sign and range checks are
    left to the domain services.

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if amount_str is None or not str(amount_str).strip():
        raise ValueError("Empty amount string")

    cleaned = _CURRENCY_SYMBOLS.sub("", str(amount_str).strip())
    cleaned = cleaned.replace(",", "").strip()

    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return amount
