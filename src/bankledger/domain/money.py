"""Fixed-point money helpers.

Balances live in memory as two-place ``Decimal`` values and on disk as
integer minor units (cents).
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from bankledger.domain.errors import InvalidAmountError, invalid_amount

CENT = Decimal("0.01")

# Balances are stored as signed 64-bit cents
MAX_MINOR_UNITS = 2**63 - 1
MAX_BALANCE = Decimal(MAX_MINOR_UNITS) / 100


def quantize(value: Decimal) -> Decimal:
    """Round a value to cents."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def _has_cent_precision(value: Decimal) -> bool:
    try:
        return value == value.quantize(CENT)
    except InvalidOperation:
        return False


def validate_amount(amount: Decimal) -> Decimal:
    """Validate a transaction amount.

    Args:
        amount: Amount to check

    Returns:
        The amount normalized to two decimal places

    Raises:
        InvalidAmountError: If amount is not a finite, positive value with at
            most two decimal places, or exceeds the storable balance range
    """
    if not isinstance(amount, Decimal):
        try:
            amount = Decimal(str(amount))
        except InvalidOperation:
            raise InvalidAmountError(invalid_amount(amount))
    if not amount.is_finite() or amount <= 0 or not _has_cent_precision(amount):
        raise InvalidAmountError(invalid_amount(amount))
    if amount > MAX_BALANCE:
        raise InvalidAmountError(invalid_amount(amount))
    return amount.quantize(CENT)


def validate_opening_balance(amount: Decimal) -> Decimal:
    """Validate an initial balance, which may be zero."""
    if isinstance(amount, Decimal) and amount.is_finite() and amount == 0:
        return Decimal("0.00")
    return validate_amount(amount)


def to_minor_units(value: Decimal) -> int:
    """Convert a two-place Decimal to integer cents."""
    return int(quantize(value) * 100)


def from_minor_units(cents: int) -> Decimal:
    """Convert integer cents to a two-place Decimal."""
    return (Decimal(cents) / 100).quantize(CENT)


def check_balance(account_number: int, balance: Decimal) -> Decimal:
    """Reject a resulting balance that cannot be stored.

    Raises:
        InvalidAmountError: If the balance is outside the signed 64-bit cents range
    """
    if abs(balance) > MAX_BALANCE:
        raise InvalidAmountError(
            f"Resulting balance of account {account_number} is outside the storable range"
        )
    return balance
