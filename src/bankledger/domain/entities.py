"""Domain model entities for bankledger.

These are pure data classes representing business concepts, independent of
the on-disk record layout. Records are immutable; operations mutate a copy
made with ``dataclasses.replace`` and hand it back to the record store.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

from bankledger.domain.errors import InvalidAccountTypeError, invalid_account_type


class AccountType(str, Enum):
    """Supported account types."""

    SAVINGS = "Savings"
    CURRENT = "Current"

    @classmethod
    def parse(cls, value: "str | AccountType") -> "AccountType":
        """Parse an account type case-insensitively.

        Raises:
            InvalidAccountTypeError: If value names no known type
        """
        if isinstance(value, AccountType):
            return value
        normalized = (value or "").strip().lower()
        for member in cls:
            if member.value.lower() == normalized:
                return member
        raise InvalidAccountTypeError(invalid_account_type(value))


class TransactionKind(str, Enum):
    """Kinds of transaction log entries."""

    CREATE = "CREATE"
    DEPOSIT = "DEPOSIT"
    WITHDRAW = "WITHDRAW"
    CLOSE = "CLOSE"
    TRANSFER_OUT = "TRANSFER_OUT"
    TRANSFER_IN = "TRANSFER_IN"
    INTEREST = "INTEREST"


@dataclass(frozen=True)
class Account:
    """Bank account domain entity."""

    account_number: int
    holder_name: str
    account_type: AccountType
    balance: Decimal
    phone: str = ""
    address: str = ""
    active: bool = True

    @property
    def is_savings(self) -> bool:
        return self.account_type is AccountType.SAVINGS


@dataclass(frozen=True)
class TransactionEntry:
    """One line of the transaction log."""

    account_number: int
    kind: TransactionKind
    amount: Decimal
    resulting_balance: Decimal
    timestamp: datetime


@dataclass(frozen=True)
class ModifyResult:
    """Outcome of a modify operation.

    ``warnings`` lists fields that were rejected; every other requested
    change was committed.
    """

    account: Account
    warnings: tuple[str, ...] = ()


@dataclass(frozen=True)
class TransferResult:
    """Balances of both accounts after a completed transfer."""

    source: Account
    destination: Account
    amount: Decimal


@dataclass(frozen=True)
class InterestPosting:
    """Interest credited to a single savings account."""

    account_number: int
    interest: Decimal
    new_balance: Decimal
