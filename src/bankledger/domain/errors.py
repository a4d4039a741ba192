"""Shared domain error messages and error types."""

from decimal import Decimal


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class InvalidAmountError(ValidationError):
    """Amount is not positive or is malformed."""


class InvalidAccountTypeError(ValidationError):
    """Account type is not one of the supported types."""


class SameAccountTransferError(ValidationError):
    """Transfer source and destination are the same account."""


class ConfirmationRequiredError(ValidationError):
    """Destructive operation was attempted without confirmation."""


class NotFoundError(DomainError):
    """Requested domain entity or path does not exist."""


class AccountNotFoundError(NotFoundError):
    """No record carries the requested account number."""

    def __init__(self, account_number: int):
        super().__init__(account_not_found(account_number))
        self.account_number = account_number


class RecordNotFoundError(NotFoundError):
    """Position lies outside the record store."""

    def __init__(self, position: int):
        super().__init__(f"No record at position {position}")
        self.position = position


class AccountStateError(DomainError):
    """Account lifecycle state forbids the operation."""


class AccountClosedError(AccountStateError):
    """Operation requires an active account."""

    def __init__(self, account_number: int):
        super().__init__(f"Account {account_number} is closed")
        self.account_number = account_number


class AlreadyClosedError(AccountStateError):
    """Account was closed before."""

    def __init__(self, account_number: int):
        super().__init__(f"Account {account_number} is already closed")
        self.account_number = account_number


class InsufficientFundsError(DomainError):
    """Savings balance would drop below zero."""

    def __init__(self, account_number: int, balance: Decimal, amount: Decimal):
        super().__init__(
            f"Insufficient funds in savings account {account_number}: "
            f"balance {balance:.2f}, requested {amount:.2f}"
        )
        self.account_number = account_number
        self.balance = balance
        self.amount = amount


class StoreUnavailableError(DomainError):
    """Record file could not be opened, read or written."""


class CorruptRecordError(StoreUnavailableError):
    """A record slot does not decode to a valid account."""


class PartialTransferFailure(DomainError):
    """Source was debited but the destination write failed.

    The ledger is left inconsistent and needs manual reconciliation.
    """

    def __init__(self, from_number: int, to_number: int, amount: Decimal):
        super().__init__(
            f"Transfer of {amount:.2f} from {from_number} to {to_number} failed "
            f"after debiting {from_number}; manual reconciliation required"
        )
        self.from_number = from_number
        self.to_number = to_number
        self.amount = amount


def account_not_found(account_number: int) -> str:
    """Return message for missing account."""
    return f"Account {account_number} not found"


def invalid_amount(amount: object) -> str:
    """Return message for a rejected amount."""
    return f"Invalid amount '{amount}': must be a positive value with at most two decimal places"


def invalid_account_type(value: str) -> str:
    """Return message for an unknown account type."""
    return f"Invalid account type '{value}'. Please enter 'Savings' or 'Current'"
