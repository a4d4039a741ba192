"""Account domain service."""

import logging
from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional

from bankledger.database.base import RecordStore, TransactionLog
from bankledger.domain.entities import (
    Account,
    AccountType,
    ModifyResult,
    TransactionEntry,
    TransactionKind,
)
from bankledger.domain.errors import (
    AccountClosedError,
    AlreadyClosedError,
    ConfirmationRequiredError,
    InsufficientFundsError,
    InvalidAccountTypeError,
    ValidationError,
)
from bankledger.domain.index import AccountIndex
from bankledger.domain.money import check_balance, validate_amount, validate_opening_balance

logger = logging.getLogger(__name__)

SORT_KEYS = {
    "number": lambda acc: acc.account_number,
    "name": lambda acc: acc.holder_name.lower(),
    "balance": lambda acc: acc.balance,
}


def check_savings_floor(account: Account, amount: Decimal) -> None:
    """Reject a debit that would take a savings account below zero.

    Raises:
        InsufficientFundsError: If the account is Savings and cannot cover amount
    """
    if account.is_savings and account.balance - amount < 0:
        raise InsufficientFundsError(account.account_number, account.balance, amount)


class AccountService:
    """Service for single-account operations.

    Every mutating method holds the store lock for its whole
    read-validate-write cycle and re-reads the record first.
    """

    def __init__(
        self,
        store: RecordStore,
        log: TransactionLog,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """Initialize account service.

        Args:
            store: Record store holding the accounts
            log: Transaction log receiving one entry per balance event
            clock: Source of local timestamps for log entries
        """
        self.store = store
        self.log = log
        self.index = AccountIndex(store)
        self.clock = clock

    def _now(self) -> datetime:
        return self.clock().replace(microsecond=0)

    def _load(self, account_number: int) -> tuple[int, Account]:
        position = self.index.find_position(account_number)
        return position, self.store.read_at(position)

    def _load_active(self, account_number: int) -> tuple[int, Account]:
        position, account = self._load(account_number)
        if not account.active:
            raise AccountClosedError(account_number)
        return position, account

    def _record(self, account: Account, kind: TransactionKind, amount: Decimal) -> None:
        self.log.append(account.account_number, kind, amount, account.balance, self._now())

    def create_account(
        self,
        holder_name: str,
        account_type: str | AccountType,
        initial_balance: Decimal,
        phone: str = "",
        address: str = "",
    ) -> Account:
        """Create a new account.

        Args:
            holder_name: Account holder name
            account_type: 'Savings' or 'Current', any case
            initial_balance: Opening balance, zero or positive
            phone: Optional phone number
            address: Optional address

        Returns:
            The stored account

        Raises:
            InvalidAccountTypeError: If account type is unknown
            InvalidAmountError: If initial balance is negative or malformed
            StoreUnavailableError: If the record file cannot be written
        """
        parsed_type = AccountType.parse(account_type)
        balance = validate_opening_balance(initial_balance)

        with self.store.lock:
            account = Account(
                account_number=self.index.next_account_number(),
                holder_name=holder_name.strip(),
                account_type=parsed_type,
                balance=balance,
                phone=phone.strip(),
                address=address.strip(),
                active=True,
            )
            self.store.append(account)

        logger.info("Created %s account %s", parsed_type.value, account.account_number)
        self._record(account, TransactionKind.CREATE, balance)
        return account

    def get_account(self, account_number: int) -> Account:
        """Get an account, active or closed.

        Raises:
            AccountNotFoundError: If account does not exist
        """
        _, account = self._load(account_number)
        return account

    def list_accounts(self, sort_by: str = "number", include_closed: bool = False) -> list[Account]:
        """List accounts.

        Args:
            sort_by: One of 'number', 'name', 'balance'
            include_closed: Also return closed accounts

        Returns:
            List of account entities

        Raises:
            ValidationError: If sort key is unknown
        """
        if sort_by not in SORT_KEYS:
            raise ValidationError(
                f"Unknown sort order '{sort_by}'. Use one of: {', '.join(SORT_KEYS)}"
            )
        accounts = [acc for acc in self.store.read_all() if include_closed or acc.active]
        return sorted(accounts, key=SORT_KEYS[sort_by])

    def recent_transactions(self, account_number: int, limit: int = 10) -> list[TransactionEntry]:
        """Return up to ``limit`` log entries for an account, oldest first."""
        return self.log.recent_for(account_number, limit)

    def deposit(self, account_number: int, amount: Decimal) -> Account:
        """Deposit into an active account.

        Returns:
            The updated account

        Raises:
            AccountNotFoundError: If account does not exist
            AccountClosedError: If account is closed
            InvalidAmountError: If amount is not positive or the new balance cannot be stored
        """
        amount = validate_amount(amount)
        with self.store.lock:
            position, account = self._load_active(account_number)
            check_balance(account_number, account.balance + amount)
            updated = replace(account, balance=account.balance + amount)
            self.store.write_at(position, updated)

        logger.info("Deposited %s into account %s", amount, account_number)
        self._record(updated, TransactionKind.DEPOSIT, amount)
        return updated

    def withdraw(self, account_number: int, amount: Decimal) -> Account:
        """Withdraw from an active account.

        Savings accounts cannot go below zero; Current accounts have no floor.

        Returns:
            The updated account

        Raises:
            AccountNotFoundError: If account does not exist
            AccountClosedError: If account is closed
            InvalidAmountError: If amount is not positive or the new balance cannot be stored
            InsufficientFundsError: If a savings balance would go negative
        """
        amount = validate_amount(amount)
        with self.store.lock:
            position, account = self._load_active(account_number)
            check_savings_floor(account, amount)
            check_balance(account_number, account.balance - amount)
            updated = replace(account, balance=account.balance - amount)
            self.store.write_at(position, updated)

        logger.info("Withdrew %s from account %s", amount, account_number)
        self._record(updated, TransactionKind.WITHDRAW, amount)
        return updated

    def modify_account(
        self,
        account_number: int,
        phone: Optional[str] = None,
        address: Optional[str] = None,
        account_type: Optional[str] = None,
    ) -> ModifyResult:
        """Update contact details and type of an active account.

        Empty or missing values keep the current field. An invalid type is
        reported in the result warnings while the other fields still commit.

        Raises:
            AccountNotFoundError: If account does not exist
            AccountClosedError: If account is closed
        """
        warnings = []
        with self.store.lock:
            position, account = self._load_active(account_number)
            changes = {}
            if phone and phone.strip():
                changes["phone"] = phone.strip()
            if address and address.strip():
                changes["address"] = address.strip()
            if account_type and account_type.strip():
                try:
                    changes["account_type"] = AccountType.parse(account_type)
                except InvalidAccountTypeError as e:
                    warnings.append(f"{e}; keeping {account.account_type.value}")
                    logger.warning("Account %s: %s", account_number, e)

            updated = replace(account, **changes)
            self.store.write_at(position, updated)

        logger.info("Modified account %s (%s)", account_number, ", ".join(changes) or "no changes")
        return ModifyResult(account=updated, warnings=tuple(warnings))

    def close_account(self, account_number: int, confirm: bool = False) -> Account:
        """Close an active account.

        The record stays in the store with its final balance.

        Args:
            account_number: Account to close
            confirm: Must be True; the caller asked the user to confirm

        Raises:
            AccountNotFoundError: If account does not exist
            AlreadyClosedError: If account is already closed
            ConfirmationRequiredError: If confirm is not set
        """
        with self.store.lock:
            position, account = self._load(account_number)
            if not account.active:
                raise AlreadyClosedError(account_number)
            if not confirm:
                raise ConfirmationRequiredError(
                    f"Closing account {account_number} requires confirmation"
                )
            updated = replace(account, active=False)
            self.store.write_at(position, updated)

        logger.info("Closed account %s", account_number)
        self._record(updated, TransactionKind.CLOSE, Decimal("0.00"))
        return updated
