"""Transfers between two accounts."""

import logging
from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from typing import Callable

from bankledger.database.base import RecordStore, TransactionLog
from bankledger.domain.account import check_savings_floor
from bankledger.domain.entities import Account, TransactionKind, TransferResult
from bankledger.domain.errors import (
    AccountClosedError,
    PartialTransferFailure,
    SameAccountTransferError,
    StoreUnavailableError,
)
from bankledger.domain.index import AccountIndex
from bankledger.domain.money import check_balance, validate_amount

logger = logging.getLogger(__name__)


class TransferService:
    """Moves money between two active accounts.

    The two record writes are not atomic. The source is written first; if the
    destination write then fails, the debit stays on disk and
    PartialTransferFailure is raised so the caller can reconcile by hand.
    """

    def __init__(
        self,
        store: RecordStore,
        log: TransactionLog,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.store = store
        self.log = log
        self.index = AccountIndex(store)
        self.clock = clock

    def _load_active(self, account_number: int) -> tuple[int, Account]:
        position = self.index.find_position(account_number)
        account = self.store.read_at(position)
        if not account.active:
            raise AccountClosedError(account_number)
        return position, account

    def transfer(self, from_number: int, to_number: int, amount: Decimal) -> TransferResult:
        """Transfer amount from one account to another.

        Args:
            from_number: Source account number
            to_number: Destination account number
            amount: Positive amount to move

        Returns:
            TransferResult with both updated accounts

        Raises:
            SameAccountTransferError: If source and destination are the same
            AccountNotFoundError: If either account does not exist
            AccountClosedError: If either account is closed
            InvalidAmountError: If amount is not positive or the new balance cannot be stored
            InsufficientFundsError: If a savings source would go negative
            StoreUnavailableError: If the source write fails (nothing changed)
            PartialTransferFailure: If the destination write fails after the debit
        """
        if from_number == to_number:
            raise SameAccountTransferError(
                f"Cannot transfer from account {from_number} to itself"
            )
        amount = validate_amount(amount)

        with self.store.lock:
            from_pos, source = self._load_active(from_number)
            to_pos, destination = self._load_active(to_number)
            check_savings_floor(source, amount)
            check_balance(from_number, source.balance - amount)
            check_balance(to_number, destination.balance + amount)

            source = replace(source, balance=source.balance - amount)
            destination = replace(destination, balance=destination.balance + amount)

            self.store.write_at(from_pos, source)
            try:
                self.store.write_at(to_pos, destination)
            except StoreUnavailableError as e:
                logger.error(
                    "Partial transfer: debited %s from %s but could not credit %s: %s",
                    amount, from_number, to_number, e,
                )
                raise PartialTransferFailure(from_number, to_number, amount) from e

        logger.info("Transferred %s from %s to %s", amount, from_number, to_number)
        now = self.clock().replace(microsecond=0)
        self.log.append(from_number, TransactionKind.TRANSFER_OUT, amount, source.balance, now)
        self.log.append(to_number, TransactionKind.TRANSFER_IN, amount, destination.balance, now)
        return TransferResult(source=source, destination=destination, amount=amount)
