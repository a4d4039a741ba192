"""Bulk interest posting for savings accounts."""

import logging
from dataclasses import replace
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Callable

from bankledger.database.base import RecordStore, TransactionLog
from bankledger.domain.entities import InterestPosting, TransactionKind
from bankledger.domain.errors import InvalidAmountError
from bankledger.domain.money import check_balance, quantize

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12


def monthly_interest(balance: Decimal, rate_percent: Decimal) -> Decimal:
    """Monthly accrual for an annual percentage rate, rounded to cents."""
    try:
        return quantize(balance * (rate_percent / 100) / MONTHS_PER_YEAR)
    except InvalidOperation as e:
        raise InvalidAmountError(f"Interest at {rate_percent}% on {balance} is out of range") from e


class InterestService:
    """Applies a month of interest to every active savings account.

    This is the one whole-store operation: it loads every record, mutates
    the savings accounts in memory and rewrites the file once, holding the
    store lock throughout.
    """

    def __init__(
        self,
        store: RecordStore,
        log: TransactionLog,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.store = store
        self.log = log
        self.clock = clock

    def apply_interest(self, rate_percent: Decimal) -> list[InterestPosting]:
        """Credit monthly interest at an annual rate.

        Args:
            rate_percent: Annual interest rate in percent, greater than zero

        Returns:
            One posting per credited account, in store order

        Raises:
            InvalidAmountError: If rate is not positive or a new balance cannot be stored
            StoreUnavailableError: If the store cannot be rewritten
        """
        rate = Decimal(str(rate_percent))
        if not rate.is_finite() or rate <= 0:
            raise InvalidAmountError(f"Invalid interest rate '{rate_percent}': must be greater than zero")

        postings = []
        with self.store.lock:
            accounts = self.store.read_all()
            if not accounts:
                logger.info("No accounts to update")
                return postings

            now = self.clock().replace(microsecond=0)
            for i, account in enumerate(accounts):
                if not (account.active and account.is_savings):
                    continue
                interest = monthly_interest(account.balance, rate)
                updated = replace(
                    account, balance=check_balance(account.account_number, account.balance + interest)
                )
                accounts[i] = updated
                postings.append(InterestPosting(updated.account_number, interest, updated.balance))

            # Log only once every new balance is known to be storable
            for posting in postings:
                self.log.append(
                    posting.account_number, TransactionKind.INTEREST, posting.interest, posting.new_balance, now
                )

            self.store.rewrite_all(accounts)

        logger.info("Applied %s%% interest to %s savings accounts", rate, len(postings))
        return postings
