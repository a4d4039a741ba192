"""Account number lookup over the record store."""

from bankledger.database.base import RecordStore
from bankledger.domain.errors import AccountNotFoundError

FIRST_ACCOUNT_NUMBER = 1001


class AccountIndex:
    """Linear-scan index from account numbers to record positions."""

    def __init__(self, store: RecordStore):
        """Initialize account index.

        Args:
            store: Record store to scan
        """
        self.store = store

    def next_account_number(self) -> int:
        """Return one past the highest account number ever stored.

        Closed accounts still count, so numbers are never reused. An empty or
        missing store starts at 1001.
        """
        highest = FIRST_ACCOUNT_NUMBER - 1
        for _, account in self.store.scan():
            if account.account_number > highest:
                highest = account.account_number
        return highest + 1

    def find_position(self, account_number: int) -> int:
        """Return the position of the first record with the account number.

        Raises:
            AccountNotFoundError: If no record matches
        """
        for position, account in self.store.scan():
            if account.account_number == account_number:
                return position
        raise AccountNotFoundError(account_number)
