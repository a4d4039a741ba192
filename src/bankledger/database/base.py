"""Abstract storage interfaces."""

from abc import ABC, abstractmethod
from datetime import date, datetime
from decimal import Decimal
from typing import Iterator, Optional

from bankledger.domain.entities import Account, TransactionEntry, TransactionKind


class RecordStore(ABC):
    """Position-addressed store of fixed-size account records.

    Implementations expose ``lock``, a re-entrant lock that every mutating
    operation must hold for its whole read-validate-write cycle.
    """

    @abstractmethod
    def append(self, account: Account) -> int:
        """Append a record. Returns its position."""
        pass

    @abstractmethod
    def read_at(self, position: int) -> Account:
        """Read the record at position."""
        pass

    @abstractmethod
    def write_at(self, position: int, account: Account) -> None:
        """Overwrite the record at position in place."""
        pass

    @abstractmethod
    def count(self) -> int:
        """Number of records stored, including closed accounts."""
        pass

    @abstractmethod
    def scan(self) -> Iterator[tuple[int, Account]]:
        """Yield (position, account) for every record in store order."""
        pass

    @abstractmethod
    def read_all(self) -> list[Account]:
        """Load every record in store order."""
        pass

    @abstractmethod
    def rewrite_all(self, accounts: list[Account]) -> None:
        """Rewrite the whole store in one pass."""
        pass


class TransactionLog(ABC):
    """Append-only history of account events."""

    @abstractmethod
    def append(
        self,
        account_number: int,
        kind: TransactionKind,
        amount: Decimal,
        resulting_balance: Decimal,
        timestamp: datetime,
    ) -> None:
        """Append one entry. Failures must not propagate."""
        pass

    @abstractmethod
    def recent_for(self, account_number: int, limit: int) -> list[TransactionEntry]:
        """Return the first ``limit`` entries for an account, scanning forward."""
        pass

    @abstractmethod
    def entries_for(
        self,
        account_number: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[TransactionEntry]:
        """Return every entry for an account within optional inclusive dates."""
        pass
