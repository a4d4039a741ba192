"""Flat-file record store implementation."""

import logging
import os
import threading
from pathlib import Path
from typing import Iterator

from bankledger.database.base import RecordStore
from bankledger.database.codec import RECORD_SIZE, decode_account, encode_account
from bankledger.domain.entities import Account
from bankledger.domain.errors import RecordNotFoundError, StoreUnavailableError

logger = logging.getLogger(__name__)


class FlatFileRecordStore(RecordStore):
    """Array of fixed-size records in a single binary file.

    Position ``p`` lives at byte offset ``p * RECORD_SIZE``. Every call opens
    and closes the file and syncs writes before returning.
    """

    def __init__(self, path: str | Path):
        """Initialize the record store.

        Args:
            path: Path to the record file. It is created on first append.
        """
        self.path = Path(path)
        self.lock = threading.RLock()

    def _sync(self, f) -> None:
        f.flush()
        os.fsync(f.fileno())

    def append(self, account: Account) -> int:
        """Append a record after the last whole record. Returns the new position.

        A trailing partial record left by an interrupted write is overwritten
        and cut off, so the new record always starts at a record boundary.
        """
        data = encode_account(account)
        with self.lock:
            position = self.count()
            mode = "r+b" if self.path.exists() else "wb"
            try:
                with open(self.path, mode) as f:
                    f.seek(position * RECORD_SIZE)
                    f.write(data)
                    f.truncate()
                    self._sync(f)
            except OSError as e:
                raise StoreUnavailableError(f"Cannot append to {self.path}: {e}") from e
        logger.debug("Appended account %s at position %s", account.account_number, position)
        return position

    def read_at(self, position: int) -> Account:
        """Read the record at position.

        Raises:
            RecordNotFoundError: If position is outside the file or the file is absent
        """
        if position < 0:
            raise RecordNotFoundError(position)
        try:
            with open(self.path, "rb") as f:
                f.seek(position * RECORD_SIZE)
                data = f.read(RECORD_SIZE)
        except FileNotFoundError:
            raise RecordNotFoundError(position)
        except OSError as e:
            raise StoreUnavailableError(f"Cannot read {self.path}: {e}") from e
        if len(data) < RECORD_SIZE:
            raise RecordNotFoundError(position)
        return decode_account(data)

    def write_at(self, position: int, account: Account) -> None:
        """Overwrite exactly one record slot.

        Raises:
            StoreUnavailableError: If the file cannot be written or the slot does not exist
        """
        if position < 0 or position >= self.count():
            raise StoreUnavailableError(f"Cannot write position {position} in {self.path}")
        data = encode_account(account)
        try:
            with open(self.path, "r+b") as f:
                f.seek(position * RECORD_SIZE)
                f.write(data)
                self._sync(f)
        except OSError as e:
            raise StoreUnavailableError(f"Cannot write {self.path}: {e}") from e

    def count(self) -> int:
        """Number of whole records in the file; 0 if it does not exist."""
        try:
            return self.path.stat().st_size // RECORD_SIZE
        except FileNotFoundError:
            return 0

    def scan(self) -> Iterator[tuple[int, Account]]:
        """Yield (position, account) pairs from the start of the file."""
        try:
            f = open(self.path, "rb")
        except FileNotFoundError:
            return
        except OSError as e:
            raise StoreUnavailableError(f"Cannot read {self.path}: {e}") from e
        with f:
            position = 0
            while True:
                data = f.read(RECORD_SIZE)
                if len(data) < RECORD_SIZE:
                    break
                yield position, decode_account(data)
                position += 1

    def read_all(self) -> list[Account]:
        """Load every record."""
        return [account for _, account in self.scan()]

    def rewrite_all(self, accounts: list[Account]) -> None:
        """Rewrite the file from offset zero in one write.

        Raises:
            StoreUnavailableError: If the file does not exist or cannot be written
        """
        data = b"".join(encode_account(account) for account in accounts)
        try:
            with open(self.path, "r+b") as f:
                f.write(data)
                self._sync(f)
        except OSError as e:
            raise StoreUnavailableError(f"Cannot rewrite {self.path}: {e}") from e
        logger.debug("Rewrote %s records in %s", len(accounts), self.path)
