"""Text-file transaction log implementation."""

import logging
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Iterator, Optional

from bankledger.database.base import TransactionLog
from bankledger.domain.entities import TransactionEntry, TransactionKind

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_entry(
    account_number: int,
    kind: TransactionKind,
    amount: Decimal,
    resulting_balance: Decimal,
    timestamp: datetime,
) -> str:
    """Render one log line, without the trailing newline."""
    return (
        f"{account_number}, {TransactionKind(kind).value}, {amount:.2f}, "
        f"{resulting_balance:.2f}, {timestamp.strftime(TIMESTAMP_FORMAT)}"
    )


def parse_entry(line: str) -> TransactionEntry:
    """Parse one log line.

    Raises:
        ValueError: If the line is not a well-formed entry
    """
    parts = [part.strip() for part in line.strip().split(",")]
    if len(parts) != 5:
        raise ValueError(f"Expected 5 fields, got {len(parts)}")
    number, kind, amount, balance, stamp = parts
    try:
        return TransactionEntry(
            account_number=int(number),
            kind=TransactionKind(kind),
            amount=Decimal(amount),
            resulting_balance=Decimal(balance),
            timestamp=datetime.strptime(stamp, TIMESTAMP_FORMAT),
        )
    except InvalidOperation as e:
        raise ValueError(f"Invalid amount in log line: {e}") from e


class TextFileTransactionLog(TransactionLog):
    """Newline-delimited, comma-separated event stream.

    Appends are best effort: a log that cannot be written is reported through
    ``logging`` and the triggering operation carries on.
    """

    def __init__(self, path: str | Path):
        """Initialize the transaction log.

        Args:
            path: Path to the log file. It is created on first append.
        """
        self.path = Path(path)

    def append(
        self,
        account_number: int,
        kind: TransactionKind,
        amount: Decimal,
        resulting_balance: Decimal,
        timestamp: datetime,
    ) -> None:
        """Append one entry; failures are logged and swallowed."""
        line = format_entry(account_number, kind, amount, resulting_balance, timestamp)
        try:
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(line + "\n")
        except OSError as e:
            logger.warning("Dropped transaction log entry '%s': %s", line, e)

    def _entries(self, account_number: int) -> Iterator[TransactionEntry]:
        try:
            f = open(self.path, "r", encoding="utf-8")
        except FileNotFoundError:
            return
        with f:
            for line_number, line in enumerate(f, start=1):
                # Cheap prefix check before parsing the whole line
                head = line.split(",", 1)[0].strip()
                if not head.isdigit() or int(head) != account_number:
                    continue
                try:
                    yield parse_entry(line)
                except ValueError as e:
                    logger.debug("Skipping log line %s: %s", line_number, e)

    def recent_for(self, account_number: int, limit: int) -> list[TransactionEntry]:
        """Return the first ``limit`` entries for the account in file order.

        The scan runs forward from the start of the log and stops at the
        limit, so the earliest matches are returned.
        """
        entries: list[TransactionEntry] = []
        if limit <= 0:
            return entries
        for entry in self._entries(account_number):
            entries.append(entry)
            if len(entries) >= limit:
                break
        return entries

    def entries_for(
        self,
        account_number: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[TransactionEntry]:
        """Return every entry for the account within optional inclusive dates."""
        entries = []
        for entry in self._entries(account_number):
            day = entry.timestamp.date()
            if start_date is not None and day < start_date:
                continue
            if end_date is not None and day > end_date:
                continue
            entries.append(entry)
        return entries
