"""CSV export of the record store."""

import csv
from pathlib import Path

from bankledger.database.base import RecordStore
from bankledger.domain.errors import StoreUnavailableError

EXPORT_HEADER = [
    "account_number",
    "holder_name",
    "account_type",
    "balance",
    "phone",
    "address",
    "active",
]


class ExportService:
    """Service for exporting account records."""

    def __init__(self, store: RecordStore):
        """Initialize export service.

        Args:
            store: Record store to read from
        """
        self.store = store

    def export_csv(self, output_path: str | Path) -> int:
        """Write every record, closed ones included, to a CSV file.

        Args:
            output_path: Destination CSV file, overwritten if present

        Returns:
            Number of rows written

        Raises:
            StoreUnavailableError: If the CSV file cannot be written
        """
        total = self.store.count()
        try:
            with open(output_path, "w", newline="", encoding="utf-8") as f:
                writer = csv.writer(f)
                writer.writerow(EXPORT_HEADER)
                for position in range(total):
                    acc = self.store.read_at(position)
                    writer.writerow(
                        [
                            acc.account_number,
                            acc.holder_name,
                            acc.account_type.value,
                            f"{acc.balance:.2f}",
                            acc.phone,
                            acc.address,
                            1 if acc.active else 0,
                        ]
                    )
        except OSError as e:
            raise StoreUnavailableError(f"Failed to create CSV {output_path}: {e}") from e
        return total
