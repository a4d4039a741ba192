"""Whole-file backup and restore of the record store."""

import logging
import shutil
from pathlib import Path

from bankledger.database.flatfile import FlatFileRecordStore
from bankledger.domain.errors import NotFoundError, StoreUnavailableError

logger = logging.getLogger(__name__)


class BackupService:
    """Byte-for-byte copies of the record file to and from a backup file.

    Copies hold the store lock so no mutation runs while they happen; there
    is no atomicity beyond that.
    """

    def __init__(self, store: FlatFileRecordStore, backup_path: str | Path):
        """Initialize backup service.

        Args:
            store: Record store whose file is copied
            backup_path: Location of the backup file
        """
        self.store = store
        self.backup_path = Path(backup_path)

    def _copy(self, source: Path, destination: Path) -> None:
        try:
            shutil.copyfile(source, destination)
        except OSError as e:
            raise StoreUnavailableError(f"Failed to copy {source} to {destination}: {e}") from e

    def backup(self) -> Path:
        """Copy the record file to the backup location.

        Raises:
            NotFoundError: If there is no record file yet
            StoreUnavailableError: If the copy fails
        """
        with self.store.lock:
            if not self.store.path.exists():
                raise NotFoundError("No data file to back up")
            self._copy(self.store.path, self.backup_path)
        logger.info("Backup created: %s", self.backup_path)
        return self.backup_path

    def restore(self) -> Path:
        """Replace the record file with the backup.

        Raises:
            NotFoundError: If there is no backup file
            StoreUnavailableError: If the copy fails
        """
        with self.store.lock:
            if not self.backup_path.exists():
                raise NotFoundError(f"No backup file found at {self.backup_path}")
            self._copy(self.backup_path, self.store.path)
        logger.info("Data restored from %s", self.backup_path)
        return self.store.path
