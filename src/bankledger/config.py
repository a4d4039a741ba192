"""Runtime configuration resolved from arguments and environment variables."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DATA_DIR_ENV = "BANKLEDGER_DATA_DIR"
LOG_LEVEL_ENV = "BANKLEDGER_LOG_LEVEL"


@dataclass(frozen=True)
class LedgerConfig:
    """Locations of the ledger files and ambient settings."""

    data_dir: Path
    accounts_file: str = "accounts.dat"
    transactions_file: str = "transactions.txt"
    backup_file: str = "accounts.bak"
    export_file: str = "accounts_export.csv"
    log_level: str = "WARNING"

    @property
    def accounts_path(self) -> Path:
        return self.data_dir / self.accounts_file

    @property
    def transactions_path(self) -> Path:
        return self.data_dir / self.transactions_file

    @property
    def backup_path(self) -> Path:
        return self.data_dir / self.backup_file

    @property
    def export_path(self) -> Path:
        return self.data_dir / self.export_file


def load_config(data_dir: Optional[str] = None, log_level: Optional[str] = None) -> LedgerConfig:
    """Build the ledger configuration.

    Args:
        data_dir: Directory holding the ledger files. If None, checks
            BANKLEDGER_DATA_DIR environment variable, then defaults to
            ~/.bankledger
        log_level: Log level name. If None, checks BANKLEDGER_LOG_LEVEL,
            then defaults to WARNING

    Returns:
        LedgerConfig with the data directory created
    """
    if data_dir is None:
        data_dir = os.environ.get(DATA_DIR_ENV)

    if data_dir is None:
        path = Path.home() / ".bankledger"
    else:
        path = Path(data_dir)
    path.mkdir(parents=True, exist_ok=True)

    if log_level is None:
        log_level = os.environ.get(LOG_LEVEL_ENV, "WARNING")

    return LedgerConfig(data_dir=path, log_level=log_level.upper())
