"""Storage factory functions."""

from bankledger.config import LedgerConfig
from bankledger.database.flatfile import FlatFileRecordStore
from bankledger.database.txlog import TextFileTransactionLog


def create_record_store(config: LedgerConfig) -> FlatFileRecordStore:
    """Create the record store for the configured data directory."""
    return FlatFileRecordStore(config.accounts_path)


def create_transaction_log(config: LedgerConfig) -> TextFileTransactionLog:
    """Create the transaction log for the configured data directory."""
    return TextFileTransactionLog(config.transactions_path)
