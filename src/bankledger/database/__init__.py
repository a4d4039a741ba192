"""Storage layer for bankledger application."""

from bankledger.database.base import RecordStore, TransactionLog
from bankledger.database.factories import create_record_store, create_transaction_log

__all__ = [
    "RecordStore",
    "TransactionLog",
    "create_record_store",
    "create_transaction_log",
]
