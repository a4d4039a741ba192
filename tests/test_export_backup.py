"""Tests for CSV export and backup/restore."""

import csv
from decimal import Decimal

import pytest

from bankledger.domain.backup import BackupService
from bankledger.domain.errors import NotFoundError
from bankledger.domain.export import EXPORT_HEADER, ExportService


class TestExportService:
    """Tests for CSV export."""

    def test_export_includes_closed_accounts(self, store, account_service, current_account, tmp_path):
        account_service.close_account(1001, confirm=True)
        output = tmp_path / "out.csv"

        rows = ExportService(store).export_csv(output)

        assert rows == 2
        with open(output, newline="") as f:
            records = list(csv.reader(f))
        assert records[0] == EXPORT_HEADER
        assert records[1] == ["1001", "Jane Doe", "Savings", "100.00", "555-0100", "1 Main St", "0"]
        assert records[2] == ["1002", "Acme Ltd", "Current", "50.00", "", "", "1"]

    def test_export_quotes_commas(self, store, account_service, tmp_path):
        account_service.create_account("Doe, Jane", "Savings", Decimal("1"), address="1 Main St, Apt 2")
        output = tmp_path / "out.csv"

        ExportService(store).export_csv(output)

        with open(output, newline="") as f:
            records = list(csv.DictReader(f))
        assert records[0]["holder_name"] == "Doe, Jane"
        assert records[0]["address"] == "1 Main St, Apt 2"

    def test_export_empty_store_writes_header_only(self, store, tmp_path):
        output = tmp_path / "out.csv"

        assert ExportService(store).export_csv(output) == 0
        assert output.read_text().strip() == ",".join(EXPORT_HEADER)


class TestBackupService:
    """Tests for whole-file backup and restore."""

    def test_backup_then_restore_is_byte_identical(self, store, config, account_service, current_account):
        original = store.path.read_bytes()
        service = BackupService(store, config.backup_path)

        service.backup()
        service.restore()

        assert store.path.read_bytes() == original
        assert config.backup_path.read_bytes() == original

    def test_restore_discards_later_changes(self, store, config, account_service, savings_account):
        service = BackupService(store, config.backup_path)
        service.backup()
        account_service.deposit(1001, Decimal("900"))

        service.restore()

        assert account_service.get_account(1001).balance == Decimal("100.00")

    def test_backup_without_data_file(self, store, config):
        with pytest.raises(NotFoundError):
            BackupService(store, config.backup_path).backup()

    def test_restore_without_backup(self, store, config, savings_account):
        with pytest.raises(NotFoundError, match="No backup file"):
            BackupService(store, config.backup_path).restore()
