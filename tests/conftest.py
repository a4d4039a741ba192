"""Shared pytest fixtures for bankledger tests."""

import logging
from datetime import datetime
from decimal import Decimal

import pytest

from bankledger.config import load_config
from bankledger.database.factories import create_record_store, create_transaction_log
from bankledger.domain.account import AccountService
from bankledger.domain.interest import InterestService
from bankledger.domain.transfer import TransferService

FIXED_NOW = datetime(2024, 3, 15, 9, 30, 0)

ADMIN_USER = "admin"
ADMIN_PASSWORD = "s3cret"


def fixed_clock() -> datetime:
    return FIXED_NOW


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers the CLI installs so they do not leak between tests."""
    yield
    logger = logging.getLogger("bankledger")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def config(tmp_path):
    """Ledger configuration rooted in a temporary directory."""
    return load_config(data_dir=str(tmp_path / "ledger"))


@pytest.fixture
def store(config):
    """Empty flat-file record store."""
    return create_record_store(config)


@pytest.fixture
def txlog(config):
    """Empty transaction log."""
    return create_transaction_log(config)


@pytest.fixture
def account_service(store, txlog):
    """AccountService with a fixed clock."""
    return AccountService(store, txlog, clock=fixed_clock)


@pytest.fixture
def transfer_service(store, txlog):
    """TransferService with a fixed clock."""
    return TransferService(store, txlog, clock=fixed_clock)


@pytest.fixture
def interest_service(store, txlog):
    """InterestService with a fixed clock."""
    return InterestService(store, txlog, clock=fixed_clock)


@pytest.fixture
def savings_account(account_service):
    """Active savings account 1001 with balance 100.00."""
    return account_service.create_account(
        holder_name="Jane Doe",
        account_type="Savings",
        initial_balance=Decimal("100.00"),
        phone="555-0100",
        address="1 Main St",
    )


@pytest.fixture
def current_account(account_service, savings_account):
    """Active current account 1002 with balance 50.00."""
    return account_service.create_account(
        holder_name="Acme Ltd",
        account_type="current",
        initial_balance=Decimal("50.00"),
    )


@pytest.fixture
def admin_env(monkeypatch):
    """Configure admin credentials through the environment."""
    monkeypatch.setenv("BANKLEDGER_ADMIN_USER", ADMIN_USER)
    monkeypatch.setenv("BANKLEDGER_ADMIN_PASSWORD", ADMIN_PASSWORD)
    monkeypatch.delenv("BANKLEDGER_USER", raising=False)
    monkeypatch.delenv("BANKLEDGER_PASSWORD", raising=False)
    monkeypatch.delenv("BANKLEDGER_DATA_DIR", raising=False)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def run_cli(cli_runner, config, admin_env):
    """Invoke the CLI against the temporary data directory as admin."""
    from bankledger.cli.main import cli

    def invoke(*args, input=None):
        return cli_runner.invoke(
            cli,
            [
                "--data-dir",
                str(config.data_dir),
                "--user",
                ADMIN_USER,
                "--password",
                ADMIN_PASSWORD,
                *args,
            ],
            input=input,
        )

    return invoke


def read_log_lines(config) -> list[str]:
    """Return the raw lines of the transaction log."""
    if not config.transactions_path.exists():
        return []
    return config.transactions_path.read_text(encoding="utf-8").splitlines()
