"""Tests for transfers between accounts."""

from decimal import Decimal

import pytest

from bankledger.domain.errors import (
    AccountClosedError,
    AccountNotFoundError,
    InsufficientFundsError,
    InvalidAmountError,
    PartialTransferFailure,
    SameAccountTransferError,
    StoreUnavailableError,
)

from conftest import read_log_lines


def fail_write_at_call(monkeypatch, store, failing_call: int):
    """Make the nth write_at call on the store raise StoreUnavailableError."""
    original = store.write_at
    calls = {"n": 0}

    def write_at(position, account):
        calls["n"] += 1
        if calls["n"] == failing_call:
            raise StoreUnavailableError("disk full")
        original(position, account)

    monkeypatch.setattr(store, "write_at", write_at)


def test_transfer_savings_to_current(transfer_service, account_service, current_account, config):
    result = transfer_service.transfer(1001, 1002, Decimal("30"))

    assert result.source.balance == Decimal("70.00")
    assert result.destination.balance == Decimal("80.00")
    assert account_service.get_account(1001).balance == Decimal("70.00")
    assert account_service.get_account(1002).balance == Decimal("80.00")
    assert read_log_lines(config)[-2:] == [
        "1001, TRANSFER_OUT, 30.00, 70.00, 2024-03-15 09:30:00",
        "1002, TRANSFER_IN, 30.00, 80.00, 2024-03-15 09:30:00",
    ]


def test_current_source_may_go_negative(transfer_service, current_account):
    result = transfer_service.transfer(1002, 1001, Decimal("75"))

    assert result.source.balance == Decimal("-25.00")
    assert result.destination.balance == Decimal("175.00")


def test_savings_source_floor(transfer_service, account_service, current_account, config):
    lines_before = read_log_lines(config)

    with pytest.raises(InsufficientFundsError):
        transfer_service.transfer(1001, 1002, Decimal("100.01"))

    assert account_service.get_account(1001).balance == Decimal("100.00")
    assert account_service.get_account(1002).balance == Decimal("50.00")
    assert read_log_lines(config) == lines_before


def test_transfer_to_same_account(transfer_service, savings_account):
    with pytest.raises(SameAccountTransferError):
        transfer_service.transfer(1001, 1001, Decimal("1"))


@pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-10")])
def test_transfer_invalid_amount(transfer_service, current_account, amount):
    with pytest.raises(InvalidAmountError):
        transfer_service.transfer(1001, 1002, amount)


def test_transfer_unknown_destination(transfer_service, savings_account):
    with pytest.raises(AccountNotFoundError):
        transfer_service.transfer(1001, 2000, Decimal("1"))


def test_transfer_closed_destination(transfer_service, account_service, current_account):
    account_service.close_account(1002, confirm=True)

    with pytest.raises(AccountClosedError):
        transfer_service.transfer(1001, 1002, Decimal("1"))
    assert account_service.get_account(1001).balance == Decimal("100.00")


def test_source_write_failure_changes_nothing(
    transfer_service, account_service, current_account, store, config, monkeypatch
):
    lines_before = read_log_lines(config)
    fail_write_at_call(monkeypatch, store, 1)

    with pytest.raises(StoreUnavailableError):
        transfer_service.transfer(1001, 1002, Decimal("30"))

    assert account_service.get_account(1001).balance == Decimal("100.00")
    assert account_service.get_account(1002).balance == Decimal("50.00")
    assert read_log_lines(config) == lines_before


def test_destination_write_failure_leaves_debit(
    transfer_service, account_service, current_account, store, config, monkeypatch
):
    lines_before = read_log_lines(config)
    fail_write_at_call(monkeypatch, store, 2)

    with pytest.raises(PartialTransferFailure) as excinfo:
        transfer_service.transfer(1001, 1002, Decimal("30"))

    assert excinfo.value.from_number == 1001
    assert excinfo.value.to_number == 1002
    assert excinfo.value.amount == Decimal("30.00")
    assert account_service.get_account(1001).balance == Decimal("70.00")
    assert account_service.get_account(1002).balance == Decimal("50.00")
    assert read_log_lines(config) == lines_before


def test_transfer_rejects_destination_overflow(transfer_service, account_service, config):
    account_service.create_account("Source", "Current", Decimal("0"))
    big = account_service.create_account("Whale", "Current", Decimal("92233720368547758"))
    lines_before = read_log_lines(config)

    with pytest.raises(InvalidAmountError):
        transfer_service.transfer(1001, big.account_number, Decimal("1"))

    assert account_service.get_account(1001).balance == Decimal("0.00")
    assert account_service.get_account(big.account_number) == big
    assert read_log_lines(config) == lines_before
