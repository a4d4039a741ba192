"""Account management commands."""

import click

from bankledger.cli.error_handling import handle_domain_error, parse_amount_or_exit
from bankledger.domain.account import SORT_KEYS, AccountService
from bankledger.domain.errors import DomainError


def _service(ctx) -> AccountService:
    return AccountService(ctx.obj["store"], ctx.obj["log"])


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="HOLDER_NAME")
@click.option("--type", "account_type", required=True, help="Account type: Savings or Current")
@click.option("--initial", default="0", show_default=True, help="Initial deposit amount")
@click.option("--phone", default="", help="Phone number")
@click.option("--address", default="", help="Address")
@click.pass_context
def create_account(ctx, name: str, account_type: str, initial: str, phone: str, address: str):
    """Create a new account.

    The account number is assigned automatically.

    Examples:
        bankledger account create "Jane Doe" --type savings --initial 500
        bankledger account create "Acme Ltd" --type Current --phone 555-0100
    """
    service = _service(ctx)
    initial_balance = parse_amount_or_exit(ctx, initial)

    try:
        acc = service.create_account(
            holder_name=name,
            account_type=account_type,
            initial_balance=initial_balance,
            phone=phone,
            address=address,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Account created successfully. Account No: {acc.account_number}")


@account_group.command("show")
@click.argument("account_number", type=int)
@click.pass_context
def show_account(ctx, account_number: int):
    """Show account details and its first ten transactions."""
    service = _service(ctx)

    try:
        acc = service.get_account(account_number)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not acc.active:
        click.echo(f"Account {account_number} is closed.")
        return

    click.echo(f"\nAccount No: {acc.account_number}")
    click.echo(f"Name: {acc.holder_name}")
    click.echo(f"Type: {acc.account_type.value}")
    click.echo(f"Balance: {acc.balance:.2f}")
    click.echo(f"Phone: {acc.phone}")
    click.echo(f"Address: {acc.address}")

    entries = service.recent_transactions(account_number)
    if not entries:
        click.echo("\nNo transactions found for this account.")
        return

    click.echo("\nTransactions (oldest first):")
    for entry in entries:
        click.echo(
            f"  {entry.timestamp:%Y-%m-%d %H:%M:%S}  {entry.kind.value:<12} "
            f"{entry.amount:>12.2f}  balance {entry.resulting_balance:.2f}"
        )


@account_group.command("list")
@click.option(
    "--sort",
    "sort_by",
    type=click.Choice(list(SORT_KEYS)),
    default="number",
    show_default=True,
    help="Sort order",
)
@click.option("--all", "include_closed", is_flag=True, help="Include closed accounts")
@click.pass_context
def list_accounts(ctx, sort_by: str, include_closed: bool):
    """List accounts."""
    service = _service(ctx)

    try:
        accounts = service.list_accounts(sort_by=sort_by, include_closed=include_closed)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 70)
    for acc in accounts:
        status = "" if acc.active else " | closed"
        click.echo(
            f"{acc.account_number} | {acc.holder_name:20s} | {acc.account_type.value:7s} | "
            f"{acc.balance:>12.2f}{status}"
        )


@account_group.command("deposit")
@click.argument("account_number", type=int)
@click.argument("amount")
@click.pass_context
def deposit(ctx, account_number: int, amount: str):
    """Deposit AMOUNT into an account."""
    service = _service(ctx)
    value = parse_amount_or_exit(ctx, amount)

    try:
        acc = service.deposit(account_number, value)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deposit successful. New balance: {acc.balance:.2f}")


@account_group.command("withdraw")
@click.argument("account_number", type=int)
@click.argument("amount")
@click.pass_context
def withdraw(ctx, account_number: int, amount: str):
    """Withdraw AMOUNT from an account.

    Savings accounts cannot be overdrawn.
    """
    service = _service(ctx)
    value = parse_amount_or_exit(ctx, amount)

    try:
        acc = service.withdraw(account_number, value)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Withdrawal successful. New balance: {acc.balance:.2f}")


@account_group.command("modify")
@click.argument("account_number", type=int)
@click.option("--phone", help="New phone number")
@click.option("--address", help="New address")
@click.option("--type", "account_type", help="New account type: Savings or Current")
@click.pass_context
def modify_account(ctx, account_number: int, phone: str | None, address: str | None, account_type: str | None):
    """Modify contact details or type of an account.

    Options left out keep their current value. An invalid type is reported
    and skipped; the other changes are still saved.

    Examples:
        bankledger account modify 1001 --phone 555-0199
        bankledger account modify 1001 --address "1 Main St" --type current
    """
    service = _service(ctx)

    try:
        result = service.modify_account(
            account_number, phone=phone, address=address, account_type=account_type
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    for warning in result.warnings:
        click.echo(f"Warning: {warning}", err=True)
    click.echo("Account modified successfully.")


@account_group.command("close")
@click.argument("account_number", type=int)
@click.option("--yes", is_flag=True, help="Close without asking for confirmation")
@click.pass_context
def close_account(ctx, account_number: int, yes: bool):
    """Close an account.

    Closed accounts keep their record and history but accept no further
    transactions. Closing cannot be undone.
    """
    service = _service(ctx)

    try:
        acc = service.get_account(account_number)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if acc.active and not yes:
        if not click.confirm(f"Are you sure you want to close account {account_number}?"):
            click.echo("Operation cancelled.")
            return

    try:
        service.close_account(account_number, confirm=True)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo("Account closed successfully.")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
