"""Transaction history command."""

import click

from bankledger.cli.error_handling import handle_domain_error
from bankledger.domain.account import AccountService
from bankledger.domain.errors import DomainError
from bankledger.utils.date_parser import parse_date


@click.command("history")
@click.argument("account_number", type=int)
@click.option("--since", help="Start date (YYYY-MM-DD or relative like 'this month')")
@click.option("--until", help="End date (YYYY-MM-DD or relative like 'yesterday')")
@click.pass_context
def show_history(ctx, account_number: int, since: str | None, until: str | None):
    """Show the full transaction history of an account."""
    start = None
    if since:
        try:
            start = parse_date(since)
        except ValueError as e:
            click.echo(f"Error: Invalid start date: {e}", err=True)
            ctx.exit(1)

    end = None
    if until:
        try:
            end = parse_date(until)
        except ValueError as e:
            click.echo(f"Error: Invalid end date: {e}", err=True)
            ctx.exit(1)

    service = AccountService(ctx.obj["store"], ctx.obj["log"])
    try:
        service.get_account(account_number)
    except DomainError as e:
        handle_domain_error(ctx, e)

    entries = service.log.entries_for(account_number, start_date=start, end_date=end)
    if not entries:
        click.echo("No transactions found.")
        return

    click.echo(f"\nFound {len(entries)} transaction(s) for account {account_number}:")
    click.echo("-" * 70)
    click.echo(f"{'Timestamp':<20} {'Kind':<13} {'Amount':>12} {'Balance':>12}")
    click.echo("-" * 70)
    for entry in entries:
        click.echo(
            f"{entry.timestamp:%Y-%m-%d %H:%M:%S}  {entry.kind.value:<13} "
            f"{entry.amount:>12.2f} {entry.resulting_balance:>12.2f}"
        )


def register_commands(cli):
    """Register history command with main CLI."""
    cli.add_command(show_history)
