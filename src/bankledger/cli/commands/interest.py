"""Interest posting command."""

import click

from bankledger.cli.error_handling import handle_domain_error, parse_amount_or_exit
from bankledger.domain.errors import DomainError
from bankledger.domain.interest import InterestService


@click.command("interest")
@click.argument("rate")
@click.pass_context
def apply_interest(ctx, rate: str):
    """Apply one month of interest at annual RATE percent to savings accounts.

    Examples:
        bankledger interest 4.5
    """
    service = InterestService(ctx.obj["store"], ctx.obj["log"])
    rate_percent = parse_amount_or_exit(ctx, rate)

    try:
        postings = service.apply_interest(rate_percent)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not postings:
        click.echo("No savings accounts to update.")
        return

    for posting in postings:
        click.echo(
            f"{posting.account_number}: +{posting.interest:.2f} -> {posting.new_balance:.2f}"
        )
    click.echo(f"Interest applied (monthly) to {len(postings)} savings account(s).")


def register_commands(cli):
    """Register interest command with main CLI."""
    cli.add_command(apply_interest)
