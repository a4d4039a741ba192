"""Fund transfer command."""

import click

from bankledger.cli.error_handling import handle_domain_error, parse_amount_or_exit
from bankledger.domain.errors import DomainError, PartialTransferFailure
from bankledger.domain.transfer import TransferService


@click.command("transfer")
@click.argument("from_account", type=int)
@click.argument("to_account", type=int)
@click.argument("amount")
@click.pass_context
def transfer_funds(ctx, from_account: int, to_account: int, amount: str):
    """Transfer AMOUNT from FROM_ACCOUNT to TO_ACCOUNT.

    Examples:
        bankledger transfer 1001 1002 250.00
    """
    service = TransferService(ctx.obj["store"], ctx.obj["log"])
    value = parse_amount_or_exit(ctx, amount)

    try:
        result = service.transfer(from_account, to_account, value)
    except PartialTransferFailure as e:
        click.echo(f"Error: {e}", err=True)
        click.echo(
            f"Account {e.from_number} was debited but {e.to_number} was not credited. "
            "Restore from backup or correct the balances by hand.",
            err=True,
        )
        ctx.exit(2)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(
        f"Transfer successful. New balances: "
        f"{result.source.account_number} -> {result.source.balance:.2f}, "
        f"{result.destination.account_number} -> {result.destination.balance:.2f}"
    )


def register_commands(cli):
    """Register transfer command with main CLI."""
    cli.add_command(transfer_funds)
