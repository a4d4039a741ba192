"""CSV export command."""

import click

from bankledger.cli.error_handling import handle_domain_error
from bankledger.domain.errors import DomainError
from bankledger.domain.export import ExportService


@click.command("export")
@click.option("--output", type=click.Path(dir_okay=False), help="CSV file (defaults to accounts_export.csv in the data directory)")
@click.pass_context
def export_accounts(ctx, output: str | None):
    """Export all accounts, closed ones included, to CSV."""
    config = ctx.obj["config"]
    output_path = output or config.export_path

    try:
        rows = ExportService(ctx.obj["store"]).export_csv(output_path)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Exported {rows} account(s) to {output_path}")


def register_commands(cli):
    """Register export command with main CLI."""
    cli.add_command(export_accounts)
