"""Backup and restore commands."""

import click

from bankledger.cli.error_handling import handle_domain_error
from bankledger.domain.backup import BackupService
from bankledger.domain.errors import DomainError


def _service(ctx) -> BackupService:
    return BackupService(ctx.obj["store"], ctx.obj["config"].backup_path)


@click.command("backup")
@click.pass_context
def backup_data(ctx):
    """Copy the account file to the backup file."""
    try:
        path = _service(ctx).backup()
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Backup created: {path}")


@click.command("restore")
@click.option("--yes", is_flag=True, help="Restore without asking for confirmation")
@click.pass_context
def restore_data(ctx, yes: bool):
    """Replace the account file with the backup.

    Changes made since the last backup are lost. The transaction log is
    not touched.
    """
    if not yes and not click.confirm("Overwrite current accounts with the backup?"):
        click.echo("Operation cancelled.")
        return

    try:
        _service(ctx).restore()
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo("Data restored from backup.")


def register_commands(cli):
    """Register backup commands with main CLI."""
    cli.add_command(backup_data)
    cli.add_command(restore_data)
