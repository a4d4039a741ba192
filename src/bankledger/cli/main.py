"""Main CLI entry point."""

import click

from bankledger.config import load_config
from bankledger.database.factories import create_record_store, create_transaction_log
from bankledger.domain.auth import EnvCredentialProvider, authenticate
from bankledger.logging_config import setup_logging

# Import and register all commands at module level
from bankledger.cli.commands import (
    account,
    transfer,
    interest,
    export_cmd,
    backup,
    history,
)


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False),
    help="Directory holding the ledger files (overrides BANKLEDGER_DATA_DIR environment variable)",
    envvar="BANKLEDGER_DATA_DIR",
)
@click.option("--user", help="Admin user name", envvar="BANKLEDGER_USER")
@click.option("--password", help="Admin password", envvar="BANKLEDGER_PASSWORD")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Log level (overrides BANKLEDGER_LOG_LEVEL environment variable)",
)
@click.pass_context
def cli(ctx, data_dir: str | None, user: str | None, password: str | None, log_level: str | None):
    """Bankledger - account ledger administration.

    Maintains savings and current accounts in a flat record file with an
    append-only transaction log. Every command requires the admin login.
    """
    ctx.ensure_object(dict)

    # Only log in and open storage when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is None:
        return

    config = load_config(data_dir=data_dir, log_level=log_level)
    setup_logging(config.log_level)

    if user is None:
        user = click.prompt("User")
    if password is None:
        password = click.prompt("Password", hide_input=True)

    provider = ctx.obj.get("credentials") or EnvCredentialProvider()
    if not authenticate(provider, user, password):
        click.echo("Authentication failed.", err=True)
        ctx.exit(1)

    ctx.obj["config"] = config
    ctx.obj["store"] = create_record_store(config)
    ctx.obj["log"] = create_transaction_log(config)


# Register all commands
account.register_commands(cli)
transfer.register_commands(cli)
interest.register_commands(cli)
export_cmd.register_commands(cli)
backup.register_commands(cli)
history.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
