"""Main CLI entry point."""

import click
from ledgerbook.database.factories import create_database
from ledgerbook.domain.errors import DomainError
from ledgerbook.logging_config import configure_logging

# Import and register all commands at module level
from ledgerbook.cli.commands import account, report, transaction
from ledgerbook.cli.error_handling import handle_domain_error


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to SQLite database file (overrides LEDGERBOOK_DB_PATH environment variable)",
    envvar="LEDGERBOOK_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Log verbosity for diagnostic output on stderr",
    envvar="LEDGERBOOK_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str | None):
    """Ledgerbook - double-entry bookkeeping.

    Keep a chart of accounts, record balanced transactions and produce a
    journal, balance sheet and income statement.
    """
    ctx.ensure_object(dict)

    if log_level is not None:
        configure_logging(log_level)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        try:
            db = create_database(database_path=db_path)
            db.connect()
            db.initialize_schema()
        except DomainError as e:
            handle_domain_error(ctx, e)
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
transaction.register_commands(cli)
report.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
