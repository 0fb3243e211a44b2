"""Main CLI entry point."""

import logging

import click

from flockledger.cli.logging_setup import LOG_LEVELS, configure_logging
from flockledger.database.factories import create_sqlite_store
from flockledger.domain.book import Book
from flockledger.domain.errors import StorageError

# Import and register all commands at module level
from flockledger.cli.commands import (
    customer,
    farm,
    account,
    sale,
    receipt,
    voucher,
    report,
    data,
)

logger = logging.getLogger(__name__)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides FLOCKLEDGER_DB_PATH environment variable)",
    envvar="FLOCKLEDGER_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="FLOCKLEDGER_LOG_LEVEL",
    help="Logging level",
)
@click.option(
    "--strict-references",
    is_flag=True,
    envvar="FLOCKLEDGER_STRICT_REFERENCES",
    help="Refuse to edit sales or receipts whose customer or farm is missing",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str, strict_references: bool):
    """Flockledger - Poultry trading bookkeeping.

    Record customers, farms, sales and receipts; vouchers are kept in step
    automatically, and reports cover sales, customer ledgers, farm stock
    and receivables aging.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)

    # Open the book only when actually running a command (not when showing help)
    if ctx.invoked_subcommand is not None:
        store = create_sqlite_store(database_path=db_path)
        store.connect()
        ctx.call_on_close(store.disconnect)
        try:
            store.initialize_schema()
        except StorageError as e:
            logger.error("%s; working in memory only", e)
            store = None
        ctx.obj["book"] = Book(store=store, strict_references=strict_references)


# Register all commands
customer.register_commands(cli)
farm.register_commands(cli)
account.register_commands(cli)
sale.register_commands(cli)
receipt.register_commands(cli)
voucher.register_commands(cli)
report.register_commands(cli)
data.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
