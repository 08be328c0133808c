"""Main CLI entry point."""

import logging

import click
from basbook.database.factories import create_sqlite_database

# Import and register all commands at module level
from basbook.cli.commands import (
    import_cmd,
    job,
    provider,
    category,
    client,
    init_data,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides BASBOOK_DB_PATH environment variable)",
    envvar="BASBOOK_DB_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Log import progress to stderr")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Basbook - BAS bookkeeping for Australian sole traders.

    Import expenses and issued invoices from bank and spreadsheet CSV exports,
    matched against your providers and clients, with every import kept as a
    job that can be rolled back.
    """
    ctx.ensure_object(dict)

    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db


# Register all commands
import_cmd.register_commands(cli)
job.register_commands(cli)
provider.register_commands(cli)
category.register_commands(cli)
client.register_commands(cli)
init_data.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
