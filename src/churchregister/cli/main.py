"""Main CLI entry point."""

import click
from churchregister.database.factories import create_sqlite_database
from churchregister.cli.logging_config import LOG_LEVELS, setup_logging

# Import and register all commands at module level
from churchregister.cli.commands import (
    upload,
    member,
    contribution,
    transactions,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides CHURCHREGISTER_DB_PATH environment variable)",
    envvar="CHURCHREGISTER_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="CHURCHREGISTER_LOG_LEVEL",
    help="Minimum level of log messages written to stderr",
)
@click.option("--log-json", is_flag=True, help="Write log messages as JSON lines")
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str, log_json: bool):
    """Church register - bank statement reconciliation.

    Import bank statement exports, match credits to members by their bank
    reference, and record the resulting contributions.
    """
    ctx.ensure_object(dict)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        setup_logging(level=log_level, json_output=log_json)
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
upload.register_commands(cli)
member.register_commands(cli)
contribution.register_commands(cli)
transactions.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
