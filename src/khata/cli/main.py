"""Main CLI entry point."""

import logging

import click
from khata.database.factories import create_sqlite_database

# Import and register all commands at module level
from khata.cli.commands import client, job, payment, summary

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides KHATA_DB_PATH environment variable)",
    envvar="KHATA_DB_PATH",
)
@click.option(
    "--user-id",
    help="ID of the acting user, stored on created records",
    envvar="KHATA_USER_ID",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="KHATA_LOG_LEVEL",
    help="Logging verbosity",
)
@click.pass_context
def cli(ctx, db_path: str | None, user_id: str | None, log_level: str):
    """Khata - client, job and payment ledger.

    Track jobs for your clients through Pending, Ongoing, Delivered and Paid,
    and record partial or full payments against them.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["user_id"] = user_id
        ctx.call_on_close(db.disconnect)


# Register all commands
client.register_commands(cli)
job.register_commands(cli)
payment.register_commands(cli)
summary.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
