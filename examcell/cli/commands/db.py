"""Database schema commands."""

import cyclopts

from examcell.cli.console import get_console
from examcell.config import Config, configure_logging
from examcell.infrastructure.persistence.migrate import current_revision, run_migrations

app = cyclopts.App(name="db", help="Database schema management")


@app.command
def upgrade() -> None:
    """Apply all pending migrations."""
    config = Config()  # type: ignore[call-arg]
    configure_logging(config.logging)
    run_migrations(config.database.url)
    get_console().success("Database is up to date")


@app.command
def current() -> None:
    """Show the database's current migration revision."""
    config = Config()  # type: ignore[call-arg]
    current_revision(config.database.url)
