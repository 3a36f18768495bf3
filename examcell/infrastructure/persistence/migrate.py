"""Database migration utilities.

Migrations are run at startup before the async server starts. The Alembic
environment drives the same async driver the application uses.
"""

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config as AlembicConfig

logger = logging.getLogger(__name__)

# Project root where alembic.ini lives
PROJECT_ROOT = Path(__file__).parent.parent.parent.parent


def get_alembic_config(database_url: str) -> AlembicConfig:
    """Create Alembic config with the given database URL."""
    config = AlembicConfig(str(PROJECT_ROOT / "alembic.ini"))
    config.set_main_option("script_location", str(PROJECT_ROOT / "migrations"))
    config.set_main_option("sqlalchemy.url", database_url)
    config.attributes["configure_logger"] = False
    return config


def run_migrations(database_url: str) -> None:
    """Upgrade the database to the latest revision.

    Must not be called from inside a running event loop.
    """
    config = get_alembic_config(database_url)
    command.upgrade(config, "head")
    logger.info("Database migrations complete")


def current_revision(database_url: str) -> None:
    """Print the current revision of the database."""
    command.current(get_alembic_config(database_url), verbose=True)
