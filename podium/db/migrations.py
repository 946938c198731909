"""
Programmatic Alembic upgrade, used by the CLI and at app startup
"""

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config

from podium.core.config import settings

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def alembic_config(database_url: str = None) -> Config:
    config = Config(str(PROJECT_ROOT / "alembic.ini"))
    config.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))
    config.set_main_option("sqlalchemy.url", (database_url or settings.database_url).replace("%", "%%"))
    # Keep the application's logging setup
    config.attributes["configure_logger"] = False
    return config


def upgrade_to_head(database_url: str = None) -> None:
    """Run ``alembic upgrade head``. Blocking; env.py drives its own event loop."""
    logger.info("Running database migrations...")
    command.upgrade(alembic_config(database_url), "head")
    logger.info("Database migrations completed")
