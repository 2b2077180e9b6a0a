"""Schema setup: Alembic migrations for deployments, create_all for local runs"""
import logging

from alembic import command
from alembic.config import Config
from sqlalchemy import inspect

from cueroom.db import base  # noqa: F401  registers every model on Base.metadata
from cueroom.db.session import engine, Base

logger = logging.getLogger(__name__)

def init_db(config_path: str = "alembic.ini") -> None:
    """Bring the database to the latest migration"""
    command.upgrade(Config(config_path), "head")
    logger.info("Database migrations applied")

def create_all_tables(bind=None) -> bool:
    """Create any missing tables. Returns False when the database can't be reached."""
    bind = bind or engine
    try:
        before = set(inspect(bind).get_table_names())
        Base.metadata.create_all(bind=bind)
    except Exception as e:
        logger.error(f"Could not create tables: {e}")
        return False

    created = sorted(set(Base.metadata.tables) - before)
    if created:
        logger.info(f"Created tables: {', '.join(created)}")
    return True

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
