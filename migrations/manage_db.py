"""
Database maintenance for TheCueRoom.

  python -m migrations.manage_db upgrade [revision]
  python -m migrations.manage_db downgrade <revision>
  python -m migrations.manage_db revision "add playlists"
  python -m migrations.manage_db create-tables
"""
import argparse
import logging
import sys

from alembic import command
from alembic.config import Config

logger = logging.getLogger(__name__)

def _alembic_config(args) -> Config:
    return Config(args.config)

def upgrade(args) -> None:
    command.upgrade(_alembic_config(args), args.revision)
    logger.info(f"Upgraded to {args.revision}")

def downgrade(args) -> None:
    command.downgrade(_alembic_config(args), args.revision)
    logger.info(f"Downgraded to {args.revision}")

def revision(args) -> None:
    command.revision(_alembic_config(args), message=args.message, autogenerate=True)

def create_tables(args) -> None:
    # Imported lazily so the alembic commands don't need a reachable database at import time
    from cueroom.db.init_db import create_all_tables

    if not create_all_tables():
        sys.exit(1)

def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="TheCueRoom database commands")
    parser.add_argument("--config", default="alembic.ini", help="Path to alembic.ini")
    commands = parser.add_subparsers(dest="command", required=True)

    up = commands.add_parser("upgrade", help="Apply migrations")
    up.add_argument("revision", nargs="?", default="head")
    up.set_defaults(func=upgrade)

    down = commands.add_parser("downgrade", help="Revert migrations")
    down.add_argument("revision")
    down.set_defaults(func=downgrade)

    rev = commands.add_parser("revision", help="Autogenerate a migration from the models")
    rev.add_argument("message")
    rev.set_defaults(func=revision)

    tables = commands.add_parser("create-tables", help="Create missing tables without migrations")
    tables.set_defaults(func=create_tables)

    args = parser.parse_args(argv)
    args.func(args)

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
