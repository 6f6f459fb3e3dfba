"""
Festplan Shell

Main entry point for the interactive shell.
Run with: python -m cli --config config.toml
"""

import argparse
import logging
import sqlite3
import sys
from typing import List, Optional

from cli.config import DEFAULT_CONFIG_PATH, load_settings
from cli.menus import Shell
from cli.prompts import Prompter
from festplan import __version__
from festplan.errors import ConfigError
from festplan.storage.sqlite_repo import create_fest, open_or_create_database

logger = logging.getLogger(__name__)


def setup_logging(level: str):
    """Log to stderr so tables on stdout stay clean."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="festplan",
        description="Plan cocktails, inventory and shopping for a fest.",
    )
    parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG_PATH,
        help="location of the config file",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.config)
    except ConfigError as e:
        print(e.message, file=sys.stderr)
        print("exiting", file=sys.stderr)
        return 1

    setup_logging(settings.log_level)
    logger.info(f"Planning fest {settings.current} for {settings.awaited} guests")

    try:
        if open_or_create_database(settings.database, settings.schema_path):
            print("Database not found, created new…")
        create_fest(settings.current, db_path=settings.database)
    except (ConfigError, sqlite3.Error) as e:
        logger.error(f"Could not open database {settings.database}: {e}")
        print(e, file=sys.stderr)
        return 1

    Shell(settings, Prompter()).run()
    return 0
