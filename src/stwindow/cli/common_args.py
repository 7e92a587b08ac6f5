"""
Common CLI argument definitions and utilities for stwindow CLI tools.

This module provides reusable argument groups and utilities to ensure
consistency across all CLI tools and reduce code duplication.
"""

import argparse
import os
import sys
from logging import getLogger
from pathlib import Path

import dotenv

from stwindow.db_handler import AbstractDBHandler, get_db_handler
from stwindow.environment_config import EnvironmentConfigManager
from stwindow.logging_utils import configure_enhanced_logging
from stwindow.window import FIRES_1990S_WINDOW, SpatioTemporalWindow

logger = getLogger("STWindow")


def add_database_args(parser: argparse.ArgumentParser) -> None:
    """
    Add common database connection arguments to an ArgumentParser.

    Args:
        parser: The ArgumentParser to add arguments to
    """
    db_group = parser.add_argument_group("database connection")

    db_group.add_argument("--db-backend", type=str, default="postgres", choices=["postgres", "sqlite"], help="Database backend to use (default: postgres)")

    db_group.add_argument("--db-name", type=str, help="Database name (if not specified, uses DB_NAME environment variable)")

    db_group.add_argument("--db-path", type=str, help="Database file for SQLite (if not specified, uses SQLITE_DB_PATH or an in-memory database)")

    db_group.add_argument("--table", type=str, help="Point table name (if not specified, uses POINTS_TABLE or 'fires')")


def add_environment_args(parser: argparse.ArgumentParser) -> None:
    """
    Add environment file loading arguments to an ArgumentParser.

    Args:
        parser: The ArgumentParser to add arguments to
    """
    env_group = parser.add_argument_group("environment")

    env_group.add_argument(
        "--env-file",
        "--env",
        dest="env_file",
        type=str,
        default=".env",
        help="Path to environment file with configuration (default: .env)",
    )


def add_verbosity_args(parser: argparse.ArgumentParser) -> None:
    verbosity_group = parser.add_argument_group("verbosity options")

    verbosity_group.add_argument("--quiet", "-q", action="store_true", help="Suppress status messages (only output data/results)")

    verbosity_group.add_argument("--verbose", "-v", action="store_true", help="Show detailed status and progress messages")


def add_output_args(parser: argparse.ArgumentParser) -> None:
    output_group = parser.add_argument_group("output options")

    output_group.add_argument(
        "--output-format",
        choices=["csv", "json", "lines"],
        default="csv",
        help="Output format: csv (with header), json (array of objects), lines (one id per line)",
    )

    output_group.add_argument("--output-file", type=str, help="Write output to file instead of console")


def add_window_args(parser: argparse.ArgumentParser) -> None:
    """
    Add the six window bounds, defaulting to the 1990s fires window.

    Args:
        parser: The ArgumentParser to add arguments to
    """
    window_group = parser.add_argument_group("spatio-temporal window")
    default = FIRES_1990S_WINDOW

    window_group.add_argument("--x-min", type=float, default=default.x_min, help=f"Lower x bound, inclusive (default: {default.x_min:.0f})")
    window_group.add_argument("--x-max", type=float, default=default.x_max, help=f"Upper x bound, inclusive (default: {default.x_max:.0f})")
    window_group.add_argument("--y-min", type=float, default=default.y_min, help=f"Lower y bound, inclusive (default: {default.y_min:.0f})")
    window_group.add_argument("--y-max", type=float, default=default.y_max, help=f"Upper y bound, inclusive (default: {default.y_max:.0f})")
    window_group.add_argument(
        "--time-min", type=str, default=default.time_min.date().isoformat(), help="Lower time bound, inclusive (default: %(default)s)"
    )
    window_group.add_argument(
        "--time-max", type=str, default=default.time_max.date().isoformat(), help="Upper time bound, exclusive (default: %(default)s)"
    )


def window_from_args(args: argparse.Namespace) -> SpatioTemporalWindow:
    """
    Build the window from parsed arguments.

    Raises:
        SystemExit: If a time bound is not an ISO date/timestamp
    """
    try:
        return SpatioTemporalWindow.from_strings(args.x_min, args.x_max, args.y_min, args.y_max, args.time_min, args.time_max)
    except ValueError as e:
        logger.error(f"Invalid window: {e}")
        sys.exit(1)


def configure_logging(args: argparse.Namespace) -> None:
    """
    Configure logging based on verbosity arguments.

    Args:
        args: Parsed command line arguments with quiet/verbose flags
    """
    configure_enhanced_logging(verbose=getattr(args, "verbose", False), quiet=getattr(args, "quiet", False))


def load_environment_with_validation(env_file: str, required_vars: list[str] | None = None) -> dict[str, str]:
    """
    Load environment variables from file with validation.

    Args:
        env_file: Path to environment file
        required_vars: List of required environment variable names

    Returns:
        Dictionary of loaded environment variables

    Raises:
        SystemExit: If required variables are missing
    """
    env_path = Path(env_file)

    if env_path.exists():
        dotenv.load_dotenv(env_file)
        logger.debug(f"Loaded environment from {env_file}")
    elif env_file != ".env":  # Only warn if user explicitly specified a file
        logger.warning(f"Environment file {env_file} not found")

    if required_vars:
        missing_vars = [var for var in required_vars if not os.getenv(var)]
        if missing_vars:
            logger.error(f"Missing required environment variables: {', '.join(missing_vars)}")
            logger.error("Please set these variables in your environment or .env file")
            sys.exit(1)

    return dict(os.environ)


def create_db_handler(args: argparse.Namespace) -> AbstractDBHandler:
    """
    Create the database handler from environment configuration and CLI overrides.

    Raises:
        ValueError: If required environment variables are missing
    """
    db_backend = getattr(args, "db_backend", "postgres")
    if db_backend == "sqlite":
        config = EnvironmentConfigManager.get_sqlite_config()
        if getattr(args, "db_path", None):
            config["db_path"] = args.db_path
    else:
        config = EnvironmentConfigManager.get_postgresql_config(dbname=getattr(args, "db_name", None))

    if getattr(args, "table", None):
        config["table"] = args.table

    logger.debug(f"Connecting to {db_backend} (table {config['table']})")
    return get_db_handler(db_backend, **config)
