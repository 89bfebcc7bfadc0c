"""
MySQL Fixture Dumper
====================
Manage MySQL fixture snapshots for test suites:
- Full database dump and restore with mysqldump / mysql
- Per-table dumps with CHECKSUM TABLE based staleness detection
- Restore only modified tables, a list of tables, or tables matching a regex
"""

from .config import ConfigLoader, parse_server
from .connection import DatabaseConnection
from .dump_manager import (
    DumpManager,
    check_dump,
    create,
    dump_tables,
    restore_all_tables,
    restore_db,
    restore_matching_tables,
    restore_tables,
)
from .exceptions import CommandExecutionError, FixtureDumperError, MissingFixtureError
from .executor import CommandExecutor
from .main import main
from .models import ConnectionConfig, DumpSettings, RestoreStats
from .utils import mask_password, setup_logging

__version__ = "1.0.0"

__all__ = [
    # Main entry point
    "main",
    # Core classes
    "ConfigLoader",
    "CommandExecutor",
    "DatabaseConnection",
    "DumpManager",
    # Operations
    "check_dump",
    "create",
    "dump_tables",
    "restore_all_tables",
    "restore_db",
    "restore_matching_tables",
    "restore_tables",
    # Models
    "ConnectionConfig",
    "DumpSettings",
    "RestoreStats",
    # Errors
    "CommandExecutionError",
    "FixtureDumperError",
    "MissingFixtureError",
    # Utilities
    "mask_password",
    "parse_server",
    "setup_logging",
]
