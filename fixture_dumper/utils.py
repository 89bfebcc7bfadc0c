"""
Utility functions for MySQL Fixture Dumper.
"""

import logging
import shlex
import sys
from pathlib import Path
from typing import Any

from .models import RestoreStats

PASSWORD_MASK = '****'


def setup_logging(log_settings: dict[str, Any]) -> None:
    """Setup logging configuration."""
    log_level = getattr(logging, log_settings.get('level', 'INFO').upper())
    log_file = log_settings.get('file')

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True
    )


def mask_password(command: str, password: str) -> str:
    """Hide a password inside a command line before it is logged."""
    if not password:
        return command
    return command.replace('-p' + shlex.quote(password), '-p' + PASSWORD_MASK)


def log_restore_summary(stats: RestoreStats) -> None:
    """Log which tables were restored and which were left untouched."""
    logging.info(f"Tables checked: {stats.total}")
    logging.info(f"Restored: {len(stats.restored)}")
    for table in stats.restored:
        logging.debug(f"  - {table}")
    logging.info(f"Unchanged (skipped): {len(stats.skipped)}")
