"""
Fixture dump and restore orchestration for MySQL Fixture Dumper.
"""

import logging
import os
import re
from pathlib import Path
from typing import Iterable, Optional, Protocol

from .connection import DatabaseConnection
from .exceptions import MissingFixtureError
from .executor import CommandExecutor
from .models import ConnectionConfig, DumpSettings, RestoreStats

REGENERATE_HINT = "you need to run 'fixture-dumper create' to create the initial test database"


class QueryInterface(Protocol):
    """Subset of DatabaseConnection used by DumpManager."""

    def get_tables(self) -> list[str]: ...

    def get_table_checksum(self, table: str) -> Optional[str]: ...


class DumpManager:
    """Dumps a fixture database to disk and restores it between test runs."""

    def __init__(
        self,
        config: ConnectionConfig,
        settings: DumpSettings,
        connection: Optional[QueryInterface] = None,
        executor: Optional[CommandExecutor] = None
    ):
        self.config = config
        self.settings = settings
        self.connection = connection
        self.executor = executor or CommandExecutor(config.password)

    @property
    def dump_file(self) -> str:
        """Path of the full database dump."""
        if self.settings.dump_file is not None:
            return self.settings.dump_file
        return self._artifact_path('.sql')

    def get_table_dump_path(self, table: str) -> str:
        return self._artifact_path('.sql', table)

    def get_table_checksum_path(self, table: str) -> str:
        return self._artifact_path('.md5', table)

    def _artifact_path(self, extension: str, table: Optional[str] = None) -> str:
        name = f"ps_dump_{self.config.database}_{self.settings.app_version}"
        if table is not None:
            name += f"_{table}"
        return os.path.join(self.settings.directory, name + extension)

    def _mysqldump(self, arguments: list[str], output_path: str) -> None:
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        command = self.executor.build_command(
            self.settings.dump_executable, self.config, arguments
        )
        self.executor.execute(self.executor.redirect_output(command, output_path))

    def _mysql_import(self, input_path: str) -> None:
        command = self.executor.build_command(
            self.settings.client_executable, self.config, [self.config.database]
        )
        self.executor.execute(self.executor.redirect_input(command, input_path))

    def dump(self) -> None:
        """Dump the whole database to the full dump file."""
        logging.info(f"Dumping database '{self.config.database}' to {self.dump_file}")
        self._mysqldump([self.config.database], self.dump_file)

    def dump_all_tables(self) -> list[str]:
        """Dump every table of the database to its own file."""
        tables = self.connection.get_tables()
        logging.info(f"Dumping {len(tables)} table(s) from '{self.config.database}'")
        for table in tables:
            self.dump_table(table)
        return tables

    def dump_table(self, table: str) -> None:
        """
        Dump a single table and record its checksum.

        The checksum file is only written once the dump command succeeded,
        so a checksum never exists without its dump.
        """
        table_dump_file = self.get_table_dump_path(table)
        self._mysqldump([self.config.database, table], table_dump_file)

        checksum = self.connection.get_table_checksum(table)
        Path(self.get_table_checksum_path(table)).write_text(checksum or '')
        logging.debug(f"Dumped table '{table}' (checksum {checksum})")

    def check_dump_file(self) -> None:
        """Raise MissingFixtureError if the full dump is missing."""
        if not os.path.exists(self.dump_file):
            raise MissingFixtureError(f"Cannot find {self.dump_file}, {REGENERATE_HINT}")

    def check_table_dump_file(self, table: str) -> None:
        """Raise MissingFixtureError if the dump of ``table`` is missing."""
        if not os.path.exists(self.get_table_dump_path(table)):
            raise MissingFixtureError(f"Cannot find dump for table {table}, {REGENERATE_HINT}")

    def restore(self) -> None:
        """Restore the full database dump."""
        self.check_dump_file()
        logging.info(f"Restoring database '{self.config.database}' from {self.dump_file}")
        self._mysql_import(self.dump_file)

    def is_table_modified(self, table: str) -> bool:
        """Compare the stored checksum of ``table`` with its current one."""
        checksum_path = Path(self.get_table_checksum_path(table))
        if not checksum_path.exists():
            return True

        dump_checksum = checksum_path.read_text()
        checksum = self.connection.get_table_checksum(table)
        return checksum is None or checksum != dump_checksum

    def restore_table(self, table: str, force_restore: bool = False) -> bool:
        """
        Restore one table from its dump.

        Args:
            table: Table name without the configured prefix.
            force_restore: Restore even if the table looks unmodified.

        Returns:
            True if the dump was replayed, False if the table was unchanged.
        """
        table_name = self.config.table_prefix + table
        self.check_table_dump_file(table_name)

        if not force_restore and not self.is_table_modified(table_name):
            logging.debug(f"Table '{table_name}' unchanged, skipping restore")
            return False

        logging.info(f"Restoring table '{table_name}'")
        self._mysql_import(self.get_table_dump_path(table_name))
        return True

    def restore_tables(self, tables: Iterable[str], force_restore: bool = False) -> RestoreStats:
        """Restore the given tables, named without prefix."""
        stats = RestoreStats()
        for table in tables:
            stats.record(table, self.restore_table(table, force_restore))
        return stats

    def _unprefixed_tables(self) -> list[str]:
        """List database tables with the configured prefix stripped."""
        prefix = self.config.table_prefix
        tables = []
        for table in self.connection.get_tables():
            if not table.startswith(prefix):
                logging.warning(f"Table '{table}' does not start with prefix '{prefix}', ignoring")
                continue
            tables.append(table[len(prefix):])
        return tables

    def restore_all_tables(self, force_restore: bool = False) -> RestoreStats:
        """Restore every table (only modified ones unless forced)."""
        return self.restore_tables(self._unprefixed_tables(), force_restore)

    def restore_matching_tables(self, pattern: str, force_restore: bool = False) -> RestoreStats:
        """Restore tables whose unprefixed name matches the regex ``pattern``."""
        regex = re.compile(pattern)
        tables = [t for t in self._unprefixed_tables() if regex.search(t)]
        logging.info(f"{len(tables)} table(s) match pattern '{pattern}'")
        return self.restore_tables(tables, force_restore)


def _run(config: ConnectionConfig, settings: DumpSettings, operation, *args):
    """Open a connection, build a DumpManager and run one of its operations."""
    with DatabaseConnection.from_config(config) as connection:
        manager = DumpManager(config, settings, connection)
        return operation(manager, *args)


def create(config: ConnectionConfig, settings: DumpSettings) -> None:
    """Make a full database dump."""
    DumpManager(config, settings).dump()


def dump_tables(config: ConnectionConfig, settings: DumpSettings) -> list[str]:
    """Make a dump for each table in the database."""
    return _run(config, settings, DumpManager.dump_all_tables)


def check_dump(config: ConnectionConfig, settings: DumpSettings) -> None:
    """Check that the full dump file exists."""
    DumpManager(config, settings).check_dump_file()


def restore_db(config: ConnectionConfig, settings: DumpSettings) -> None:
    """Restore the full database dump."""
    DumpManager(config, settings).restore()


def restore_all_tables(
    config: ConnectionConfig,
    settings: DumpSettings,
    force_restore: bool = False
) -> RestoreStats:
    """Restore all tables (only modified tables are restored)."""
    return _run(config, settings, DumpManager.restore_all_tables, force_restore)


def restore_tables(
    config: ConnectionConfig,
    settings: DumpSettings,
    tables: Iterable[str],
    force_restore: bool = False
) -> RestoreStats:
    """Restore a list of tables, named without prefix."""
    return _run(config, settings, DumpManager.restore_tables, list(tables), force_restore)


def restore_matching_tables(
    config: ConnectionConfig,
    settings: DumpSettings,
    pattern: str,
    force_restore: bool = False
) -> RestoreStats:
    """Restore the tables whose name matches ``pattern``."""
    return _run(config, settings, DumpManager.restore_matching_tables, pattern, force_restore)
