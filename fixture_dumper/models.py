"""
Data models for MySQL Fixture Dumper.
"""

import tempfile
from dataclasses import dataclass, field
from typing import Optional, Union


@dataclass(frozen=True)
class ConnectionConfig:
    """Connection parameters for the fixture database."""
    host: str
    user: str
    database: str
    port: Union[int, str] = 3306
    password: str = ""
    table_prefix: str = ""


@dataclass(frozen=True)
class DumpSettings:
    """Location of dump artifacts and the binaries used to produce them."""
    app_version: str
    directory: str = field(default_factory=tempfile.gettempdir)
    dump_file: Optional[str] = None
    dump_executable: str = "mysqldump"
    client_executable: str = "mysql"


@dataclass
class RestoreStats:
    """Outcome of a bulk table restore."""
    restored: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.restored) + len(self.skipped)

    def record(self, table: str, restored: bool) -> None:
        if restored:
            self.restored.append(table)
        else:
            self.skipped.append(table)
