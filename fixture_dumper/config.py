"""
Configuration loading and validation for MySQL Fixture Dumper.
"""

import os
import re
from typing import Any

import yaml

from .models import ConnectionConfig, DumpSettings

DEFAULT_PORT = 3306


def parse_server(server: str) -> tuple[str, int]:
    """Split a ``host[:port]`` string, defaulting the port to 3306."""
    parts = server.split(':')
    if len(parts) > 2 or not parts[0]:
        raise ValueError(f"Invalid database server '{server}', expected host[:port]")

    host = parts[0]
    if len(parts) == 1 or parts[1] == '':
        return host, DEFAULT_PORT

    if not parts[1].isdigit():
        raise ValueError(f"Invalid database server '{server}', expected host[:port]")
    return host, int(parts[1])


class ConfigLoader:
    """Loads and validates configuration from YAML file."""

    ENV_VAR_PATTERN = re.compile(r'\$\{([^}]+)\}')
    REQUIRED_DATABASE_KEYS = ('server', 'name', 'user')

    def __init__(self, config_path: str):
        self.config_path = config_path
        self.config = self._load_config()

    def _load_config(self) -> dict[str, Any]:
        """Load configuration from YAML file."""
        with open(self.config_path, 'r') as f:
            config = yaml.safe_load(f)

        return self._resolve_env_vars(config or {})

    def _resolve_env_vars(self, obj: Any) -> Any:
        """Recursively resolve environment variables in config."""
        if isinstance(obj, str):
            matches = self.ENV_VAR_PATTERN.findall(obj)
            for match in matches:
                env_value = os.environ.get(match, '')
                obj = obj.replace(f'${{{match}}}', env_value)
            return obj
        elif isinstance(obj, dict):
            return {k: self._resolve_env_vars(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [self._resolve_env_vars(item) for item in obj]
        return obj

    def get_database_settings(self) -> dict[str, Any]:
        """Get raw database section."""
        return self.config.get('database') or {}

    def get_dump_section(self) -> dict[str, Any]:
        """Get raw dumps section."""
        return self.config.get('dumps') or {}

    def get_logging_settings(self) -> dict[str, Any]:
        """Get logging settings."""
        return self.config.get('logging') or {}

    def get_connection_config(self) -> ConnectionConfig:
        """Build the connection config, failing on missing required keys."""
        database = self.get_database_settings()
        missing = [key for key in self.REQUIRED_DATABASE_KEYS if not database.get(key)]
        if missing:
            raise ValueError(
                f"Missing required database setting(s): {', '.join(missing)}"
            )

        host, port = parse_server(str(database['server']))
        return ConnectionConfig(
            host=host,
            port=port,
            user=str(database['user']),
            password=str(database.get('password') or ''),
            database=str(database['name']),
            table_prefix=str(database.get('prefix') or ''),
        )

    def get_dump_settings(self) -> DumpSettings:
        """Build dump settings, applying defaults for optional keys."""
        dumps = self.get_dump_section()
        if not dumps.get('version'):
            raise ValueError("Missing required dumps setting: version")

        # Only pass explicit values so dataclass defaults apply
        settings = {'app_version': str(dumps['version'])}
        for key, target in (
            ('directory', 'directory'),
            ('file', 'dump_file'),
            ('dump_executable', 'dump_executable'),
            ('client_executable', 'client_executable'),
        ):
            if dumps.get(key):
                settings[target] = str(dumps[key])
        return DumpSettings(**settings)
