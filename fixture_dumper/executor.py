"""
Shell command construction and execution for mysqldump / mysql.
"""

import logging
import shlex
import subprocess
from typing import Optional

from .exceptions import CommandExecutionError
from .models import ConnectionConfig
from .utils import mask_password


class CommandExecutor:
    """Builds and runs mysql client commands through the shell."""

    DISCARD_STDERR = '2> /dev/null'

    def __init__(self, password: str = ''):
        # Only used to keep the password out of log output
        self.password = password

    @staticmethod
    def build_command(
        executable: str,
        config: ConnectionConfig,
        arguments: Optional[list[str]] = None
    ) -> str:
        """
        Build a mysql/mysqldump command line with connection options.

        Every token is quoted individually, so host, user, password,
        database and table names are always passed as literal arguments.
        """
        parts = [
            shlex.quote(executable),
            '-u', shlex.quote(config.user),
            '-P', shlex.quote(str(config.port)),
            '-h', shlex.quote(config.host),
        ]

        if config.password:
            parts.append('-p' + shlex.quote(config.password))

        parts.extend(shlex.quote(arg) for arg in arguments or [])

        return ' '.join(parts)

    @classmethod
    def redirect_output(cls, command: str, path: str) -> str:
        """Send stdout of ``command`` to ``path``."""
        return f"{command} > {shlex.quote(str(path))} {cls.DISCARD_STDERR}"

    @classmethod
    def redirect_input(cls, command: str, path: str) -> str:
        """Feed ``path`` to stdin of ``command``."""
        return f"{command} < {shlex.quote(str(path))} {cls.DISCARD_STDERR}"

    def execute(self, command: str) -> list[str]:
        """
        Run a command, raising if it fails.

        Args:
            command: Fully built, already quoted shell command.

        Returns:
            Lines written to stdout.

        Raises:
            CommandExecutionError: if the command exits with a non-zero status.
        """
        logging.debug(f"Executing: {mask_password(command, self.password)}")
        result = subprocess.run(
            command,
            shell=True,
            stdout=subprocess.PIPE,
            text=True,
            check=False
        )

        if result.returncode != 0:
            logging.error(
                f"Command failed with exit code {result.returncode}: "
                f"{mask_password(command, self.password)}"
            )
            raise CommandExecutionError(command, result.returncode)

        return result.stdout.splitlines()
