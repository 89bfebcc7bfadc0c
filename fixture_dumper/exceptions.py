"""
Exceptions raised by MySQL Fixture Dumper.
"""


class FixtureDumperError(Exception):
    """Base class for fixture dumper errors."""


class CommandExecutionError(FixtureDumperError):
    """An external command exited with a non-zero status."""

    def __init__(self, command: str, returncode: int = 1):
        self.command = command
        self.returncode = returncode
        super().__init__(f"Unable to exec command: `{command}`, missing a binary?")


class MissingFixtureError(FixtureDumperError):
    """A dump artifact required for a restore is not on disk."""
