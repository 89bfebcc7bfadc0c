"""
Unit tests for executor.py
"""

import logging
import shlex

import pytest

from fixture_dumper.exceptions import CommandExecutionError
from fixture_dumper.executor import CommandExecutor
from fixture_dumper.models import ConnectionConfig


@pytest.fixture
def config():
    return ConnectionConfig(host="localhost", port=3306, user="root", database="shop")


class TestBuildCommand:
    """Tests for CommandExecutor.build_command."""

    def test_without_password(self, config):
        """Test the -p option is left out without a password."""
        command = CommandExecutor.build_command("mysqldump", config, ["shop"])
        assert command == "mysqldump -u root -P 3306 -h localhost shop"

    def test_with_password(self):
        """Test the password is glued to -p."""
        config = ConnectionConfig(
            host="db", port=3307, user="app", password="secret", database="shop"
        )
        command = CommandExecutor.build_command("mysql", config, ["shop"])
        assert command == "mysql -u app -P 3307 -h db -psecret shop"

    def test_no_arguments(self, config):
        """Test building a command without positional arguments."""
        command = CommandExecutor.build_command("mysql", config)
        assert command == "mysql -u root -P 3306 -h localhost"

    @pytest.mark.parametrize("value", [
        "with space",
        "quo'te",
        'double"quote',
        "semi;colon",
        "$(touch /tmp/pwned)",
        "`id`",
        "a && b || c",
        "$HOME",
    ])
    def test_metacharacters_are_literal(self, value):
        """Test every token splits back to its literal value."""
        config = ConnectionConfig(
            host=value, port=3306, user=value, password=value, database=value
        )
        command = CommandExecutor.build_command(value, config, [value, value])

        assert shlex.split(command) == [
            value, "-u", value, "-P", "3306", "-h", value, "-p" + value, value, value
        ]

    def test_redirect_output(self):
        command = CommandExecutor.redirect_output("mysqldump shop", "/tmp/my dump.sql")
        assert command == "mysqldump shop > '/tmp/my dump.sql' 2> /dev/null"

    def test_redirect_input(self):
        command = CommandExecutor.redirect_input("mysql shop", "/tmp/dump.sql")
        assert command == "mysql shop < /tmp/dump.sql 2> /dev/null"


class TestExecute:
    """Tests for CommandExecutor.execute."""

    def test_returns_stdout_lines(self):
        """Test stdout is returned line by line."""
        output = CommandExecutor().execute("printf 'first\\nsecond\\n'")
        assert output == ["first", "second"]

    def test_empty_output(self):
        assert CommandExecutor().execute("true") == []

    def test_non_zero_exit_raises(self):
        """Test a failing command raises with the command attached."""
        with pytest.raises(CommandExecutionError) as exc_info:
            CommandExecutor().execute("exit 3")

        assert exc_info.value.command == "exit 3"
        assert exc_info.value.returncode == 3
        assert "`exit 3`" in str(exc_info.value)

    def test_missing_binary_raises(self, config):
        """Test a missing executable surfaces as CommandExecutionError."""
        command = CommandExecutor.build_command("fixture-dumper-no-such-binary", config, ["shop"])
        with pytest.raises(CommandExecutionError) as exc_info:
            CommandExecutor().execute(command + " 2> /dev/null")
        assert exc_info.value.command == command + " 2> /dev/null"

    def test_injection_is_not_executed(self, tmp_path):
        """Test shell metacharacters in arguments are passed literally."""
        marker = tmp_path / "pwned"
        payload = f"$(touch {marker}); touch {marker}"
        config = ConnectionConfig(host="localhost", port=3306, user="root", database="shop")

        output = CommandExecutor().execute(
            CommandExecutor.build_command("echo", config, [payload])
        )

        assert output == [f"-u root -P 3306 -h localhost {payload}"]
        assert not marker.exists()

    def test_redirections(self, tmp_path):
        """Test output and input redirection to paths with spaces."""
        path = tmp_path / "dump file.sql"
        executor = CommandExecutor()

        executor.execute(CommandExecutor.redirect_output("echo 'CREATE TABLE t;'", str(path)))
        assert path.read_text() == "CREATE TABLE t;\n"

        assert executor.execute(CommandExecutor.redirect_input("cat", str(path))) == [
            "CREATE TABLE t;"
        ]

    def test_password_masked_in_logs(self, caplog):
        """Test the password does not show up in log output."""
        executor = CommandExecutor(password="s3cret")
        with caplog.at_level(logging.DEBUG):
            with pytest.raises(CommandExecutionError):
                executor.execute("false -ps3cret")

        assert "s3cret" not in caplog.text
        assert "-p****" in caplog.text
