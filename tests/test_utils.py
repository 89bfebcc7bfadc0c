"""
Unit tests for utils.py
"""

import logging
import tempfile
from pathlib import Path

import pytest

from fixture_dumper.models import RestoreStats
from fixture_dumper.utils import log_restore_summary, mask_password, setup_logging


class TestSetupLogging:
    """Tests for setup_logging function."""

    @pytest.fixture(autouse=True)
    def reset_logging(self):
        """Reset logging configuration before each test."""
        root_logger = logging.getLogger()
        # Remove all handlers
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)
        # Reset level to NOTSET so basicConfig will work
        root_logger.setLevel(logging.NOTSET)
        yield

    def test_default_log_level(self):
        """Test default log level is INFO."""
        setup_logging({})
        assert logging.getLogger().level == logging.INFO

    def test_custom_log_level(self):
        """Test setting custom log level."""
        setup_logging({"level": "DEBUG"})
        assert logging.getLogger().level == logging.DEBUG

    def test_log_level_case_insensitive(self):
        """Test log level is case insensitive."""
        setup_logging({"level": "warning"})
        assert logging.getLogger().level == logging.WARNING

    def test_level_applied_with_existing_handler(self):
        """Test the level is applied when the root logger already has a handler."""
        root_logger = logging.getLogger()
        existing = logging.NullHandler()
        root_logger.addHandler(existing)

        setup_logging({"level": "DEBUG"})

        assert root_logger.level == logging.DEBUG
        assert existing not in root_logger.handlers

    def test_log_to_file(self):
        """Test logging to a file."""
        with tempfile.TemporaryDirectory() as tmpdir:
            log_file = Path(tmpdir) / "test.log"
            setup_logging({"file": str(log_file)})

            logging.info("Test message")

            assert log_file.exists()

    def test_creates_log_directory(self):
        """Test that log directory is created if it doesn't exist."""
        with tempfile.TemporaryDirectory() as tmpdir:
            log_file = Path(tmpdir) / "nested" / "dir" / "test.log"
            setup_logging({"file": str(log_file)})

            assert log_file.parent.exists()


class TestMaskPassword:
    """Tests for mask_password function."""

    def test_masks_simple_password(self):
        command = "mysql -u root -P 3306 -h localhost -psecret shop"
        assert mask_password(command, "secret") == (
            "mysql -u root -P 3306 -h localhost -p**** shop"
        )

    def test_masks_quoted_password(self):
        command = "mysql -u root -P 3306 -h localhost -p'p@ss word' shop"
        assert mask_password(command, "p@ss word") == (
            "mysql -u root -P 3306 -h localhost -p**** shop"
        )

    def test_no_password(self):
        command = "mysql -u root -P 3306 -h localhost shop"
        assert mask_password(command, "") == command


class TestLogRestoreSummary:
    """Tests for log_restore_summary function."""

    def test_logs_counts(self, caplog):
        stats = RestoreStats(restored=["product"], skipped=["cart", "order"])
        with caplog.at_level(logging.INFO):
            log_restore_summary(stats)

        assert "Tables checked: 3" in caplog.text
        assert "Restored: 1" in caplog.text
        assert "Unchanged (skipped): 2" in caplog.text
