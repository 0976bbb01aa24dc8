"""Unit tests for coursereg logging configuration."""

import logging
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from coursereg.config import Settings
from coursereg.logging import get_logger, sanitize_for_log, setup_logging


@pytest.fixture(autouse=True)
def reset_coursereg_logger():
    """Detach handlers so later tests don't write into removed temp dirs."""
    yield
    logger = logging.getLogger("coursereg")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()


def log_settings(log_dir: Path, level: str = "INFO") -> Settings:
    return Settings(log_dir=str(log_dir), log_level=level)


@pytest.mark.unit
class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_creates_log_directory(self, tmp_path: Path) -> None:
        log_dir = tmp_path / "nested" / "logs"
        setup_logging(log_settings(log_dir), console=False)

        assert log_dir.exists()

    def test_writes_component_records(self, tmp_path: Path) -> None:
        """Module loggers propagate to the file with level and name."""
        setup_logging(log_settings(tmp_path), console=False)
        logging.getLogger("coursereg.enrollment.service").info("component test")

        content = (tmp_path / "coursereg.log").read_text()
        assert " | INFO" in content
        assert " | coursereg.enrollment.service | component test" in content

    def test_level_from_settings(self, tmp_path: Path) -> None:
        setup_logging(log_settings(tmp_path, level="WARNING"), console=False)
        logger = logging.getLogger("coursereg")
        logger.info("should not appear")
        logger.warning("should appear")

        content = (tmp_path / "coursereg.log").read_text()
        assert "should not appear" not in content
        assert "should appear" in content

    def test_unknown_level_falls_back_to_info(self, tmp_path: Path) -> None:
        logger = setup_logging(log_settings(tmp_path, level="chatty"), console=False)

        assert logger.level == logging.INFO

    def test_environment_used_without_settings(self, tmp_path: Path) -> None:
        env = {"COURSEREG_LOG_DIR": str(tmp_path), "COURSEREG_LOG_LEVEL": "DEBUG"}
        with (
            patch.dict(os.environ, env),
            patch("coursereg.config.find_config", return_value=None),
        ):
            logger = setup_logging(console=False)

        assert logger.level == logging.DEBUG
        assert (tmp_path / "coursereg.log").exists()

    def test_repeated_setup_replaces_handlers(self, tmp_path: Path) -> None:
        setup_logging(log_settings(tmp_path / "a"), console=False)
        setup_logging(log_settings(tmp_path / "b"), console=False)
        logging.getLogger("coursereg").info("second only")

        assert len(logging.getLogger("coursereg").handlers) == 1
        assert "second only" in (tmp_path / "b" / "coursereg.log").read_text()
        assert "second only" not in (tmp_path / "a" / "coursereg.log").read_text()

    def test_rotation_configured(self, tmp_path: Path) -> None:
        setup_logging(log_settings(tmp_path), max_bytes=1024, backup_count=3, console=False)

        handlers = [h for h in logging.getLogger("coursereg").handlers if hasattr(h, "maxBytes")]
        assert len(handlers) == 1
        assert handlers[0].maxBytes == 1024
        assert handlers[0].backupCount == 3

    def test_console_handler_optional(self, tmp_path: Path) -> None:
        logger = setup_logging(log_settings(tmp_path))

        assert len(logger.handlers) == 2


@pytest.mark.unit
class TestGetLogger:
    """Tests for get_logger function."""

    def test_get_logger_prefixes_package(self) -> None:
        assert get_logger("enrollment").name == "coursereg.enrollment"

    def test_get_logger_no_double_prefix(self) -> None:
        assert get_logger("coursereg.auth").name == "coursereg.auth"


@pytest.mark.unit
class TestSanitize:
    """Tests for sanitize_for_log function."""

    def test_redacts_bcrypt_hash(self) -> None:
        text = "hash=$2b$12$" + "a" * 53
        result = sanitize_for_log(text)
        assert "$2b$" not in result
        assert "[PASSWORD_HASH]" in result

    def test_redacts_bearer_tokens(self) -> None:
        result = sanitize_for_log("Authorization: Bearer abc123.def456")
        assert "abc123" not in result
        assert "Bearer [REDACTED]" in result

    def test_redacts_session_cookie(self) -> None:
        result = sanitize_for_log("cookie: coursereg_session=Zm9vYmFy-_x")
        assert "Zm9vYmFy" not in result

    def test_redacts_password_field(self) -> None:
        result = sanitize_for_log('{"email": "a@b.c", "password": "hunter2"}')
        assert "hunter2" not in result
        assert "a@b.c" in result

    def test_safe_text_unchanged(self) -> None:
        text = "Student abc123 registered for CS101"
        assert sanitize_for_log(text) == text
