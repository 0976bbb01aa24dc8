"""Logging setup for coursereg.

Every module logs through ``logging.getLogger(__name__)``; this module attaches
the handlers to the shared ``coursereg`` parent logger.
"""

from __future__ import annotations

import logging
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path

from coursereg.config import Settings, load_settings

LOG_FILE = "coursereg.log"
MAX_BYTES = 10 * 1024 * 1024
BACKUP_COUNT = 5

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    settings: Settings | None = None,
    *,
    console: bool = True,
    max_bytes: int = MAX_BYTES,
    backup_count: int = BACKUP_COUNT,
) -> logging.Logger:
    """Send the ``coursereg`` logger tree to ``<log_dir>/coursereg.log``.

    Directory and level come from ``settings.log_dir`` and
    ``settings.log_level``. Without settings, ``load_settings()`` is used, so
    COURSEREG_LOG_DIR and COURSEREG_LOG_LEVEL apply. Calling this again
    replaces the handlers installed by the previous call.
    """
    if settings is None:
        settings = load_settings()

    log_dir = Path(settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logger = logging.getLogger("coursereg")
    logger.setLevel(log_level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = [
        RotatingFileHandler(
            log_dir / LOG_FILE,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
    ]
    if console:
        handlers.append(logging.StreamHandler())
    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.info(
        "coursereg logging initialized (level=%s, file=%s)",
        logging.getLevelName(log_level),
        log_dir / LOG_FILE,
    )
    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger under the ``coursereg`` tree, e.g. ``get_logger("cli")``."""
    if not name.startswith("coursereg."):
        name = f"coursereg.{name}"
    return logging.getLogger(name)


def sanitize_for_log(text: str) -> str:
    """Remove credentials from log output.

    Args:
        text: Text that may contain password hashes or session tokens.

    Returns:
        Sanitized text safe for logging.
    """
    patterns = [
        (r"\$2[aby]\$\d{2}\$[./A-Za-z0-9]{53}", "[PASSWORD_HASH]"),  # bcrypt
        (r"Bearer [a-zA-Z0-9._-]+", "Bearer [REDACTED]"),
        (r"coursereg_session=[a-zA-Z0-9._-]+", "coursereg_session=[REDACTED]"),
        (r"token=[a-zA-Z0-9._-]+", "token=[REDACTED]"),
        (r"(\"?password\"?\s*[:=]\s*)\"?[^\s\",}]+\"?", r"\1[REDACTED]"),
    ]

    result = text
    for pat, replacement in patterns:
        result = re.sub(pat, replacement, result)

    return result
