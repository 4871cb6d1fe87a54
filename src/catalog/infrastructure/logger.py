"""Logging setup shared by every layer that logs.

Configured once per process from the environment (see ``Settings``).
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from catalog.infrastructure.config import Settings

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_configured = False


def setup_logging(settings: Settings | None = None) -> None:
    global _configured
    if _configured:
        return

    settings = settings or Settings.from_env()
    level = getattr(logging, settings.log_level, logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)
    formatter = logging.Formatter(_FORMAT)

    # Avoid duplicate handlers
    if not root.handlers:
        # stderr keeps log lines out of the CLI's own output
        stream = logging.StreamHandler(sys.stderr)
        stream.setLevel(level)
        stream.setFormatter(formatter)
        root.addHandler(stream)

        if settings.log_file is not None:
            try:
                Path(settings.log_file).parent.mkdir(parents=True, exist_ok=True)
                file_handler = RotatingFileHandler(
                    settings.log_file,
                    maxBytes=settings.log_max_bytes,
                    backupCount=settings.log_backups,
                )
                file_handler.setLevel(level)
                file_handler.setFormatter(formatter)
                root.addHandler(file_handler)
            except OSError as exc:
                root.warning("Failed to initialize file logging: %s", exc)

    _configured = True


def get_logger(name: str | None = None) -> logging.Logger:
    return logging.getLogger(name)
