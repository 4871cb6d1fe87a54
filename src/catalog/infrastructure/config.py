"""Runtime configuration read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


@dataclass(frozen=True)
class Settings:
    data_dir: Path = DEFAULT_DATA_DIR
    log_level: str = "INFO"
    log_file: Path | None = None
    log_max_bytes: int = 2 * 1024 * 1024
    log_backups: int = 3

    @staticmethod
    def from_env() -> Settings:
        log_file = os.getenv("CATALOG_LOG_FILE")
        return Settings(
            data_dir=Path(os.getenv("CATALOG_DATA_DIR", str(DEFAULT_DATA_DIR))),
            log_level=os.getenv("CATALOG_LOG_LEVEL", "INFO").upper(),
            log_file=Path(log_file) if log_file else None,
            log_max_bytes=int(os.getenv("CATALOG_LOG_MAX_BYTES", str(2 * 1024 * 1024))),
            log_backups=int(os.getenv("CATALOG_LOG_BACKUPS", "3")),
        )
