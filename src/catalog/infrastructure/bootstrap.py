"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from pathlib import Path

from catalog.infrastructure.config import Settings
from catalog.infrastructure.persistence.json_item_repository import (
    JsonItemRepository,
)

# One repository per data directory: the in-memory index and its lock must
# be shared by everything that touches the same files.
_repositories: dict[Path, JsonItemRepository] = {}


def item_repository(data_dir: Path | None = None) -> JsonItemRepository:
    directory = Path(data_dir or Settings.from_env().data_dir).resolve()
    if directory not in _repositories:
        _repositories[directory] = JsonItemRepository(directory)
    return _repositories[directory]
