"""JSON-file-backed implementation of ItemRepository.

The whole catalog lives in memory, indexed by id and by uniqueness key,
and is written to disk in full after every successful change:

1. dump every item to ``items.json.tmp``
2. copy the temp file over ``items.json.bak``
3. atomically move the temp file onto ``items.json``

The primary file is therefore always a complete snapshot (or briefly
absent), and the backup is never older than the last successful write.
On start-up a missing or unreadable primary file is recovered from the
backup; if that fails too the store starts empty.
"""

from __future__ import annotations

import copy
import json
import os
import shutil
from datetime import datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path

from catalog.domain.exceptions import (
    DomainException,
    DuplicateItemError,
    PersistenceError,
    ValidationError,
)
from catalog.domain.model.discount import Discount, DiscountType
from catalog.domain.model.item import Condition, Item, ItemKey
from catalog.domain.model.value_objects import Picture, Price, Rating
from catalog.domain.repository.item_repository import ItemRepository
from catalog.infrastructure.logger import get_logger
from catalog.infrastructure.persistence.rw_lock import ReadWriteLock

logger = get_logger(__name__)

DATA_FILE = "items.json"

# Anything a damaged snapshot can raise while being read or rebuilt.
_SNAPSHOT_ERRORS = (
    OSError,
    ValueError,
    KeyError,
    TypeError,
    AttributeError,
    InvalidOperation,
    DomainException,
)


class JsonItemRepository(ItemRepository):

    def __init__(self, data_dir: Path) -> None:
        self._data_dir = Path(data_dir)
        self._data_path = self._data_dir / DATA_FILE
        self._tmp_path = self._data_dir / f"{DATA_FILE}.tmp"
        self._bak_path = self._data_dir / f"{DATA_FILE}.bak"

        self._by_id: dict[str, Item] = {}
        self._by_key: dict[ItemKey, str] = {}
        self._lock = ReadWriteLock()

        logger.info("Initializing item repository at '%s'", self._data_path)
        self._initialize()

    # --- ItemRepository interface ---------------------------------------------

    def get_by_id(self, item_id: str) -> Item | None:
        with self._lock.read():
            item = self._by_id.get(item_id)
            logger.debug("Item id='%s' %s", item_id, "found" if item else "not found")
            return copy.deepcopy(item)

    def get_by_key(self, key: ItemKey) -> Item | None:
        with self._lock.read():
            item_id = self._by_key.get(key)
            item = self._by_id.get(item_id) if item_id is not None else None
            logger.debug("Item key=%s %s", key, "found" if item else "not found")
            return copy.deepcopy(item)

    def list_page(self, page: int, size: int) -> list[Item]:
        if page < 0 or size <= 0:
            logger.debug("Invalid pagination page=%s size=%s, returning no items", page, size)
            return []

        with self._lock.read():
            ordered = sorted(
                self._by_id.values(),
                key=lambda item: (item.title_normalized, item.id),
            )
            start = page * size
            return [copy.deepcopy(item) for item in ordered[start:start + size]]

    def save(self, item: Item) -> Item:
        if item is None:
            raise ValidationError("Item is required")
        if not item.id or not item.id.strip():
            raise ValidationError("Item id is required")
        key = item.key
        if not key.seller_id or not key.seller_id.strip():
            raise ValidationError("Item seller id is required")
        if not key.title_normalized:
            raise ValidationError("Item title is required")

        snapshot = copy.deepcopy(item)
        with self._lock.write():
            owner = self._by_key.get(key)
            if owner is not None and owner != item.id:
                logger.warning(
                    "Seller '%s' already lists '%s' as item id='%s'",
                    key.seller_id, key.title_normalized, owner,
                )
                raise DuplicateItemError(
                    f"Seller '{key.seller_id}' already has an item titled '{item.title}'"
                )

            previous_item = self._by_id.get(item.id)
            previous_keys = self._keys_for(item.id)
            for stale in previous_keys:
                del self._by_key[stale]
            self._by_id[item.id] = snapshot
            self._by_key[key] = item.id

            try:
                self._persist()
            except PersistenceError:
                del self._by_key[key]
                self._restore(item.id, previous_item, previous_keys)
                raise

        logger.info("Saved item id='%s'", item.id)
        return item

    def delete_by_id(self, item_id: str) -> bool:
        with self._lock.write():
            removed = self._by_id.pop(item_id, None)
            if removed is None:
                logger.debug("Item id='%s' not found, nothing to delete", item_id)
                return False
            keys = self._keys_for(item_id)
            for key in keys:
                del self._by_key[key]

            try:
                self._persist()
            except PersistenceError:
                self._restore(item_id, removed, keys)
                raise

        logger.info("Deleted item id='%s'", item_id)
        return True

    def count(self) -> int:
        with self._lock.read():
            return len(self._by_id)

    # --- Index helpers (callers hold the write lock) --------------------------

    def _keys_for(self, item_id: str) -> list[ItemKey]:
        return [key for key, owner in self._by_key.items() if owner == item_id]

    def _restore(self, item_id: str, item: Item | None, keys: list[ItemKey]) -> None:
        """Put one item's index entries back after a failed write."""
        logger.warning("Rolling back in-memory change to item id='%s'", item_id)
        if item is None:
            self._by_id.pop(item_id, None)
        else:
            self._by_id[item_id] = item
        for key in keys:
            self._by_key[key] = item_id

    def _replace_index(self, items: list[Item]) -> None:
        by_id: dict[str, Item] = {}
        by_key: dict[ItemKey, str] = {}
        for item in items:
            if item.id in by_id or item.key in by_key:
                raise DuplicateItemError(f"Duplicate item in snapshot: {item.id}")
            by_id[item.id] = item
            by_key[item.key] = item.id
        self._by_id = by_id
        self._by_key = by_key

    # --- Start-up and recovery ------------------------------------------------

    def _initialize(self) -> None:
        with self._lock.write():
            try:
                self._data_dir.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise PersistenceError(f"Cannot create data directory {self._data_dir}") from exc

            if not self._data_path.exists() and not self._bak_path.exists():
                logger.info("No data file yet, starting with an empty catalog")
                self._persist()
                return

            try:
                self._replace_index(self._read_snapshot(self._data_path))
            except _SNAPSHOT_ERRORS as exc:
                logger.error("Could not load '%s': %s", self._data_path, exc)
                self._recover()
                return

            logger.info("Loaded %d items from '%s'", len(self._by_id), self._data_path)

    def _recover(self) -> None:
        if self._bak_path.exists():
            logger.warning("Attempting to restore from backup '%s'", self._bak_path)
            try:
                self._replace_index(self._read_snapshot(self._bak_path))
            except _SNAPSHOT_ERRORS as exc:
                logger.error("Could not restore backup '%s': %s", self._bak_path, exc)
            else:
                logger.info("Restored %d items from backup", len(self._by_id))
                self._persist()
                return
        else:
            logger.warning("No backup file at '%s'", self._bak_path)

        logger.warning("Resetting item repository to an empty catalog")
        self._by_id = {}
        self._by_key = {}
        self._persist()

    def _read_snapshot(self, path: Path) -> list[Item]:
        raw = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(raw, list):
            raise ValueError(f"Expected a JSON array in {path}")
        return [self._to_domain(record) for record in raw]

    # --- File helpers ---------------------------------------------------------

    def _persist(self) -> None:
        records = [self._to_raw(item) for item in self._by_id.values()]
        logger.debug("Persisting %d items to '%s'", len(records), self._data_path)
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
            self._tmp_path.write_text(
                json.dumps(records, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
            )
            shutil.copyfile(self._tmp_path, self._bak_path)
            os.replace(self._tmp_path, self._data_path)
        except OSError as exc:
            logger.error("Failed to persist items to '%s': %s", self._data_path, exc)
            self._discard_failed_write()
            raise PersistenceError(f"Failed to persist {self._data_path}") from exc

    def _discard_failed_write(self) -> None:
        """Bring the backup back in line with the primary after a failed write."""
        try:
            if self._data_path.exists():
                shutil.copyfile(self._data_path, self._bak_path)
            else:
                self._bak_path.unlink(missing_ok=True)
            self._tmp_path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Could not clean up after failed write in '%s': %s",
                           self._data_dir, exc)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(item: Item) -> dict:
        discount = item.discount
        return {
            "id": item.id,
            "title": item.title,
            "description": item.description,
            "price": {
                "currency": item.base_price.currency,
                "amount": str(item.base_price.amount),
            },
            "discount": None if discount is None else {
                "type": discount.type.value,
                "value": discount.value,
                "label": discount.label,
                "startsAt": _format_moment(discount.starts_at),
                "endsAt": _format_moment(discount.ends_at),
            },
            "stock": item.stock,
            "sellerId": item.seller_id,
            "pictures": [
                {"url": p.url, "main": p.main, "alt": p.alt} for p in item.pictures
            ],
            "rating": {"average": item.rating.average, "count": item.rating.count},
            "condition": item.condition.value,
            "freeShipping": item.free_shipping,
            "categories": list(item.categories),
            "attributes": dict(item.attributes),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Item:
        raw_discount = raw.get("discount")
        discount = None
        if raw_discount is not None:
            discount = Discount(
                type=DiscountType(raw_discount["type"]),
                value=raw_discount["value"],
                label=raw_discount.get("label"),
                starts_at=_parse_moment(raw_discount.get("startsAt")),
                ends_at=_parse_moment(raw_discount.get("endsAt")),
            )
        raw_rating = raw.get("rating") or {}
        return Item(
            id=raw["id"],
            title=raw["title"],
            description=raw["description"],
            base_price=Price(raw["price"]["currency"], Decimal(str(raw["price"]["amount"]))),
            seller_id=raw["sellerId"],
            stock=raw.get("stock", 0),
            discount=discount,
            pictures=[
                Picture(url=p["url"], main=p.get("main", False), alt=p.get("alt"))
                for p in raw.get("pictures", [])
            ],
            rating=Rating(
                float(raw_rating.get("average", 0.0)), raw_rating.get("count", 0)
            ),
            condition=Condition(raw.get("condition", Condition.NEW.value)),
            free_shipping=raw.get("freeShipping", False),
            categories=raw.get("categories", []),
            attributes=raw.get("attributes", {}),
        )


def _format_moment(moment: datetime | None) -> str | None:
    return moment.isoformat() if moment is not None else None


def _parse_moment(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None
