"""
SQLite implementation of CollectionStore.
"""

import json
import logging
import threading
from typing import Callable, Dict, List, Sequence

from domain.entities import SavedRecipe, ShoppingItem
from domain.repo_abc import CollectionItem, CollectionStore, StorageSlot

from .database import Database

logger = logging.getLogger(__name__)

_DECODERS: Dict[StorageSlot, Callable[[dict], CollectionItem]] = {
    StorageSlot.COOKBOOK: SavedRecipe.from_dict,
    StorageSlot.SHOPPING: ShoppingItem.from_dict,
}


class SQLiteCollectionStore(CollectionStore):
    """Stores each collection as one JSON array under its slot key."""

    def __init__(self, db: Database):
        self.db = db
        self._lock = threading.RLock()

    def load(self, slot: StorageSlot) -> List[CollectionItem]:
        """Load a collection, treating missing or corrupt data as empty."""
        with self._lock:
            raw = self.db.get_item(slot.value)

        if raw is None:
            return []

        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise TypeError(f"expected a list, got {type(data).__name__}")
            decode = _DECODERS[slot]
            return [decode(entry) for entry in data]
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(
                f"Ignoring unreadable data in slot '{slot.value}': {e}"
            )
            return []

    def save(self, slot: StorageSlot, items: Sequence[CollectionItem]) -> None:
        """Write the whole collection for a slot immediately."""
        payload = json.dumps([item.to_dict() for item in items])
        with self._lock:
            self.db.set_item(slot.value, payload)
        logger.debug(f"Saved {len(items)} entries to slot '{slot.value}'")
