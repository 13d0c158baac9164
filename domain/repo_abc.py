"""
Abstract storage interfaces for the LittleChef domain.

These interfaces define the contract for persisting the user's collections
without specifying the implementation details (database, file system, etc.).
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Sequence, Union

from .entities import SavedRecipe, ShoppingItem

CollectionItem = Union[SavedRecipe, ShoppingItem]


class StorageSlot(str, Enum):
    """Named slots, one per persisted collection."""

    COOKBOOK = "littlechef_cookbook"
    SHOPPING = "littlechef_shopping"


class CollectionStore(ABC):
    """Abstract key/value store for the cookbook and shopping list."""

    @abstractmethod
    def load(self, slot: StorageSlot) -> list:
        """Load a collection; empty when absent or unreadable."""
        pass

    @abstractmethod
    def save(self, slot: StorageSlot, items: Sequence[CollectionItem]) -> None:
        """Replace the stored collection for a slot."""
        pass
