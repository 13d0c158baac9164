"""
Database adapters package.

This package contains the SQLite-backed implementation of the
collection store used for the cookbook and shopping list.
"""

from .collection_store import SQLiteCollectionStore
from .database import Database

__all__ = [
    "Database",
    "SQLiteCollectionStore",
]
