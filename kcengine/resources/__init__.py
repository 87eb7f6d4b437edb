"""
Resources module - static content and durable storage.

Exports:
- Database: JSON content loader with schema validation
- KeyValueStore, MemoryStore, JsonFileStore: Durable key-value storage
- StorageError: Raised by stores when the medium fails
"""

from kcengine.resources.database import Database, Category
from kcengine.resources.storage import (
    KeyValueStore,
    MemoryStore,
    JsonFileStore,
    StorageError,
)

__all__ = [
    "Database",
    "Category",
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
    "StorageError",
]
