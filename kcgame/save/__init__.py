"""
Save module - progression persistence.

Provides:
- SaveRecord and its stored document format
- SaveManager load/persist
- Reconciliation against the content catalog
"""

from kcgame.save.manager import (
    SaveManager,
    SaveRecord,
    SaveDocument,
    SaveEvent,
    SAVE_KEY,
    reconcile,
    serialize_record,
    deserialize_record,
)

__all__ = [
    "SaveManager",
    "SaveRecord",
    "SaveDocument",
    "SaveEvent",
    "SAVE_KEY",
    "reconcile",
    "serialize_record",
    "deserialize_record",
]
