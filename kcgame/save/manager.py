"""
Save/Load system - progression persistence.

Provides:
- SaveRecord: the player's unlocked heroes, levels and currency
- A validated JSON document format for the durable store
- Load with silent fallback to a fresh record
- Reconciliation of saved ids against the current content catalog
- Write-through persist that never raises
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional

from pydantic import Field, ValidationError

from kcengine.core.events import EventBus
from kcengine.core.model import DataModel
from kcengine.core.result import Result
from kcengine.resources.storage import KeyValueStore, StorageError
from kcgame.content.catalog import ContentCatalog

logger = logging.getLogger(__name__)

SAVE_KEY = "kca_save"


class SaveEvent(Enum):
    """Save system events."""
    LOAD_COMPLETED = auto()
    LOAD_FAILED = auto()
    SAVE_COMPLETED = auto()
    SAVE_FAILED = auto()
    RECORD_RECONCILED = auto()


@dataclass
class SaveRecord:
    """
    Persisted progression.

    Attributes:
        unlocked: Unlocked hero ids in unlock order, no duplicates
        levels: Hero id -> level (>= 1), one entry per unlocked id
        currency: Demon Souls balance. Accumulated, not spent yet.
    """
    unlocked: list[str] = field(default_factory=list)
    levels: dict[str, int] = field(default_factory=dict)
    currency: int = 0

    def is_unlocked(self, hero_id: str) -> bool:
        return hero_id in self.unlocked

    def level_of(self, hero_id: str, default: int = 1) -> int:
        return self.levels.get(hero_id, default)


class SaveDocument(DataModel):
    """Wire shape of a SaveRecord in the durable store."""
    unlocked_heroes: list[str] = Field(default_factory=list, alias="unlockedHeroes")
    hero_levels: dict[str, int] = Field(default_factory=dict, alias="heroLevels")
    demon_souls: int = Field(default=0, alias="demonSouls")

    @classmethod
    def from_record(cls, record: SaveRecord) -> SaveDocument:
        return cls(
            unlocked_heroes=list(record.unlocked),
            hero_levels=dict(record.levels),
            demon_souls=record.currency,
        )

    def to_record(self) -> SaveRecord:
        return SaveRecord(
            unlocked=list(self.unlocked_heroes),
            levels=dict(self.hero_levels),
            currency=self.demon_souls,
        )


def serialize_record(record: SaveRecord) -> str:
    """Serialize a record to the stored JSON text."""
    return json.dumps(SaveDocument.from_record(record).to_data(), ensure_ascii=False)


def deserialize_record(text: str) -> SaveRecord:
    """
    Parse stored JSON text.

    Raises:
        ValidationError: Text is not JSON, not an object, or has
            fields of the wrong type
    """
    return SaveDocument.model_validate_json(text).to_record()


def reconcile(record: SaveRecord, catalog: ContentCatalog) -> list[str]:
    """
    Bring a loaded record in line with the current catalog.

    Drops unlocked ids that are not drawable heroes (removed from the
    catalog, or lost their art), then drops level entries for ids that
    are no longer unlocked. Older saves are repaired on the way:
    duplicate ids collapse to their first occurrence, unlocked ids with
    no level get level 1, and levels below 1 become 1.

    Returns:
        The ids that were pruned, in the order they were found
    """
    drawable = {hero.id for hero in catalog.list_heroes_with_art()}
    pruned: list[str] = []
    kept: list[str] = []

    for hero_id in record.unlocked:
        if hero_id in kept:
            continue
        if hero_id in drawable:
            kept.append(hero_id)
        elif hero_id not in pruned:
            pruned.append(hero_id)

    levels: dict[str, int] = {}
    for hero_id in kept:
        levels[hero_id] = max(1, int(record.levels.get(hero_id, 1)))
    for hero_id in record.levels:
        if hero_id not in levels and hero_id not in pruned:
            pruned.append(hero_id)

    record.unlocked[:] = kept
    record.levels.clear()
    record.levels.update(levels)

    if pruned:
        logger.info(f"Pruned stale hero ids from save: {', '.join(pruned)}")
    return pruned


class SaveManager:
    """
    Loads and persists the single SaveRecord of a player.

    Neither load() nor persist() raises: a missing or corrupt save
    becomes a fresh record, and a failed write is logged and reported
    through the returned Result. Losing one action's progression is
    preferred to crashing the session.

    Usage:
        saves = SaveManager(store, catalog)
        record = saves.load()       # already reconciled
        record.currency += 5
        saves.persist(record)       # write-through
    """

    def __init__(
        self,
        store: KeyValueStore,
        catalog: ContentCatalog,
        key: str = SAVE_KEY,
        event_bus: Optional[EventBus] = None,
    ):
        self.store = store
        self.catalog = catalog
        self.key = key
        self.event_bus = event_bus

    def read(self) -> Result[SaveRecord]:
        """Read the stored record without fallback or reconciliation."""
        try:
            text = self.store.get(self.key)
        except (StorageError, OSError) as e:
            return Result.failure(f"read failed: {e}")

        if text is None:
            return Result.failure("no save found")

        try:
            return Result.success(deserialize_record(text))
        except ValidationError as e:
            return Result.failure(f"malformed save: {e.error_count()} error(s), first: {e.errors()[0]['msg']}")

    def load(self) -> SaveRecord:
        """
        Load the player's record, reconciled against the catalog.

        Falls back to an empty record when nothing usable is stored.
        """
        outcome = self.read()
        if outcome.ok:
            record = outcome.value
            if self.event_bus:
                self.event_bus.publish(SaveEvent.LOAD_COMPLETED, key=self.key)
        else:
            logger.warning(f"Using a fresh save for '{self.key}': {outcome.reason}")
            record = SaveRecord()
            if self.event_bus:
                self.event_bus.publish(SaveEvent.LOAD_FAILED, key=self.key, error=outcome.reason)

        pruned = reconcile(record, self.catalog)
        if pruned and self.event_bus:
            self.event_bus.publish(SaveEvent.RECORD_RECONCILED, key=self.key, pruned=pruned)
        return record

    def persist(self, record: SaveRecord) -> Result[None]:
        """Write the record to the store. Failures are logged, not raised."""
        try:
            self.store.set(self.key, serialize_record(record))
        except (StorageError, OSError, TypeError, ValueError) as e:
            logger.error(f"Save failed for '{self.key}': {e}")
            if self.event_bus:
                self.event_bus.publish(SaveEvent.SAVE_FAILED, key=self.key, error=str(e))
            return Result.failure(str(e))

        if self.event_bus:
            self.event_bus.publish(SaveEvent.SAVE_COMPLETED, key=self.key)
        return Result.success()

    def reset(self) -> SaveRecord:
        """Replace the stored record with a fresh one."""
        record = SaveRecord()
        self.persist(record)
        return record
