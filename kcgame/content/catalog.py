"""
Content Catalog - read-only lookup tables for game content.

Lookups are exact-match by id and return None for unknown ids: saves
routinely reference heroes that a newer content version removed.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, Optional

from kcengine.core.errors import KeyCombatError
from kcengine.resources.database import Category, Database
from kcgame.content.models import (
    BoonSource,
    BoonTemplate,
    EnemyTemplate,
    HeroTemplate,
    RoomTemplate,
)

logger = logging.getLogger(__name__)

DATA_PATH = Path(__file__).resolve().parent.parent / "data"

CATEGORIES = [
    Category("heroes", "heroes", "hero.schema.json"),
    Category("enemies", "enemies", "enemy.schema.json"),
    Category("rooms", "rooms", "room.schema.json"),
    Category("boons", "boons", "boon.schema.json"),
]


class CatalogError(KeyCombatError):
    """The content tables cannot support a game session."""


class ContentCatalog:
    """
    Immutable content tables, in declaration order.

    Usage:
        catalog = load_catalog()
        hero = catalog.find_hero("hero_azal")
        pool = catalog.list_heroes_with_art()
    """

    def __init__(
        self,
        heroes: Iterable[HeroTemplate] = (),
        enemies: Iterable[EnemyTemplate] = (),
        rooms: Iterable[RoomTemplate] = (),
        boons: Iterable[BoonTemplate] = (),
    ):
        self._heroes = tuple(heroes)
        self._enemies = tuple(enemies)
        self._rooms = tuple(rooms)
        self._boons = tuple(boons)

        self._hero_index = {h.id: h for h in self._heroes}
        self._enemy_index = {e.id: e for e in self._enemies}
        self._room_index = {r.id: r for r in self._rooms}
        self._boon_index = {b.id: b for b in self._boons}
        self._with_art = tuple(h for h in self._heroes if h.has_art)

    @classmethod
    def from_data(
        cls,
        heroes: Iterable[dict[str, Any]] = (),
        enemies: Iterable[dict[str, Any]] = (),
        rooms: Iterable[dict[str, Any]] = (),
        boons: Iterable[dict[str, Any]] = (),
    ) -> ContentCatalog:
        """Build a catalog from data-file shaped dictionaries."""
        return cls(
            heroes=[HeroTemplate.model_validate(h) for h in heroes],
            enemies=[EnemyTemplate.model_validate(e) for e in enemies],
            rooms=[RoomTemplate.model_validate(r) for r in rooms],
            boons=[BoonTemplate.model_validate(b) for b in boons],
        )

    # Lookups

    def find_hero(self, hero_id: str) -> Optional[HeroTemplate]:
        return self._hero_index.get(hero_id)

    def find_enemy(self, enemy_id: str) -> Optional[EnemyTemplate]:
        return self._enemy_index.get(enemy_id)

    def find_room(self, room_id: str) -> Optional[RoomTemplate]:
        return self._room_index.get(room_id)

    def find_boon(self, boon_id: str) -> Optional[BoonTemplate]:
        return self._boon_index.get(boon_id)

    def list_heroes_with_art(self) -> list[HeroTemplate]:
        """Drawable heroes (those with a portrait), in declaration order."""
        return list(self._with_art)

    def next_rooms(self, room_id: str) -> list[RoomTemplate]:
        """Rooms linked from room_id. Dangling links are skipped."""
        room = self.find_room(room_id)
        if room is None:
            return []
        return [self._room_index[n] for n in room.next if n in self._room_index]

    def gods(self) -> list[BoonTemplate]:
        return [b for b in self._boons if b.source is BoonSource.GOD]

    def demons(self) -> list[BoonTemplate]:
        return [b for b in self._boons if b.source is BoonSource.DEMON]

    # Tables

    @property
    def heroes(self) -> list[HeroTemplate]:
        return list(self._heroes)

    @property
    def enemies(self) -> list[EnemyTemplate]:
        return list(self._enemies)

    @property
    def rooms(self) -> list[RoomTemplate]:
        return list(self._rooms)

    @property
    def boons(self) -> list[BoonTemplate]:
        return list(self._boons)

    def validate(self) -> None:
        """
        Check the catalog can run a session.

        Raises:
            CatalogError: No drawable hero, or no enemy to fight
        """
        if not self._with_art:
            raise CatalogError("Catalog has no heroes with art; the gacha pool is empty")
        if not self._enemies:
            raise CatalogError("Catalog has no enemies; encounters cannot be built")


def load_catalog(data_path: Path | str | None = None) -> ContentCatalog:
    """
    Load and validate the content tables from disk.

    Args:
        data_path: Root holding schemas/ and database/. Defaults to the
            content packaged with kcgame.

    Raises:
        CatalogError: The loaded content cannot support a session
    """
    db = Database(data_path or DATA_PATH, CATEGORIES)
    db.load_all()
    catalog = ContentCatalog.from_data(
        heroes=db.entries("heroes"),
        enemies=db.entries("enemies"),
        rooms=db.entries("rooms"),
        boons=db.entries("boons"),
    )
    catalog.validate()
    logger.debug(f"Catalog ready: {len(catalog.list_heroes_with_art())} drawable heroes")
    return catalog
