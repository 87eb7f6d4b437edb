"""
Gacha draws - unlock new heroes or level up owned ones.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Optional

from kcengine.core.events import EventBus
from kcgame.config import DEFAULT_PROGRESSION, ProgressionConfig
from kcgame.content.catalog import ContentCatalog
from kcgame.content.models import HeroTemplate
from kcgame.progression.leveling import LeveledStats, compute_leveled_stats
from kcgame.save.manager import SaveManager, SaveRecord

logger = logging.getLogger(__name__)


class ProgressionEvent(Enum):
    """Progression events."""
    HERO_UNLOCKED = auto()
    HERO_LEVELED = auto()


@dataclass(frozen=True)
class DrawResult:
    """
    Outcome of one draw.

    Attributes:
        template: The hero that was drawn
        is_new: True if the draw unlocked the hero
        old_stats: Stats before the draw (None for a new hero)
        new_stats: Stats at new_level
        new_level: The hero's level after the draw
    """
    template: HeroTemplate
    is_new: bool
    old_stats: Optional[LeveledStats]
    new_stats: LeveledStats
    new_level: int


def draw(
    record: SaveRecord,
    catalog: ContentCatalog,
    persist: Callable[[SaveRecord], Any],
    rng: Optional[random.Random] = None,
    config: ProgressionConfig = DEFAULT_PROGRESSION,
) -> DrawResult:
    """
    Draw one hero uniformly from the drawable pool and apply it.

    A new hero is unlocked at level 1; an owned hero gains exactly one
    level. The record is persisted before returning.

    The pool must not be empty; ContentCatalog.validate() guarantees
    that at startup.
    """
    template = (rng or random).choice(catalog.list_heroes_with_art())
    hero_id = template.id

    was_unlocked = record.is_unlocked(hero_id)
    old_level = record.levels.get(hero_id, 0)
    old_stats = compute_leveled_stats(template, max(1, old_level), config) if was_unlocked else None

    new_level = old_level + 1 if was_unlocked else 1
    record.levels[hero_id] = new_level
    if not was_unlocked:
        record.unlocked.append(hero_id)
    new_stats = compute_leveled_stats(template, new_level, config)

    persist(record)

    return DrawResult(
        template=template,
        is_new=not was_unlocked,
        old_stats=old_stats,
        new_stats=new_stats,
        new_level=new_level,
    )


class GachaService:
    """
    Draws bound to a SaveManager.

    Holds no progression state of its own: the record is passed in on
    every call and persisted through the save manager.

    Usage:
        gacha = GachaService(save_manager, catalog)
        result = gacha.draw(record)
        if result.is_new:
            show_unlock(result.template)
    """

    def __init__(
        self,
        save_manager: SaveManager,
        catalog: ContentCatalog,
        rng: Optional[random.Random] = None,
        config: Optional[ProgressionConfig] = None,
        event_bus: Optional[EventBus] = None,
    ):
        self.save_manager = save_manager
        self.catalog = catalog
        self.rng = rng or random.Random()
        self.config = config or DEFAULT_PROGRESSION
        self.event_bus = event_bus

    def draw(self, record: SaveRecord) -> DrawResult:
        result = draw(record, self.catalog, self.save_manager.persist, self.rng, self.config)

        hero_id = result.template.id
        if result.is_new:
            logger.info(f"Unlocked {hero_id}")
        else:
            logger.info(f"{hero_id} leveled up to {result.new_level}")

        if self.event_bus:
            event = ProgressionEvent.HERO_UNLOCKED if result.is_new else ProgressionEvent.HERO_LEVELED
            self.event_bus.publish(event, hero_id=hero_id, level=result.new_level, result=result)
        return result
