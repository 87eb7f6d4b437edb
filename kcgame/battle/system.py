"""
Battle system - key-press combat controller.

There are no turns: each tick, every hero whose activation key was
pressed attacks once. The encounter ends when the resolver says so.

Extension points for gameplay that does not exist yet:
- EncounterBuilder: which enemies a run faces (default: first enemy)
- EnemyBehavior: what enemies do each tick (default: nothing)
- EncounterResolver: when a fight is won or lost (default: won when
  every enemy is down, never lost)
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum, auto
from typing import Optional

from kcengine.core.events import EventBus
from kcengine.input.keys import KeyState, normalize_key
from kcgame.battle.actions import attack, try_ultimate
from kcgame.battle.actor import EnemyUnit, HeroUnit, create_enemy_unit, create_hero_unit
from kcgame.config import DEFAULT_PROGRESSION, ProgressionConfig
from kcgame.content.catalog import ContentCatalog
from kcgame.save.manager import SaveRecord

logger = logging.getLogger(__name__)


class CombatEvent(Enum):
    """Combat events."""
    HERO_ATTACKED = auto()
    ULTIMATE_USED = auto()
    ENEMY_DEFEATED = auto()
    COMBAT_ENDED = auto()


class CombatOutcome(Enum):
    """State of an encounter."""
    ONGOING = auto()
    VICTORY = auto()
    DEFEAT = auto()


def build_party(
    record: SaveRecord,
    catalog: ContentCatalog,
    max_size: int = 3,
    config: ProgressionConfig = DEFAULT_PROGRESSION,
) -> list[HeroUnit]:
    """
    Build the run's party.

    Uses the first max_size unlocked heroes in unlock order once the
    player owns that many. Until then the first max_size drawable
    catalog heroes stand in, so a fresh player can still play.
    """
    if len(record.unlocked) >= max_size:
        hero_ids = record.unlocked[:max_size]
    else:
        hero_ids = [hero.id for hero in catalog.list_heroes_with_art()[:max_size]]

    party = []
    for hero_id in hero_ids:
        template = catalog.find_hero(hero_id)
        if template is None:
            logger.warning(f"Skipping unknown hero '{hero_id}' in party")
            continue
        party.append(create_hero_unit(template, record.level_of(hero_id), config))
    return party


def build_encounter(catalog: ContentCatalog) -> list[EnemyUnit]:
    """Single-enemy encounter against the first enemy in the catalog."""
    enemies = catalog.enemies
    if not enemies:
        return []
    return [create_enemy_unit(enemies[0])]


class EncounterBuilder(ABC):
    """Chooses the enemies of an encounter."""

    @abstractmethod
    def build(self, catalog: ContentCatalog) -> list[EnemyUnit]:
        pass


class FirstEnemyEncounter(EncounterBuilder):
    def build(self, catalog: ContentCatalog) -> list[EnemyUnit]:
        return build_encounter(catalog)


class EnemyBehavior(ABC):
    """Acts for the enemies once per tick, after the heroes."""

    @abstractmethod
    def act(self, session: CombatSession) -> None:
        pass


class PassiveEnemy(EnemyBehavior):
    """Enemies do not retaliate."""

    def act(self, session: CombatSession) -> None:
        pass


class EncounterResolver(ABC):
    """Decides whether an encounter is over."""

    @abstractmethod
    def resolve(self, session: CombatSession) -> CombatOutcome:
        pass


class EnemyDefeatedResolver(EncounterResolver):
    """Victory once every enemy is at 0 HP. The party cannot lose."""

    def resolve(self, session: CombatSession) -> CombatOutcome:
        if session.enemies and not any(e.is_alive for e in session.enemies):
            return CombatOutcome.VICTORY
        return CombatOutcome.ONGOING


class CombatSession:
    """
    One run's combat state.

    Owns its units exclusively. Mutations go through process_keys() and
    ultimate(), which route to kcgame.battle.actions.

    Usage:
        session = CombatSession(build_party(record, catalog), build_encounter(catalog))
        keys.press("y")
        session.process_keys(keys)
        if session.is_over:
            ...
    """

    def __init__(
        self,
        party: list[HeroUnit],
        enemies: list[EnemyUnit],
        resolver: Optional[EncounterResolver] = None,
        behavior: Optional[EnemyBehavior] = None,
        event_bus: Optional[EventBus] = None,
    ):
        self.party = party
        self.enemies = enemies
        self.resolver = resolver or EnemyDefeatedResolver()
        self.behavior = behavior or PassiveEnemy()
        self.event_bus = event_bus

        self.outcome = CombatOutcome.ONGOING
        self.ticks = 0

    @property
    def is_over(self) -> bool:
        return self.outcome is not CombatOutcome.ONGOING

    @property
    def target(self) -> Optional[EnemyUnit]:
        """First living enemy, or the first enemy if all are down."""
        for enemy in self.enemies:
            if enemy.is_alive:
                return enemy
        return self.enemies[0] if self.enemies else None

    def hero_for_key(self, key: str) -> Optional[HeroUnit]:
        key = normalize_key(key)
        for hero in self.party:
            if hero.key == key:
                return hero
        return None

    def process_keys(self, keys: KeyState) -> CombatOutcome:
        """
        Run one tick.

        Every hero whose key is pressed attacks the target once, and
        the key's pressed flag is consumed.
        """
        if self.is_over:
            return self.outcome

        self.ticks += 1
        for hero in self.party:
            if not keys.is_pressed(hero.key):
                continue
            keys.consume(hero.key)
            target = self.target
            if target is None:
                continue
            was_alive = target.is_alive
            damage = attack(hero, target)
            self._publish(CombatEvent.HERO_ATTACKED, hero=hero, target=target, damage=damage)
            self._check_defeated(target, was_alive)

        self.behavior.act(self)
        return self._resolve()

    def ultimate(self, key: str, charge_fraction: float = 1.0) -> int:
        """
        Fire the ultimate of the hero bound to key.

        Returns:
            Damage dealt, 0 when nothing happened
        """
        hero = self.hero_for_key(key)
        target = self.target
        if self.is_over or hero is None or target is None:
            return 0

        if not hero.ult_ready:
            return 0

        was_alive = target.is_alive
        damage = try_ultimate(hero, target, charge_fraction)
        self._publish(CombatEvent.ULTIMATE_USED, hero=hero, target=target, damage=damage)
        self._check_defeated(target, was_alive)
        self._resolve()
        return damage

    def _check_defeated(self, enemy: EnemyUnit, was_alive: bool) -> None:
        if was_alive and not enemy.is_alive:
            logger.debug(f"{enemy.name} defeated")
            self._publish(CombatEvent.ENEMY_DEFEATED, enemy=enemy)

    def _resolve(self) -> CombatOutcome:
        outcome = self.resolver.resolve(self)
        if outcome is not CombatOutcome.ONGOING and self.outcome is CombatOutcome.ONGOING:
            self.outcome = outcome
            logger.info(f"Combat ended: {outcome.name} after {self.ticks} ticks")
            self._publish(CombatEvent.COMBAT_ENDED, outcome=outcome)
        return self.outcome

    def _publish(self, event_type: CombatEvent, **data) -> None:
        if self.event_bus:
            self.event_bus.publish(event_type, **data)
