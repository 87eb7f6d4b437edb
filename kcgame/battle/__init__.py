"""
Battle module - key-press combat.

Provides:
- Hero and enemy units
- Attack / ultimate / damage actions
- Party and encounter building
- The per-tick combat session and its extension points
"""

from kcgame.battle.actor import (
    CombatUnit,
    HeroUnit,
    EnemyUnit,
    create_hero_unit,
    create_enemy_unit,
)
from kcgame.battle.actions import attack, try_ultimate, take_damage
from kcgame.battle.system import (
    CombatSession,
    CombatEvent,
    CombatOutcome,
    EncounterBuilder,
    FirstEnemyEncounter,
    EnemyBehavior,
    PassiveEnemy,
    EncounterResolver,
    EnemyDefeatedResolver,
    build_party,
    build_encounter,
)

__all__ = [
    # Actor
    "CombatUnit",
    "HeroUnit",
    "EnemyUnit",
    "create_hero_unit",
    "create_enemy_unit",
    # Actions
    "attack",
    "try_ultimate",
    "take_damage",
    # System
    "CombatSession",
    "CombatEvent",
    "CombatOutcome",
    "EncounterBuilder",
    "FirstEnemyEncounter",
    "EnemyBehavior",
    "PassiveEnemy",
    "EncounterResolver",
    "EnemyDefeatedResolver",
    "build_party",
    "build_encounter",
]
