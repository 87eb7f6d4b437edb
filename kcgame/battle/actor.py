"""
Battle actors - the live units of one combat run.

Units are plain mutable records. They are created at run start from the
save record and catalog, changed only through kcgame.battle.actions,
and thrown away when the run ends.
"""

from __future__ import annotations

from dataclasses import dataclass

from kcgame.config import DEFAULT_PROGRESSION, ProgressionConfig
from kcgame.content.models import EnemyTemplate, HeroTemplate
from kcgame.progression.leveling import compute_leveled_stats


@dataclass
class CombatUnit:
    """HP shared by every unit."""
    name: str
    max_hp: int
    hp: int

    @property
    def is_alive(self) -> bool:
        return self.hp > 0

    @property
    def hp_percent(self) -> float:
        return self.hp / self.max_hp if self.max_hp > 0 else 0.0


@dataclass
class HeroUnit(CombatUnit):
    """
    A hero card in combat.

    Attributes:
        hero_id: Catalog id
        key: Activation key symbol
        level: Level the unit was built at
        base_attack: Leveled attack stat
        ult_charge_needed: Meter value that unlocks the ultimate
        ult_meter: Attacks landed since the last ultimate
    """
    hero_id: str = ""
    key: str = ""
    level: int = 1
    base_attack: int = 0
    ult_charge_needed: int = 1
    ult_meter: int = 0

    @property
    def current_hp(self) -> int:
        return self.hp

    @property
    def ult_ready(self) -> bool:
        return self.ult_meter >= self.ult_charge_needed


@dataclass
class EnemyUnit(CombatUnit):
    """An enemy in combat."""
    enemy_id: str = ""
    attack_power: int = 0


def create_hero_unit(
    template: HeroTemplate,
    level: int = 1,
    config: ProgressionConfig = DEFAULT_PROGRESSION,
) -> HeroUnit:
    """Create a full-health HeroUnit at a level."""
    stats = compute_leveled_stats(template, level, config)
    return HeroUnit(
        name=template.name,
        max_hp=stats.hp,
        hp=stats.hp,
        hero_id=template.id,
        key=template.key,
        level=level,
        base_attack=stats.attack,
        ult_charge_needed=stats.ult_charge_needed,
    )


def create_enemy_unit(template: EnemyTemplate) -> EnemyUnit:
    return EnemyUnit(
        name=template.name,
        max_hp=template.hp,
        hp=template.hp,
        enemy_id=template.id,
        attack_power=template.attack_power,
    )
