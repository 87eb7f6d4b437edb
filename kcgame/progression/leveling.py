"""
Level scaling for hero cards.
"""

from __future__ import annotations

from dataclasses import dataclass

from kcgame.config import DEFAULT_PROGRESSION, ProgressionConfig
from kcgame.content.models import HeroTemplate


@dataclass(frozen=True)
class LeveledStats:
    """Stats of a hero at a given level. Derived, never stored."""
    hp: int
    attack: int
    ult_charge_needed: int


def compute_leveled_stats(
    template: HeroTemplate,
    level: int,
    config: ProgressionConfig = DEFAULT_PROGRESSION,
) -> LeveledStats:
    """
    Compute a hero's stats at a level.

    HP and attack grow linearly from the template's base values. The
    ultimate charge threshold only shrinks when the config asks for it;
    with the default config it is the template's value at every level.

    Raises:
        ValueError: level is below 1
    """
    if level < 1:
        raise ValueError(f"Level must be at least 1, got {level}")

    steps = level - 1
    ult = template.ult_charge_needed
    if config.ult_reduction_per_level:
        ult = max(config.min_ult_charge, ult - steps * config.ult_reduction_per_level)

    return LeveledStats(
        hp=template.base_hp + steps * config.hp_increment,
        attack=template.base_attack + steps * config.atk_increment,
        ult_charge_needed=ult,
    )
