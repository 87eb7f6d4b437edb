"""
Battle actions - the only operations that change a unit.
"""

from __future__ import annotations

from kcgame.battle.actor import CombatUnit, HeroUnit


def take_damage(unit: CombatUnit, amount: int) -> int:
    """
    Reduce a unit's HP, never below 0.

    Returns:
        HP actually lost
    """
    before = unit.hp
    unit.hp = max(0, unit.hp - amount)
    return before - unit.hp


def attack(hero: HeroUnit, target: CombatUnit) -> int:
    """
    Basic attack: base_attack x level damage, +1 ultimate meter.

    The meter is not capped; try_ultimate only checks the threshold.

    Returns:
        Damage dealt (before the HP floor)
    """
    damage = hero.base_attack * hero.level
    take_damage(target, damage)
    hero.ult_meter += 1
    return damage


def try_ultimate(hero: HeroUnit, target: CombatUnit, charge_fraction: float = 1.0) -> int:
    """
    Fire the ultimate if the meter is full.

    Deals base_attack x 2 x level x charge_fraction, truncated to an
    int, and empties the meter. A meter below the threshold makes this
    a no-op.

    Returns:
        Damage dealt, 0 if the ultimate was not ready
    """
    if hero.ult_meter < hero.ult_charge_needed:
        return 0

    damage = int(hero.base_attack * 2 * hero.level * charge_fraction)
    take_damage(target, damage)
    hero.ult_meter = 0
    return damage
