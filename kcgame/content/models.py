"""
Content records - heroes, enemies, rooms, boons.

Field names follow Python conventions; aliases match the data files.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import Field, field_validator

from kcengine.core.model import DataModel


class HeroRole(str, Enum):
    """Hero card archetypes."""
    ATTACK = "Attack"
    SUPPORT = "Support"


class BoonSource(str, Enum):
    """Who offers a boon: gods give pure benefits, demons trade-offs."""
    GOD = "god"
    DEMON = "demon"


class HeroTemplate(DataModel):
    """
    A hero card definition.

    Attributes:
        id: Unique hero id
        name: Display name
        role: Attack or Support
        base_hp: HP at level 1
        base_attack: Attack at level 1
        passive: Passive ability text
        key: Activation key symbol (lower case)
        ult_charge_needed: Attacks needed to charge the ultimate
        ult_effect: Ultimate ability text
        image: Portrait reference. Heroes without one are not drawable.
    """
    id: str
    name: str
    role: HeroRole = Field(alias="type")
    base_hp: int = Field(alias="baseHP", gt=0)
    base_attack: int = Field(alias="baseAttack", ge=0)
    passive: str = ""
    key: str = Field(min_length=1)
    ult_charge_needed: int = Field(alias="ultChargeNeeded", gt=0)
    ult_effect: str = Field(default="", alias="ultEffect")
    image: Optional[str] = None

    @field_validator("key")
    @classmethod
    def _lower_key(cls, value: str) -> str:
        return value.lower()

    @property
    def has_art(self) -> bool:
        return bool(self.image)


class EnemyTemplate(DataModel):
    """An enemy definition."""
    id: str
    name: str
    hp: int = Field(gt=0)
    attack_power: int = Field(alias="attackPower", ge=0)


class RoomTemplate(DataModel):
    """A dungeon node. `next` lists the ids of the rooms it leads to."""
    id: str
    type: str
    next: tuple[str, ...] = ()


class BoonTemplate(DataModel):
    id: str
    name: str
    effect: str = ""
    source: BoonSource
