import os
import sys
import random

import pytest

# Ensure kcengine/kcgame can be imported without installing
sys.path.append(os.getcwd())

from kcengine.core.events import EventBus
from kcengine.resources.storage import MemoryStore
from kcgame.content.catalog import ContentCatalog
from kcgame.save.manager import SaveManager


HEROES = [
    {
        "id": "hero_azal", "name": "Azal", "type": "Attack",
        "baseHP": 90, "baseAttack": 22, "passive": "Infernal Surge",
        "key": "Y", "ultChargeNeeded": 5, "ultEffect": "Burst of flame",
        "image": "azal.png",
    },
    {
        "id": "hero_fyra", "name": "Fyra", "type": "Support",
        "baseHP": 85, "baseAttack": 15, "passive": "Flame Ward",
        "key": "u", "ultChargeNeeded": 4, "ultEffect": "Restores health",
        "image": "fyra.png",
    },
    {
        "id": "hero_lucien", "name": "Lucien", "type": "Attack",
        "baseHP": 95, "baseAttack": 23, "passive": "Blade Dance",
        "key": "i", "ultChargeNeeded": 6, "ultEffect": "Deadly combo",
        "image": "lucien.png",
    },
    # No portrait: never drawable
    {
        "id": "hero_healer", "name": "Sacred Healer", "type": "Support",
        "baseHP": 80, "baseAttack": 10, "passive": "Heal on Combo",
        "key": "r", "ultChargeNeeded": 4, "ultEffect": "Full heal",
    },
]

ENEMIES = [
    {"id": "enemy_goblin", "name": "Goblin Grunt", "hp": 50, "attackPower": 5},
    {"id": "enemy_orc", "name": "Orc Warrior", "hp": 80, "attackPower": 8},
]

ROOMS = [
    {"id": "room_start", "type": "combat", "next": ["room_left", "room_missing"]},
    {"id": "room_left", "type": "reward", "next": []},
]

BOONS = [
    {"id": "god_power", "name": "Blessing of Power", "effect": "+20% attack", "source": "god"},
    {"id": "demon_fury", "name": "Pact of Fury", "effect": "+30% dmg, -10% HP", "source": "demon"},
]


@pytest.fixture
def event_bus():
    """Fresh EventBus for each test."""
    return EventBus()


@pytest.fixture
def catalog():
    """Small catalog: three drawable heroes, one without art, two enemies."""
    return ContentCatalog.from_data(heroes=HEROES, enemies=ENEMIES, rooms=ROOMS, boons=BOONS)


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def save_manager(store, catalog):
    return SaveManager(store, catalog)


@pytest.fixture
def rng():
    """Seeded RNG so draws are repeatable."""
    return random.Random(1234)


class FixedChoice(random.Random):
    """Random whose choice() always returns the item at a given index."""

    def __init__(self, index=0):
        super().__init__(0)
        self.index = index

    def choice(self, seq):
        return seq[self.index]


@pytest.fixture
def pick():
    """Factory for RNGs that always draw the hero at an index."""
    return FixedChoice
