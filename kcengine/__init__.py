"""
Key Combat Engine

Generic building blocks shared by the game framework: typed events,
immutable data models, result values, edge-triggered key state, content
loading and key-value storage.

Quick Start:
    from kcengine.core import EventBus
    from kcengine.resources import MemoryStore

    bus = EventBus()
    store = MemoryStore()
"""

__version__ = "0.1.0"

from kcengine.core import (
    DataModel,
    EventBus,
    Event,
    KeyCombatError,
    Result,
)
from kcengine.input import KeyState

__all__ = [
    "DataModel",
    "EventBus",
    "Event",
    "KeyCombatError",
    "Result",
    "KeyState",
]
