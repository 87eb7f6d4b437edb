"""
Core engine module.

Exports:
- EventBus, Event: Event system
- DataModel: Immutable pydantic base for content records
- Result: Success/failure value for recoverable operations
- KeyCombatError: Base exception
"""

from kcengine.core.errors import KeyCombatError
from kcengine.core.events import EventBus, Event, EventHandler
from kcengine.core.model import DataModel
from kcengine.core.result import Result

__all__ = [
    # Errors
    "KeyCombatError",
    # Events
    "EventBus",
    "Event",
    "EventHandler",
    # Data
    "DataModel",
    "Result",
]
