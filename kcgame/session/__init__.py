"""
Session module - screen flow for one player.

Provides:
- SessionController state machine
- SessionContext owning the save record and active combat
"""

from kcgame.session.controller import (
    SessionController,
    SessionContext,
    SessionState,
    SessionEvent,
)

__all__ = [
    "SessionController",
    "SessionContext",
    "SessionState",
    "SessionEvent",
]
