"""
Activation key state.

The browser front end reports raw keydown/keyup events. Combat only
cares about discrete presses: holding a key must produce exactly one
action, so every pressed flag is consumed by whoever acts on it.

Usage:
    keys = KeyState()
    keys.press("E")
    if keys.consume("e"):
        ...  # one attack
    keys.consume("e")  # False until the key is pressed again
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable

from kcengine.core.events import EventBus


class InputEvent(Enum):
    """Input-specific events."""
    KEY_PRESSED = "input.key_pressed"
    KEY_RELEASED = "input.key_released"


def normalize_key(key: str) -> str:
    """Keys are matched case-insensitively."""
    return key.lower()


class KeyState:
    """
    Pressed flags per key symbol.

    A flag is raised on press and cleared either on release or when it
    is consumed. A held key that was already consumed stays "down" but
    does not become pressed again until it is released and pressed.
    """

    def __init__(self, event_bus: EventBus | None = None):
        self.event_bus = event_bus
        self._pressed: set[str] = set()
        self._held: set[str] = set()

    def press(self, key: str) -> None:
        """Handle key down. Auto-repeat while held is ignored."""
        key = normalize_key(key)
        if key in self._held:
            return
        self._held.add(key)
        self._pressed.add(key)
        if self.event_bus:
            self.event_bus.publish(InputEvent.KEY_PRESSED, key=key)

    def release(self, key: str) -> None:
        """Handle key up."""
        key = normalize_key(key)
        self._held.discard(key)
        self._pressed.discard(key)
        if self.event_bus:
            self.event_bus.publish(InputEvent.KEY_RELEASED, key=key)

    def is_pressed(self, key: str) -> bool:
        return normalize_key(key) in self._pressed

    def is_held(self, key: str) -> bool:
        return normalize_key(key) in self._held

    def consume(self, key: str) -> bool:
        """Clear the pressed flag. Returns whether it was set."""
        key = normalize_key(key)
        if key in self._pressed:
            self._pressed.discard(key)
            return True
        return False

    def pressed_keys(self) -> set[str]:
        return set(self._pressed)

    def reset(self, keys: Iterable[str] | None = None) -> None:
        """Forget all (or some) key state, e.g. when a screen changes."""
        if keys is None:
            self._pressed.clear()
            self._held.clear()
            return
        for key in keys:
            key = normalize_key(key)
            self._pressed.discard(key)
            self._held.discard(key)
