"""
Input module.

Exports:
- KeyState: Edge-triggered activation key flags
- InputEvent: Key press/release events
"""

from kcengine.input.keys import KeyState, InputEvent, normalize_key

__all__ = [
    "KeyState",
    "InputEvent",
    "normalize_key",
]
