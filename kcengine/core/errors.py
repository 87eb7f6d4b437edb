"""
Base exception for the engine and game framework.
"""


class KeyCombatError(Exception):
    """Root of every error raised on purpose by kcengine/kcgame."""
