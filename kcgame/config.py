"""
Tunable game constants.

Difficulty tuning changes these values, never the formulas that use them.
"""

from __future__ import annotations


class ProgressionConfig:
    """
    Level scaling for hero cards.

    Attributes:
        hp_increment: HP gained per level above 1
        atk_increment: Attack gained per level above 1
        ult_reduction_per_level: Ultimate charge removed per level above 1.
            0 keeps the threshold fixed across levels.
        min_ult_charge: Floor for the ultimate charge threshold
    """

    def __init__(
        self,
        hp_increment: int = 10,
        atk_increment: int = 2,
        ult_reduction_per_level: int = 0,
        min_ult_charge: int = 1,
    ):
        if min_ult_charge < 1:
            raise ValueError("min_ult_charge must be at least 1")
        self.hp_increment = hp_increment
        self.atk_increment = atk_increment
        self.ult_reduction_per_level = ult_reduction_per_level
        self.min_ult_charge = min_ult_charge


DEFAULT_PROGRESSION = ProgressionConfig()


class SessionConfig:
    """
    Configuration for a play session.

    Attributes:
        save_key: Key of the save document in the durable store
        party_size: Heroes brought into each run
        progression: Level scaling used for draws and runs
    """

    def __init__(
        self,
        save_key: str = "kca_save",
        party_size: int = 3,
        progression: ProgressionConfig | None = None,
    ):
        if party_size < 1:
            raise ValueError("party_size must be at least 1")
        self.save_key = save_key
        self.party_size = party_size
        self.progression = progression or DEFAULT_PROGRESSION
