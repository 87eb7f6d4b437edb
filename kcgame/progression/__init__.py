"""
Progression module - hero levels and gacha draws.

Provides:
- Level scaling formulas
- Gacha draws that unlock or level heroes
"""

from kcgame.progression.leveling import LeveledStats, compute_leveled_stats
from kcgame.progression.gacha import (
    DrawResult,
    GachaService,
    ProgressionEvent,
    draw,
)

__all__ = [
    # Leveling
    "LeveledStats",
    "compute_leveled_stats",
    # Gacha
    "DrawResult",
    "GachaService",
    "ProgressionEvent",
    "draw",
]
