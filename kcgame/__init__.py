"""
Key Combat game framework.

Provides game-specific systems built on top of kcengine:
- Content (hero, enemy, room and boon tables)
- Save (progression persistence and reconciliation)
- Progression (level scaling, gacha draws)
- Battle (key-press combat)
- Session (screen state machine)
"""

__version__ = "0.1.0"
