"""
Content module - static game data.

Provides:
- Hero, enemy, room and boon records
- The ContentCatalog lookup tables
- Loading from the packaged JSON data
"""

from kcgame.content.models import (
    HeroTemplate,
    HeroRole,
    EnemyTemplate,
    RoomTemplate,
    BoonTemplate,
    BoonSource,
)
from kcgame.content.catalog import (
    ContentCatalog,
    CatalogError,
    load_catalog,
    DATA_PATH,
)

__all__ = [
    # Records
    "HeroTemplate",
    "HeroRole",
    "EnemyTemplate",
    "RoomTemplate",
    "BoonTemplate",
    "BoonSource",
    # Catalog
    "ContentCatalog",
    "CatalogError",
    "load_catalog",
    "DATA_PATH",
]
