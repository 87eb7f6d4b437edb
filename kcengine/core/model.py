"""
Base class for immutable content records.

Content tables (heroes, enemies, rooms, boons) are plain data. They are
validated once when loaded and never modified afterwards.

Usage:
    class EnemyTemplate(DataModel):
        id: str
        name: str
        hp: int = Field(gt=0)
        attack_power: int = Field(alias="attackPower")
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class DataModel(BaseModel):
    """
    Base class for all content records.

    Uses Pydantic for:
    - Validation of raw JSON-shaped data
    - Field aliases (camelCase data files, snake_case attributes)
    - Immutability (frozen instances are hashable and safe to share)
    """

    model_config = ConfigDict(
        frozen=True,
        # Accept both the data-file alias and the attribute name
        populate_by_name=True,
        # Content files may carry fields this engine does not use
        extra='ignore',
    )

    @classmethod
    def from_data(cls, data: dict[str, Any]) -> DataModel:
        """Validate a raw dictionary into a record."""
        return cls.model_validate(data)

    def to_data(self) -> dict[str, Any]:
        """Dump back to the data-file shape (aliased keys)."""
        return self.model_dump(by_alias=True, exclude_none=True)
