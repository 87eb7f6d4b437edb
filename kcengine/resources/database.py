"""
Content Database.

Handles loading and validation of static game data (heroes, enemies,
rooms, boons). Each category lives in its own folder of JSON files and
is validated against a JSON schema from the schemas folder.

Layout:
    <data_path>/schemas/hero.schema.json
    <data_path>/database/heroes/*.json
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jsonschema


@dataclass(frozen=True)
class Category:
    """A content category: its folder and the schema its entries obey."""
    name: str
    folder: str
    schema_name: str


class Database:
    """
    Central storage for raw static game data.

    Entries keep declaration order: files are read in name order and
    entries in file order. Order matters to callers (gacha pool order,
    "first enemy" encounters), so categories are stored as lists.
    """

    def __init__(self, data_path: Path | str, categories: list[Category]):
        self._data_path = Path(data_path)
        self._categories = list(categories)
        self._schemas: dict[str, Any] = {}
        self._entries: dict[str, list[dict[str, Any]]] = {c.name: [] for c in categories}

        self.logger = logging.getLogger(__name__)

    def load_all(self) -> None:
        """Load all categories from disk."""
        self._load_schemas()

        for category in self._categories:
            self._entries[category.name] = self._load_category(category)

        self.logger.info(
            "Loaded " + ", ".join(
                f"{len(self._entries[c.name])} {c.name}" for c in self._categories
            ) + "."
        )

    def entries(self, name: str) -> list[dict[str, Any]]:
        """Raw entries of a category, in declaration order."""
        return list(self._entries.get(name, []))

    def get(self, name: str, entry_id: str) -> dict[str, Any] | None:
        for entry in self._entries.get(name, []):
            if entry.get('id') == entry_id:
                return entry
        return None

    def _load_schemas(self) -> None:
        """Load JSON schemas."""
        schema_dir = self._data_path / "schemas"
        if not schema_dir.exists():
            self.logger.warning(f"Schema directory not found: {schema_dir}")
            return

        for schema_file in sorted(schema_dir.glob("*.schema.json")):
            try:
                with open(schema_file, 'r', encoding='utf-8') as f:
                    self._schemas[schema_file.name] = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                self.logger.error(f"Failed to load schema {schema_file}: {e}")

    def _load_category(self, category: Category) -> list[dict[str, Any]]:
        """Load and validate every JSON file in a category folder."""
        category_dir = self._data_path / "database" / category.folder
        loaded: list[dict[str, Any]] = []
        seen: set[str] = set()

        if not category_dir.exists():
            self.logger.warning(f"Data directory not found: {category_dir}")
            return loaded

        schema = self._schemas.get(category.schema_name)
        if not schema:
            self.logger.warning(f"No schema found for {category.folder} ({category.schema_name})")
            return loaded

        for file_path in sorted(category_dir.glob("*.json")):
            try:
                with open(file_path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                self.logger.error(f"Failed to load {file_path}: {e}")
                continue

            items = data if isinstance(data, list) else [data]
            for item in items:
                try:
                    jsonschema.validate(instance=item, schema=schema)
                except jsonschema.ValidationError as e:
                    self.logger.error(f"Validation error in {file_path}: {e.message}")
                    continue

                if item['id'] in seen:
                    self.logger.warning(f"Duplicate {category.name} id '{item['id']}' in {file_path}, skipped")
                    continue
                seen.add(item['id'])
                loaded.append(item)

        return loaded
