"""JSON-file-backed implementation of CatalogRegistry.

The file is read once at construction; the registry never changes
afterwards, which is what lets a report treat the catalog as fixed.
"""

from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path

from foodops.domain.exceptions import StorageError, ValidationError
from foodops.domain.model.catalog import CatalogEntry, Category
from foodops.domain.model.value_objects import Money
from foodops.domain.repository.catalog_registry import CatalogRegistry

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parents[1] / "data" / "catalog.json"


class JsonCatalogRegistry(CatalogRegistry):

    def __init__(self, file_path: Path = DEFAULT_CATALOG_PATH) -> None:
        self._file_path = file_path
        self._categories, self._entries = self._load()
        self._by_name = {entry.product_name: entry for entry in self._entries}

    # --- CatalogRegistry interface --------------------------------------------

    def lookup_category(self, product_name: str) -> Category | None:
        entry = self._by_name.get(product_name)
        return entry.category if entry is not None else None

    def list_categories(self) -> list[Category]:
        return list(self._categories)

    def list_entries(self) -> list[CatalogEntry]:
        return list(self._entries)

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> tuple[list[Category], list[CatalogEntry]]:
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
            categories = [Category(id=c["id"], name=c["name"]) for c in raw["categories"]]
            by_id = {c.id: c for c in categories}
            entries = [
                CatalogEntry(
                    product_name=p["name"],
                    category=by_id[p["category"]],
                    price=Money(Decimal(str(p["price"]))),
                )
                for p in raw["products"]
            ]
        except (OSError, ValueError, KeyError, TypeError, ValidationError) as exc:
            raise StorageError(f"Cannot read catalog {self._file_path}: {exc}") from exc
        return categories, entries
