"""Read-only port onto the menu catalog.

Defined in the domain layer so the analytics service never depends on
where the menu comes from.  Implementations must not change while a
report is being computed.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from foodops.domain.model.catalog import CatalogEntry, Category


class CatalogRegistry(ABC):

    @abstractmethod
    def lookup_category(self, product_name: str) -> Category | None:
        """Return the category of the product with exactly this name, or None."""

    @abstractmethod
    def list_categories(self) -> list[Category]:
        """Return every category in display order."""

    @abstractmethod
    def list_entries(self) -> list[CatalogEntry]:
        """Return every product on the menu."""
