"""Menu catalog as seen by the order core.

The catalog is owned by the storefront admin screens.  The core only
reads it, so both types are frozen.
"""

from __future__ import annotations

from dataclasses import dataclass

from foodops.domain.model.value_objects import Money


@dataclass(frozen=True)
class Category:
    id: str
    name: str


@dataclass(frozen=True)
class CatalogEntry:
    """A dish on the menu and the category it is listed under."""

    product_name: str
    category: Category
    price: Money
