"""Category value object and the registry that interns it.

A category is identified by its canonical name: first character
upper-cased, the rest lower-cased.  Within one registry there is exactly
one Category object per canonical name.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

import structlog

from warehouse.domain.exceptions import InvalidArgumentError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Category:
    """Canonical, deduplicated tag attached to products.

    The name is stored in canonical form, so ``Category("tools")`` equals
    ``Category("Tools")``.  Obtain instances through ``CategoryRegistry.of()``
    so that equal names also share one object.
    """

    name: str

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise InvalidArgumentError("Category name can't be null or empty.")
        object.__setattr__(self, "name", canonical_name(self.name))

    def __str__(self) -> str:
        return self.name


def canonical_name(name: str) -> str:
    """Return *name* with its first character upper-cased, the rest lower-cased."""
    return name[:1].upper() + name[1:].lower()


class CategoryRegistry:
    """Interns category names into Category objects.

    Owned by a Warehouse (or shared between several of them by the
    caller).  Insertion only; categories are never removed.
    """

    def __init__(self) -> None:
        self._categories: dict[str, Category] = {}

    def of(self, name: str | None) -> Category:
        """Return the Category for *name*, creating it on first request."""
        if name is None:
            raise InvalidArgumentError("Category name can't be null.")
        if name == "":
            raise InvalidArgumentError("Category name can't be empty.")

        key = canonical_name(name)
        category = self._categories.get(key)
        if category is None:
            category = Category(key)
            self._categories[key] = category
            logger.debug("category_registered", category=key)
        return category

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str) or not name:
            return False
        return canonical_name(name) in self._categories

    def __iter__(self) -> Iterator[Category]:
        return iter(list(self._categories.values()))

    def __len__(self) -> int:
        return len(self._categories)
