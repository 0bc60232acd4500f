"""Warehouse aggregate: the live product collection plus its change log.

The Warehouse is the aggregate root for products.  It owns two lists:

- ``_products``: current records, unique by id, in insertion order
- ``_changed_products``: records superseded by a price update, oldest first

Callers only ever see read-only views of either list.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from decimal import Decimal
from typing import overload
from uuid import UUID, uuid4

import structlog

from warehouse.domain.exceptions import InvalidArgumentError
from warehouse.domain.model.category import Category, CategoryRegistry
from warehouse.domain.model.product import ZERO, ProductRecord, to_price

logger = structlog.get_logger(__name__)

DEFAULT_NAME = "Warehouse"


class ReadOnlySequence(Sequence[ProductRecord]):
    """Live, non-mutating view over a list of records."""

    __slots__ = ("_items",)

    def __init__(self, items: list[ProductRecord]) -> None:
        self._items = items

    @overload
    def __getitem__(self, index: int) -> ProductRecord: ...

    @overload
    def __getitem__(self, index: slice) -> list[ProductRecord]: ...

    def __getitem__(self, index):
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ProductRecord]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ReadOnlySequence):
            return self._items == other._items
        if isinstance(other, Sequence) and not isinstance(other, (str, bytes)):
            return self._items == list(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ReadOnlySequence({self._items!r})"


class Warehouse:
    """Aggregate root for products and their price history.

    Use ``Warehouse.get_instance()``; every call builds a new, independent
    warehouse.
    """

    def __init__(self, name: str, categories: CategoryRegistry) -> None:
        self.name = name
        self.categories = categories
        self._products: list[ProductRecord] = []
        self._changed_products: list[ProductRecord] = []

    # --- Factory --------------------------------------------------------------

    @classmethod
    def get_instance(
        cls,
        name: str = DEFAULT_NAME,
        categories: CategoryRegistry | None = None,
    ) -> Warehouse:
        """Create a warehouse, with its own category registry unless one is given."""
        if categories is None:
            categories = CategoryRegistry()
        return cls(name, categories)

    def category(self, name: str | None) -> Category:
        return self.categories.of(name)

    # --- Commands -------------------------------------------------------------

    def add_product(
        self,
        name: str | None,
        category: Category | None,
        price: Decimal | str | int | float | None = None,
        product_id: UUID | None = None,
    ) -> ProductRecord:
        """Add a new product and return its record.

        A missing price defaults to zero and a missing id to a fresh UUID.
        Raises InvalidArgumentError without touching the warehouse if the
        name is empty, the category is missing or not a Category, or the
        id is not a UUID or already taken.
        """
        if not name:
            raise InvalidArgumentError("Product name can't be null or empty.")
        if category is None:
            raise InvalidArgumentError("Category can't be null.")
        if not isinstance(category, Category):
            raise InvalidArgumentError(
                f"Category must be a Category, got {type(category).__name__}"
            )
        price = ZERO if price is None else to_price(price)
        if product_id is None:
            product_id = uuid4()
        elif not isinstance(product_id, UUID):
            raise InvalidArgumentError(
                f"Product id must be a UUID, got {type(product_id).__name__}"
            )
        if self._index_of(product_id) is not None:
            raise InvalidArgumentError(
                "Product with that id already exists, "
                "use update_product_price for updates."
            )

        product = ProductRecord(product_id, name, category, price)
        self._products.append(product)

        logger.info(
            "product_added",
            warehouse=self.name,
            product_id=str(product.id),
            name=product.name,
            category=product.category.name,
            price=str(product.price),
        )
        return product

    def update_product_price(
        self,
        product_id: UUID,
        new_price: Decimal | str | int | float | None,
    ) -> None:
        """Replace the product's record with one carrying *new_price*.

        The replaced record is appended to the change log.  Unlike
        ``add_product``, a missing price is an error, not zero.
        """
        index = self._index_of(product_id)
        if index is None:
            raise InvalidArgumentError("Product with that id doesn't exist.")

        previous = self._products[index]
        changed = previous.with_price(to_price(new_price))

        self._products[index] = changed
        self._changed_products.append(previous)

        logger.info(
            "product_price_changed",
            warehouse=self.name,
            product_id=str(product_id),
            old_price=str(previous.price),
            new_price=str(changed.price),
        )

    # --- Queries --------------------------------------------------------------

    def is_empty(self) -> bool:
        return not self._products

    def get_products(self) -> ReadOnlySequence:
        return ReadOnlySequence(self._products)

    def get_product_by_id(self, product_id: UUID) -> ProductRecord | None:
        index = self._index_of(product_id)
        return None if index is None else self._products[index]

    def get_products_grouped_by_categories(self) -> dict[Category, list[ProductRecord]]:
        """Partition current products by category.

        Groups appear in order of their first product; each group keeps
        insertion order.
        """
        groups: dict[Category, list[ProductRecord]] = {}
        for product in self._products:
            groups.setdefault(product.category, []).append(product)
        return groups

    def get_products_by(self, category: Category) -> list[ProductRecord]:
        return [p for p in self._products if p.category == category]

    def get_changed_products(self) -> ReadOnlySequence:
        """Superseded records, oldest price change first."""
        return ReadOnlySequence(self._changed_products)

    def __len__(self) -> int:
        return len(self._products)

    def __repr__(self) -> str:
        return f"Warehouse(name={self.name!r}, products={len(self._products)})"

    # --- Internal helpers -----------------------------------------------------

    def _index_of(self, product_id: UUID) -> int | None:
        for index, product in enumerate(self._products):
            if product.id == product_id:
                return index
        return None
