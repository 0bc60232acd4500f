"""ProductRecord value object.

A record is an immutable snapshot of one product.  Changing a price
produces a new record; the old one is kept by the Warehouse as history.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal, InvalidOperation
from uuid import UUID

from warehouse.domain.exceptions import InvalidArgumentError
from warehouse.domain.model.category import Category

ZERO = Decimal("0")


def to_price(amount: Decimal | str | int | float | None) -> Decimal:
    """Coerce *amount* to Decimal safely.

    Floats go through ``str`` first so ``9.99`` stays ``Decimal("9.99")``.
    """
    if amount is None:
        raise InvalidArgumentError("Product price can't be null.")
    if isinstance(amount, bool):
        raise InvalidArgumentError(f"Invalid product price: {amount!r}")
    if isinstance(amount, Decimal):
        return amount
    try:
        return Decimal(str(amount))
    except (InvalidOperation, ValueError) as exc:
        raise InvalidArgumentError(f"Invalid product price: {amount!r}") from exc


@dataclass(frozen=True)
class ProductRecord:
    """One product at one point in time.

    Invariants:
    - ``id`` is a UUID
    - ``name`` is a non-empty string
    - ``category`` is a Category
    - ``price`` is a finite, non-negative Decimal
    """

    id: UUID
    name: str
    category: Category
    price: Decimal = ZERO

    def __post_init__(self) -> None:
        if not isinstance(self.id, UUID):
            raise InvalidArgumentError(
                f"Product id must be a UUID, got {type(self.id).__name__}"
            )
        if not isinstance(self.name, str) or not self.name:
            raise InvalidArgumentError("Product name can't be null or empty.")
        if self.category is None:
            raise InvalidArgumentError("Category can't be null.")
        if not isinstance(self.category, Category):
            raise InvalidArgumentError(
                f"Category must be a Category, got {type(self.category).__name__}"
            )
        if not isinstance(self.price, Decimal):
            raise InvalidArgumentError(
                f"Product price must be a Decimal, got {type(self.price).__name__}"
            )
        if not self.price.is_finite() or self.price < ZERO:
            raise InvalidArgumentError(
                f"Product price must be a non-negative amount, got {self.price}"
            )

    def with_price(self, new_price: Decimal) -> ProductRecord:
        """Return a copy of this record carrying *new_price*."""
        return replace(self, price=new_price)
