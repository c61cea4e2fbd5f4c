"""Product aggregate.

Products carry the only shared mutable counter in the system: ``stock``.
The aggregate validates catalog edits, but stock is never assigned
directly after creation. It changes only through the repository's
atomic ``decrement_stock`` / ``increment_stock`` primitives, driven by
the sale ledger and purchase receiving services.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from ims.domain.exceptions import ValidationError
from ims.domain.model.value_objects import MAX_QUANTITY, Money


class ProductStatus(Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"

    @classmethod
    def parse(cls, raw: str) -> ProductStatus:
        for status in cls:
            if status.value.lower() == str(raw).strip().lower():
                return status
        raise ValidationError(
            f"Invalid product status {raw!r} (expected Active or Inactive)"
        )


@dataclass
class Product:
    """A product in the catalog together with its stock level."""

    id: str | None
    name: str
    price: Money
    stock: int = 0
    status: ProductStatus = ProductStatus.ACTIVE
    category_id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW products only) ---------------------------------

    @staticmethod
    def create(
        product_id: str | None,
        name: str,
        price: Money,
        stock: int = 0,
        status: ProductStatus = ProductStatus.ACTIVE,
        category_id: int | None = None,
    ) -> Product:
        """Build a new product. ``product_id`` is None until the store assigns one."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if isinstance(stock, bool) or not isinstance(stock, int):
            raise ValidationError("Initial stock must be an integer")
        if stock < 0:
            raise ValidationError("Initial stock cannot be negative")
        if stock > MAX_QUANTITY:
            raise ValidationError(f"Initial stock cannot exceed {MAX_QUANTITY}")
        return Product(
            id=product_id,
            name=name.strip(),
            price=price,
            stock=stock,
            status=status,
            category_id=category_id,
        )

    # --- Catalog edits --------------------------------------------------------

    def rename(self, new_name: str) -> None:
        if not new_name or not new_name.strip():
            raise ValidationError("Product name is required")
        self.name = new_name.strip()

    def update_price(self, new_price: Money) -> None:
        """Change the catalog price.

        Existing sales keep the unit price they were recorded with.
        """
        self.price = new_price

    def set_status(self, status: ProductStatus) -> None:
        self.status = status

    def assign_category(self, category_id: int | None) -> None:
        self.category_id = category_id

    # --- Queries --------------------------------------------------------------

    @property
    def is_sellable(self) -> bool:
        return self.status is ProductStatus.ACTIVE

    def can_supply(self, quantity: int) -> bool:
        return self.stock >= quantity
