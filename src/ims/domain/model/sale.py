"""Sale record — immutable once created.

A Sale is the ledger entry for a committed stock decrement. It captures
the unit price at the time of sale, so later catalog price changes do
not alter historical totals.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum

from ims.domain.exceptions import ValidationError
from ims.domain.model.value_objects import Money, Quantity


class SaleStatus(Enum):
    COMPLETED = "Completed"
    PENDING = "Pending"


@dataclass(frozen=True)
class Sale:
    """A recorded sale of ``quantity`` units of one product.

    ``id`` is ``None`` until the sale repository assigns one on insert.
    """

    id: int | None
    product_id: str
    quantity: Quantity
    price: Money  # unit price at time of sale
    total: Money
    status: SaleStatus = SaleStatus.COMPLETED
    sale_date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def record(
        product_id: str,
        quantity: Quantity,
        price: Money,
        sale_date: datetime | None = None,
    ) -> Sale:
        """Build a new Completed sale with ``total = quantity * price``."""
        if not product_id:
            raise ValidationError("Product is required")
        return Sale(
            id=None,
            product_id=product_id,
            quantity=quantity,
            price=price,
            total=price * quantity.value,
            status=SaleStatus.COMPLETED,
            sale_date=(sale_date or datetime.now(timezone.utc)).astimezone(timezone.utc),
        )

    def with_id(self, sale_id: int) -> Sale:
        return replace(self, id=sale_id)
