"""PurchaseOrder aggregate — incoming stock from a supplier.

A purchase order owns its lines. Completing it is the only event that
adds stock to products; the stock increments themselves are applied by
the purchase receiving service inside the same atomic unit as the
status transition.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from ims.domain.exceptions import ValidationError
from ims.domain.model.value_objects import Money, Quantity


class PurchaseOrderStatus(Enum):
    PENDING = "Pending"
    COMPLETED = "Completed"

    @classmethod
    def parse(cls, raw: str) -> PurchaseOrderStatus:
        for status in cls:
            if status.value.lower() == str(raw).strip().lower():
                return status
        raise ValidationError(
            f"Invalid purchase order status {raw!r} (expected Pending or Completed)"
        )


@dataclass(frozen=True)
class PurchaseOrderLine:
    """One product received at a given unit cost."""

    product_id: str
    quantity: Quantity
    price: Money

    @property
    def line_total(self) -> Money:
        return self.price * self.quantity.value


MAX_PURCHASE_LINES = 50


@dataclass
class PurchaseOrder:
    """Aggregate root for supplier purchase orders.

    Use ``PurchaseOrder.create()`` for new orders; ``__init__`` stays
    plain so repositories can reconstitute persisted orders.
    """

    id: int | None
    supplier_id: int
    lines: list[PurchaseOrderLine]
    status: PurchaseOrderStatus = PurchaseOrderStatus.PENDING
    order_date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(
        supplier_id: int,
        lines: list[PurchaseOrderLine],
        status: PurchaseOrderStatus = PurchaseOrderStatus.PENDING,
    ) -> PurchaseOrder:
        if supplier_id is None:
            raise ValidationError("Supplier is required")
        if not lines:
            raise ValidationError("Purchase order must contain at least one line")
        if len(lines) > MAX_PURCHASE_LINES:
            raise ValidationError(f"Maximum {MAX_PURCHASE_LINES} lines per purchase order")
        return PurchaseOrder(
            id=None,
            supplier_id=supplier_id,
            lines=list(lines),
            status=status,
        )

    def complete(self) -> None:
        """Transition PENDING -> COMPLETED.

        Stock increments are applied separately by the receiving service.
        """
        if self.status is PurchaseOrderStatus.COMPLETED:
            raise ValidationError(
                f"Purchase order #{self.id} is already completed"
            )
        self.status = PurchaseOrderStatus.COMPLETED

    @property
    def is_completed(self) -> bool:
        return self.status is PurchaseOrderStatus.COMPLETED

    @property
    def total(self) -> Money:
        result = Money(Decimal("0.00"))
        for line in self.lines:
            result = result + line.line_total
        return result

    def quantities_by_product(self) -> dict[str, int]:
        """Sum line quantities per product (a product may appear twice)."""
        totals: dict[str, int] = {}
        for line in self.lines:
            totals[line.product_id] = totals.get(line.product_id, 0) + line.quantity.value
        return totals
