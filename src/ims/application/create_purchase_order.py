"""Application service: Create Purchase Order use case.

Orders may be created Pending (stock unchanged until completion) or
directly Completed, in which case stock is added in the same atomic
unit as the insert.
"""

from __future__ import annotations

from ims.application.dto import PurchaseLineSpec, PurchaseOrderDTO
from ims.application.retry import NO_RETRY, RetryPolicy
from ims.application.validation import parse_id
from ims.domain.exceptions import ValidationError
from ims.domain.model.purchase_order import (
    PurchaseOrder,
    PurchaseOrderLine,
    PurchaseOrderStatus,
)
from ims.domain.model.value_objects import Money, Quantity
from ims.domain.repository.unit_of_work import UnitOfWorkFactory
from ims.domain.service.purchase_receiving_service import PurchaseReceivingService


def _line(spec: PurchaseLineSpec) -> PurchaseOrderLine:
    try:
        quantity = Quantity.of(spec.quantity)
    except ValidationError as exc:
        raise ValidationError(
            f"Field 'quantity' in line for product '{spec.product_id}': {exc}"
        ) from exc
    try:
        price = Money.of(spec.price)
    except ValidationError as exc:
        raise ValidationError(
            f"Field 'price' in line for product '{spec.product_id}': {exc}"
        ) from exc
    return PurchaseOrderLine(product_id=spec.product_id, quantity=quantity, price=price)


class CreatePurchaseOrderHandler:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        retry_policy: RetryPolicy = NO_RETRY,
    ) -> None:
        self._receiving = PurchaseReceivingService(uow_factory)
        self._retry_policy = retry_policy

    def handle(
        self,
        supplier_id: int | str,
        lines: list[PurchaseLineSpec],
        status: str = PurchaseOrderStatus.PENDING.value,
    ) -> PurchaseOrderDTO:
        order_lines = [_line(spec) for spec in lines]
        parsed_status = PurchaseOrderStatus.parse(status)
        parsed_supplier = parse_id(supplier_id, "supplier")

        # Build a fresh aggregate per attempt: a failed attempt may have
        # assigned an id that was rolled back.
        def place() -> PurchaseOrder:
            order = PurchaseOrder.create(parsed_supplier, order_lines, status=parsed_status)
            return self._receiving.place(order)

        return PurchaseOrderDTO.from_domain(self._retry_policy.run(place))
