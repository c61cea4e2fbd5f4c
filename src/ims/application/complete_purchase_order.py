"""Application service: Complete Purchase Order use case."""

from __future__ import annotations

from ims.application.dto import PurchaseOrderDTO
from ims.application.retry import NO_RETRY, RetryPolicy
from ims.domain.repository.unit_of_work import UnitOfWorkFactory
from ims.domain.service.purchase_receiving_service import PurchaseReceivingService


class CompletePurchaseOrderHandler:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        retry_policy: RetryPolicy = NO_RETRY,
    ) -> None:
        self._receiving = PurchaseReceivingService(uow_factory)
        self._retry_policy = retry_policy

    def handle(self, order_id: int) -> PurchaseOrderDTO:
        """Mark the order Completed and add every line to stock."""
        order = self._retry_policy.run(lambda: self._receiving.complete(order_id))
        return PurchaseOrderDTO.from_domain(order)
