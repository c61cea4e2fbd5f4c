"""Application service: Purchase order queries."""

from __future__ import annotations

from ims.application.dto import PurchaseOrderDTO
from ims.domain.exceptions import EntityNotFoundError
from ims.domain.repository.unit_of_work import UnitOfWorkFactory


class ListPurchaseOrdersHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self) -> list[PurchaseOrderDTO]:
        with self._uow_factory() as uow:
            return [
                PurchaseOrderDTO.from_domain(o) for o in uow.purchase_orders.list_all()
            ]


class ShowPurchaseOrderHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self, order_id: int) -> PurchaseOrderDTO:
        with self._uow_factory() as uow:
            order = uow.purchase_orders.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Purchase order #{order_id} not found")
        return PurchaseOrderDTO.from_domain(order)
