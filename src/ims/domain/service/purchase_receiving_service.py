"""Domain service: Purchase Receiving.

The symmetric counterpart of the sale ledger. Completing a purchase
order and adding each line's quantity to product stock happen in one
``UnitOfWork``: a failure on any line (e.g. the product was removed)
rolls back the status change and every increment before it.
"""

from __future__ import annotations

import logging

from ims.domain.exceptions import EntityNotFoundError, ValidationError
from ims.domain.model.purchase_order import PurchaseOrder
from ims.domain.repository.unit_of_work import UnitOfWork, UnitOfWorkFactory

logger = logging.getLogger(__name__)


class PurchaseReceivingService:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def place(self, order: PurchaseOrder) -> PurchaseOrder:
        """Insert a new purchase order.

        An order created already Completed has its stock applied in the
        same unit as the insert.
        """
        with self._uow_factory() as uow:
            if uow.suppliers.get_by_id(order.supplier_id) is None:
                raise EntityNotFoundError(f"Supplier #{order.supplier_id} not found")
            self._assert_products_exist(uow, order)
            uow.purchase_orders.add(order)
            if order.is_completed:
                self._receive(uow, order)
            uow.commit()

        logger.info(
            "purchase_order_placed order_id=%s supplier_id=%s status=%s lines=%s",
            order.id, order.supplier_id, order.status.value, len(order.lines),
        )
        return order

    def complete(self, order_id: int) -> PurchaseOrder:
        """Transition a Pending order to Completed and add its stock."""
        with self._uow_factory() as uow:
            # Conditional transition first: of two concurrent completions
            # only one can flip the status, so stock is added exactly once.
            if not uow.purchase_orders.mark_completed(order_id):
                existing = uow.purchase_orders.get_by_id(order_id)
                if existing is None:
                    raise EntityNotFoundError(f"Purchase order #{order_id} not found")
                raise ValidationError(f"Purchase order #{order_id} is already completed")

            order = uow.purchase_orders.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError(f"Purchase order #{order_id} not found")
            self._receive(uow, order)
            uow.commit()

        logger.info("purchase_order_completed order_id=%s", order_id)
        return order

    @staticmethod
    def _assert_products_exist(uow: UnitOfWork, order: PurchaseOrder) -> None:
        for product_id in order.quantities_by_product():
            if uow.products.get_by_id(product_id) is None:
                raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

    @staticmethod
    def _receive(uow: UnitOfWork, order: PurchaseOrder) -> None:
        for product_id, qty in order.quantities_by_product().items():
            if not uow.products.increment_stock(product_id, qty):
                if uow.products.get_by_id(product_id) is None:
                    raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
                raise ValidationError(
                    f"Receiving {qty} units would exceed the maximum stock "
                    f"of product '{product_id}'"
                )
        if not order.is_completed:
            order.complete()
