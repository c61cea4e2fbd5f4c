"""Domain service: Sale Ledger.

Records a sale against a product's inventory. The sale insert and the
stock decrement run inside one ``UnitOfWork``, so either both are
committed or neither is.

The availability check is not a separate read: the unit first issues
the repository's compare-and-decrement, which tests ``stock >= quantity``
and applies the decrement as one storage operation. Only when that
write is refused does the service read the product back, inside the
same unit, to report *why* (missing, inactive, or short on stock).
There is therefore no window between check and act for a concurrent
sale to slip through.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable

from ims.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from ims.domain.model.sale import Sale
from ims.domain.model.value_objects import Money, Quantity
from ims.domain.repository.unit_of_work import UnitOfWork, UnitOfWorkFactory

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SaleLedgerService:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        require_active: bool = True,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._uow_factory = uow_factory
        self._require_active = require_active
        self._clock = clock

    def record_sale(self, product_id: str, quantity: Quantity, unit_price: Money) -> Sale:
        """Decrement stock and write the matching Sale as one atomic unit.

        Raises:
            EntityNotFoundError: the product does not exist.
            ValidationError: the product is Inactive (when enforced).
            InsufficientStockError: ``quantity`` exceeds current stock.
            TransactionAbortedError: the unit could not commit; safe to
                resubmit the same call.
        """
        with self._uow_factory() as uow:
            applied = uow.products.decrement_stock(
                product_id, quantity.value, require_active=self._require_active
            )
            if not applied:
                self._reject(uow, product_id, quantity)

            sale = uow.sales.add(
                Sale.record(
                    product_id=product_id,
                    quantity=quantity,
                    price=unit_price,
                    sale_date=self._clock(),
                )
            )
            uow.commit()

        logger.info(
            "sale_recorded sale_id=%s product_id=%s quantity=%s total=%s",
            sale.id, product_id, quantity.value, sale.total.amount,
        )
        return sale

    def _reject(self, uow: UnitOfWork, product_id: str, quantity: Quantity) -> None:
        """Explain a refused decrement. Always raises."""
        product = uow.products.get_by_id(product_id)
        if product is None:
            logger.info("sale_rejected product_id=%s reason=not_found", product_id)
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        if self._require_active and not product.is_sellable:
            logger.info("sale_rejected product_id=%s reason=inactive", product_id)
            raise ValidationError(
                f"Product '{product.name}' is {product.status.value} and cannot be sold"
            )

        logger.info(
            "sale_rejected product_id=%s reason=insufficient_stock requested=%s available=%s",
            product_id, quantity.value, product.stock,
        )
        raise InsufficientStockError(product_id, quantity.value, product.stock)
