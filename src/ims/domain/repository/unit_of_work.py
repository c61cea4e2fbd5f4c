"""The atomic unit abstraction.

Every multi-step write in the system runs inside a ``UnitOfWork``:

    with uow_factory() as uow:
        uow.products.decrement_stock(...)
        uow.sales.add(...)
        uow.commit()

Leaving the block without ``commit()``, or through an exception, rolls
back everything done inside it. Storage-level failures (lock timeouts,
conflicts, lost connections) surface as ``TransactionAbortedError`` so
callers can tell them apart from business-rule rejections.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from ims.domain.repository.category_repository import CategoryRepository
from ims.domain.repository.product_repository import ProductRepository
from ims.domain.repository.purchase_order_repository import PurchaseOrderRepository
from ims.domain.repository.sale_repository import SaleRepository
from ims.domain.repository.supplier_repository import SupplierRepository


class UnitOfWork(ABC):

    products: ProductRepository
    sales: SaleRepository
    purchase_orders: PurchaseOrderRepository
    categories: CategoryRepository
    suppliers: SupplierRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make every change in this unit durable, or raise TransactionAbortedError."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard uncommitted changes. A no-op after ``commit()``."""


UnitOfWorkFactory = Callable[[], UnitOfWork]
