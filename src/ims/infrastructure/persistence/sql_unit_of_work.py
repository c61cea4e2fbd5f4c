"""SQLAlchemy implementation of the atomic unit.

One unit = one pooled connection + one database transaction. The
repositories it exposes share that connection, so a stock decrement and
a sale insert made through them commit or roll back together.
"""

from __future__ import annotations

import logging

from sqlalchemy.engine import Connection, Engine, RootTransaction
from sqlalchemy.exc import DBAPIError

from ims.domain.exceptions import TransactionAbortedError
from ims.domain.repository.unit_of_work import UnitOfWork
from ims.infrastructure.persistence.sql_category_repository import SqlCategoryRepository
from ims.infrastructure.persistence.sql_product_repository import SqlProductRepository
from ims.infrastructure.persistence.sql_purchase_order_repository import (
    SqlPurchaseOrderRepository,
)
from ims.infrastructure.persistence.sql_sale_repository import SqlSaleRepository
from ims.infrastructure.persistence.sql_supplier_repository import SqlSupplierRepository

logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork(UnitOfWork):

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._connection: Connection | None = None
        self._transaction: RootTransaction | None = None

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        try:
            self._connection = self._engine.connect()
            self._transaction = self._connection.begin()
        except DBAPIError as exc:
            if self._connection is not None:
                self._connection.close()
            raise TransactionAbortedError(f"Storage unavailable: {exc.orig}") from exc

        self.products = SqlProductRepository(self._connection)
        self.sales = SqlSaleRepository(self._connection)
        self.purchase_orders = SqlPurchaseOrderRepository(self._connection)
        self.categories = SqlCategoryRepository(self._connection)
        self.suppliers = SqlSupplierRepository(self._connection)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if exc_type is None:
                self.rollback()
            elif self._is_active():
                logger.debug("unit_rolled_back reason=%s", exc_type.__name__)
                try:
                    self._transaction.rollback()
                except DBAPIError:
                    # The original exception is what the caller must see.
                    logger.warning("rollback_failed", exc_info=True)
        finally:
            if self._connection is not None:
                self._connection.close()
                self._connection = None

    def commit(self) -> None:
        if not self._is_active():
            raise TransactionAbortedError("No active transaction to commit")
        try:
            self._transaction.commit()
        except DBAPIError as exc:
            logger.warning("commit_failed error=%s", exc.orig)
            raise TransactionAbortedError(f"Commit failed: {exc.orig}") from exc

    def rollback(self) -> None:
        if not self._is_active():
            return
        try:
            self._transaction.rollback()
        except DBAPIError as exc:
            raise TransactionAbortedError(f"Rollback failed: {exc.orig}") from exc

    def _is_active(self) -> bool:
        return self._transaction is not None and self._transaction.is_active
