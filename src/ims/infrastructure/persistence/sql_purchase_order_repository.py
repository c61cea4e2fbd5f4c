"""SQLAlchemy-backed implementation of PurchaseOrderRepository."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import insert, select, update
from sqlalchemy.engine import Connection

from ims.domain.model.purchase_order import (
    PurchaseOrder,
    PurchaseOrderLine,
    PurchaseOrderStatus,
)
from ims.domain.model.value_objects import Money, Quantity
from ims.domain.repository.purchase_order_repository import PurchaseOrderRepository
from ims.infrastructure.persistence.schema import (
    as_utc,
    product_key,
    purchase_order_lines,
    purchase_orders,
    run_statement,
)


class SqlPurchaseOrderRepository(PurchaseOrderRepository):

    def __init__(self, connection: Connection) -> None:
        self._connection = connection

    def add(self, order: PurchaseOrder) -> PurchaseOrder:
        result = run_statement(
            self._connection,
            insert(purchase_orders).values(
                supplier_id=order.supplier_id,
                status=order.status.value,
                order_date=order.order_date,
            ),
        )
        order.id = result.inserted_primary_key[0]
        for line in order.lines:
            run_statement(
                self._connection,
                insert(purchase_order_lines).values(
                    order_id=order.id,
                    product_id=product_key(line.product_id),
                    quantity=line.quantity.value,
                    price=str(line.price.amount),
                    currency=line.price.currency,
                ),
            )
        return order

    def get_by_id(self, order_id: int) -> PurchaseOrder | None:
        row = run_statement(
            self._connection,
            select(purchase_orders).where(purchase_orders.c.id == order_id),
        ).mappings().first()
        if row is None:
            return None
        return self._to_domain(row, self._lines_for([order_id]).get(order_id, []))

    def list_all(self) -> list[PurchaseOrder]:
        rows = run_statement(
            self._connection, select(purchase_orders).order_by(purchase_orders.c.id)
        ).mappings().all()
        lines = self._lines_for([row["id"] for row in rows])
        return [self._to_domain(row, lines.get(row["id"], [])) for row in rows]

    def mark_completed(self, order_id: int) -> bool:
        result = run_statement(
            self._connection,
            update(purchase_orders)
            .where(
                purchase_orders.c.id == order_id,
                purchase_orders.c.status == PurchaseOrderStatus.PENDING.value,
            )
            .values(status=PurchaseOrderStatus.COMPLETED.value),
        )
        return result.rowcount == 1

    # --- Serialization --------------------------------------------------------

    def _lines_for(self, order_ids: list[int]) -> dict[int, list[PurchaseOrderLine]]:
        if not order_ids:
            return {}
        rows = run_statement(
            self._connection,
            select(purchase_order_lines)
            .where(purchase_order_lines.c.order_id.in_(order_ids))
            .order_by(purchase_order_lines.c.id),
        ).mappings().all()
        grouped: dict[int, list[PurchaseOrderLine]] = {}
        for row in rows:
            grouped.setdefault(row["order_id"], []).append(
                PurchaseOrderLine(
                    product_id=str(row["product_id"]),
                    quantity=Quantity(row["quantity"]),
                    price=Money(Decimal(row["price"]), row["currency"]),
                )
            )
        return grouped

    @staticmethod
    def _to_domain(row, lines: list[PurchaseOrderLine]) -> PurchaseOrder:
        return PurchaseOrder(
            id=row["id"],
            supplier_id=row["supplier_id"],
            lines=lines,
            status=PurchaseOrderStatus(row["status"]),
            order_date=as_utc(row["order_date"]),
        )
