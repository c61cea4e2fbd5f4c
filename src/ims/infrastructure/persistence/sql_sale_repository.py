"""SQLAlchemy-backed implementation of SaleRepository (append-only)."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import insert, select
from sqlalchemy.engine import Connection

from ims.domain.model.sale import Sale, SaleStatus
from ims.domain.model.value_objects import Money, Quantity
from ims.domain.repository.sale_repository import SaleRepository
from ims.infrastructure.persistence.schema import (
    as_utc,
    product_key,
    run_statement,
    sales,
)


class SqlSaleRepository(SaleRepository):

    def __init__(self, connection: Connection) -> None:
        self._connection = connection

    def add(self, sale: Sale) -> Sale:
        result = run_statement(
            self._connection,
            insert(sales).values(
                product_id=product_key(sale.product_id),
                quantity=sale.quantity.value,
                price=str(sale.price.amount),
                total=str(sale.total.amount),
                currency=sale.price.currency,
                status=sale.status.value,
                sale_date=sale.sale_date,
            ),
        )
        return sale.with_id(result.inserted_primary_key[0])

    def get_by_id(self, sale_id: int) -> Sale | None:
        row = run_statement(
            self._connection, select(sales).where(sales.c.id == sale_id)
        ).mappings().first()
        return self._to_domain(row) if row is not None else None

    def list_all(self) -> list[Sale]:
        rows = run_statement(
            self._connection, select(sales).order_by(sales.c.sale_date, sales.c.id)
        ).mappings().all()
        return [self._to_domain(row) for row in rows]

    def list_between(self, start: datetime, end: datetime) -> list[Sale]:
        rows = run_statement(
            self._connection,
            select(sales)
            .where(sales.c.sale_date >= start, sales.c.sale_date <= end)
            .order_by(sales.c.sale_date, sales.c.id),
        ).mappings().all()
        return [self._to_domain(row) for row in rows]

    @staticmethod
    def _to_domain(row) -> Sale:
        currency = row["currency"]
        return Sale(
            id=row["id"],
            product_id=str(row["product_id"]),
            quantity=Quantity(row["quantity"]),
            price=Money(Decimal(row["price"]), currency),
            total=Money(Decimal(row["total"]), currency),
            status=SaleStatus(row["status"]),
            sale_date=as_utc(row["sale_date"]),
        )
