"""SQLAlchemy-backed implementation of ProductRepository."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import insert, select, update
from sqlalchemy.engine import Connection

from ims.domain.model.product import Product, ProductStatus
from ims.domain.model.value_objects import MAX_QUANTITY, Money
from ims.domain.repository.product_repository import ProductRepository
from ims.infrastructure.persistence.schema import (
    as_utc,
    product_key,
    products,
    run_statement,
)


class SqlProductRepository(ProductRepository):

    def __init__(self, connection: Connection) -> None:
        self._connection = connection

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        key = product_key(product_id)
        if key is None:
            return None
        row = run_statement(
            self._connection, select(products).where(products.c.id == key)
        ).mappings().first()
        return self._to_domain(row) if row is not None else None

    def get_by_name(self, name: str) -> Product | None:
        row = run_statement(
            self._connection,
            select(products).where(products.c.name_key == name.strip().lower()),
        ).mappings().first()
        return self._to_domain(row) if row is not None else None

    def list_all(self) -> list[Product]:
        rows = run_statement(
            self._connection, select(products).order_by(products.c.id)
        ).mappings().all()
        return [self._to_domain(row) for row in rows]

    def add(self, product: Product) -> Product:
        values = {
            "stock": product.stock,
            "created_at": product.created_at,
            **self._details(product),
        }
        if product.id is not None:
            values["id"] = product_key(product.id)
        result = run_statement(self._connection, insert(products).values(**values))
        product.id = str(result.inserted_primary_key[0])
        return product

    def update_details(self, product: Product) -> None:
        run_statement(
            self._connection,
            update(products)
            .where(products.c.id == product_key(product.id))
            .values(**self._details(product)),
        )

    def decrement_stock(
        self, product_id: str, amount: int, require_active: bool = True
    ) -> bool:
        key = product_key(product_id)
        if key is None or amount > MAX_QUANTITY:
            return False
        stmt = update(products).where(
            products.c.id == key,
            products.c.stock >= amount,
        )
        if require_active:
            stmt = stmt.where(products.c.status == ProductStatus.ACTIVE.value)
        result = run_statement(
            self._connection, stmt.values(stock=products.c.stock - amount)
        )
        return result.rowcount == 1

    def increment_stock(self, product_id: str, amount: int) -> bool:
        key = product_key(product_id)
        if key is None or amount > MAX_QUANTITY:
            return False
        result = run_statement(
            self._connection,
            update(products)
            .where(products.c.id == key, products.c.stock <= MAX_QUANTITY - amount)
            .values(stock=products.c.stock + amount),
        )
        return result.rowcount == 1

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _details(product: Product) -> dict:
        return {
            "name": product.name,
            "name_key": product.name.lower(),
            "category_id": product.category_id,
            "price": str(product.price.amount),
            "currency": product.price.currency,
            "status": product.status.value,
        }

    @staticmethod
    def _to_domain(row) -> Product:
        return Product(
            id=str(row["id"]),
            name=row["name"],
            price=Money(Decimal(row["price"]), row["currency"]),
            stock=row["stock"],
            status=ProductStatus(row["status"]),
            category_id=row["category_id"],
            created_at=as_utc(row["created_at"]),
        )
