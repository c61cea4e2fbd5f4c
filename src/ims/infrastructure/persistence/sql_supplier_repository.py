"""SQLAlchemy-backed implementation of SupplierRepository."""

from __future__ import annotations

from sqlalchemy import insert, select
from sqlalchemy.engine import Connection

from ims.domain.model.supplier import Supplier
from ims.domain.repository.supplier_repository import SupplierRepository
from ims.infrastructure.persistence.schema import as_utc, run_statement, suppliers


class SqlSupplierRepository(SupplierRepository):

    def __init__(self, connection: Connection) -> None:
        self._connection = connection

    def add(self, supplier: Supplier) -> Supplier:
        result = run_statement(
            self._connection,
            insert(suppliers).values(
                name=supplier.name,
                contact_email=supplier.contact_email,
                phone=supplier.phone,
                address=supplier.address,
                created_at=supplier.created_at,
            ),
        )
        supplier.id = result.inserted_primary_key[0]
        return supplier

    def get_by_id(self, supplier_id: int) -> Supplier | None:
        row = run_statement(
            self._connection, select(suppliers).where(suppliers.c.id == supplier_id)
        ).mappings().first()
        return self._to_domain(row) if row is not None else None

    def list_all(self) -> list[Supplier]:
        rows = run_statement(
            self._connection, select(suppliers).order_by(suppliers.c.id)
        ).mappings().all()
        return [self._to_domain(row) for row in rows]

    @staticmethod
    def _to_domain(row) -> Supplier:
        return Supplier(
            id=row["id"],
            name=row["name"],
            contact_email=row["contact_email"],
            phone=row["phone"],
            address=row["address"],
            created_at=as_utc(row["created_at"]),
        )
