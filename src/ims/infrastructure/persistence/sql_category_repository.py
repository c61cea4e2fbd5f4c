"""SQLAlchemy-backed implementation of CategoryRepository."""

from __future__ import annotations

from sqlalchemy import insert, select
from sqlalchemy.engine import Connection

from ims.domain.model.category import Category, CategoryStatus
from ims.domain.repository.category_repository import CategoryRepository
from ims.infrastructure.persistence.schema import as_utc, categories, run_statement


class SqlCategoryRepository(CategoryRepository):

    def __init__(self, connection: Connection) -> None:
        self._connection = connection

    def add(self, category: Category) -> Category:
        result = run_statement(
            self._connection,
            insert(categories).values(
                name=category.name,
                name_key=category.name.lower(),
                description=category.description,
                parent_id=category.parent_id,
                status=category.status.value,
                created_at=category.created_at,
            ),
        )
        category.id = result.inserted_primary_key[0]
        return category

    def get_by_id(self, category_id: int) -> Category | None:
        row = run_statement(
            self._connection, select(categories).where(categories.c.id == category_id)
        ).mappings().first()
        return self._to_domain(row) if row is not None else None

    def get_by_name(self, name: str) -> Category | None:
        row = run_statement(
            self._connection,
            select(categories).where(categories.c.name_key == name.strip().lower()),
        ).mappings().first()
        return self._to_domain(row) if row is not None else None

    def list_all(self) -> list[Category]:
        rows = run_statement(
            self._connection, select(categories).order_by(categories.c.name_key)
        ).mappings().all()
        return [self._to_domain(row) for row in rows]

    @staticmethod
    def _to_domain(row) -> Category:
        return Category(
            id=row["id"],
            name=row["name"],
            description=row["description"],
            parent_id=row["parent_id"],
            status=CategoryStatus(row["status"]),
            created_at=as_utc(row["created_at"]),
        )
