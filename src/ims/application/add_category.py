"""Application service: Add Category use case."""

from __future__ import annotations

from typing import Any

from ims.application.dto import CategoryDTO
from ims.application.retry import NO_RETRY, RetryPolicy
from ims.application.validation import parse_optional_id
from ims.domain.exceptions import EntityNotFoundError, ValidationError
from ims.domain.model.category import Category, CategoryStatus
from ims.domain.repository.unit_of_work import UnitOfWorkFactory


class AddCategoryHandler:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        retry_policy: RetryPolicy = NO_RETRY,
    ) -> None:
        self._uow_factory = uow_factory
        self._retry_policy = retry_policy

    def handle(
        self,
        name: str,
        description: str | None = None,
        parent_id: Any = None,
        status: str = CategoryStatus.ACTIVE.value,
    ) -> CategoryDTO:
        """Add a category, optionally nested under an existing parent."""
        parent = parse_optional_id(parent_id, "parent")
        parsed_status = CategoryStatus.parse(status)

        def insert() -> Category:
            category = Category.create(name, description, parent_id=parent, status=parsed_status)
            with self._uow_factory() as uow:
                if uow.categories.get_by_name(category.name) is not None:
                    raise ValidationError(f"Category '{category.name}' already exists")
                if parent is not None and uow.categories.get_by_id(parent) is None:
                    raise EntityNotFoundError(f"Parent category #{parent} not found")
                uow.categories.add(category)
                uow.commit()
            return category

        return CategoryDTO.from_domain(self._retry_policy.run(insert))
