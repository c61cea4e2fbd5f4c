"""Application service: Category queries."""

from __future__ import annotations

from ims.application.dto import CategoryDTO
from ims.domain.exceptions import EntityNotFoundError
from ims.domain.repository.unit_of_work import UnitOfWorkFactory


class ListCategoriesHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self) -> list[CategoryDTO]:
        with self._uow_factory() as uow:
            return [CategoryDTO.from_domain(c) for c in uow.categories.list_all()]


class ShowCategoryHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self, category_id: int) -> CategoryDTO:
        with self._uow_factory() as uow:
            category = uow.categories.get_by_id(category_id)
        if category is None:
            raise EntityNotFoundError(f"Category #{category_id} not found")
        return CategoryDTO.from_domain(category)
