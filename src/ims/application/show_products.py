"""Application service: Product queries."""

from __future__ import annotations

from ims.application.dto import ProductDTO
from ims.domain.exceptions import EntityNotFoundError
from ims.domain.repository.unit_of_work import UnitOfWorkFactory


class ListProductsHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self) -> list[ProductDTO]:
        with self._uow_factory() as uow:
            return [ProductDTO.from_domain(p) for p in uow.products.list_all()]


class ShowProductHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self, product_id: str) -> ProductDTO:
        with self._uow_factory() as uow:
            product = uow.products.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        return ProductDTO.from_domain(product)
