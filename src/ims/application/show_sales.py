"""Application service: Sale queries."""

from __future__ import annotations

from ims.application.dto import SaleDTO
from ims.domain.exceptions import EntityNotFoundError
from ims.domain.repository.unit_of_work import UnitOfWorkFactory


class ListSalesHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self) -> list[SaleDTO]:
        with self._uow_factory() as uow:
            return [SaleDTO.from_domain(s) for s in uow.sales.list_all()]


class ShowSaleHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self, sale_id: int) -> SaleDTO:
        with self._uow_factory() as uow:
            sale = uow.sales.get_by_id(sale_id)
        if sale is None:
            raise EntityNotFoundError(f"Sale #{sale_id} not found")
        return SaleDTO.from_domain(sale)
