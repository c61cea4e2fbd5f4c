"""Application service: Supplier queries."""

from __future__ import annotations

from ims.application.dto import SupplierDTO
from ims.domain.exceptions import EntityNotFoundError
from ims.domain.repository.unit_of_work import UnitOfWorkFactory


class ListSuppliersHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self) -> list[SupplierDTO]:
        with self._uow_factory() as uow:
            return [SupplierDTO.from_domain(s) for s in uow.suppliers.list_all()]


class ShowSupplierHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self, supplier_id: int) -> SupplierDTO:
        with self._uow_factory() as uow:
            supplier = uow.suppliers.get_by_id(supplier_id)
        if supplier is None:
            raise EntityNotFoundError(f"Supplier #{supplier_id} not found")
        return SupplierDTO.from_domain(supplier)
