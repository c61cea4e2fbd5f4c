"""Application service: Add Supplier use case."""

from __future__ import annotations

from ims.application.dto import SupplierDTO
from ims.application.retry import NO_RETRY, RetryPolicy
from ims.domain.model.supplier import Supplier
from ims.domain.repository.unit_of_work import UnitOfWorkFactory


class AddSupplierHandler:

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
        contact_email: str | None = None,
        phone: str | None = None,
        address: str | None = None,
    ) -> SupplierDTO:
        def insert() -> Supplier:
            supplier = Supplier.create(name, contact_email, phone, address)
            with self._uow_factory() as uow:
                uow.suppliers.add(supplier)
                uow.commit()
            return supplier

        return SupplierDTO.from_domain(self._retry_policy.run(insert))
