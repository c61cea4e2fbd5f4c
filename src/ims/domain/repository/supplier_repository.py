"""Abstract repository for the Supplier aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ims.domain.model.supplier import Supplier


class SupplierRepository(ABC):

    @abstractmethod
    def add(self, supplier: Supplier) -> Supplier:
        """Insert a new supplier; assigns ``supplier.id``."""

    @abstractmethod
    def get_by_id(self, supplier_id: int) -> Supplier | None:
        """Return a supplier by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Supplier]:
        """Return every supplier, oldest first."""
