"""Abstract repository for the PurchaseOrder aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ims.domain.model.purchase_order import PurchaseOrder


class PurchaseOrderRepository(ABC):

    @abstractmethod
    def add(self, order: PurchaseOrder) -> PurchaseOrder:
        """Insert a new purchase order; assigns ``order.id``."""

    @abstractmethod
    def get_by_id(self, order_id: int) -> PurchaseOrder | None:
        """Return a purchase order by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[PurchaseOrder]:
        """Return every purchase order, oldest first."""

    @abstractmethod
    def mark_completed(self, order_id: int) -> bool:
        """Conditionally move a Pending order to Completed.

        Returns False when the order is missing or already Completed, so
        two concurrent completions cannot both increment stock.
        """
