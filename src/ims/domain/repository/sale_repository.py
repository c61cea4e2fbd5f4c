"""Abstract repository for Sale records (append-only)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from ims.domain.model.sale import Sale


class SaleRepository(ABC):

    @abstractmethod
    def add(self, sale: Sale) -> Sale:
        """Insert a new sale and return it with its assigned ID."""

    @abstractmethod
    def get_by_id(self, sale_id: int) -> Sale | None:
        """Return a sale by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Sale]:
        """Return every sale, oldest first."""

    @abstractmethod
    def list_between(self, start: datetime, end: datetime) -> list[Sale]:
        """Return sales with ``start <= sale_date <= end``, oldest first."""
