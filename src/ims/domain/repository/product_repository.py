"""Abstract repository for the Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations live in the infrastructure
layer (SQLAlchemy) and in the test fakes (in-memory).

Stock is absent from ``update_details``: the only writers
of ``stock`` after insertion are the two atomic primitives below.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ims.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_name(self, name: str) -> Product | None:
        """Return a product by name (case-insensitive), or None."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog, ordered by ID."""

    @abstractmethod
    def add(self, product: Product) -> Product:
        """Insert a new product, including its initial stock.

        The store assigns ``product.id`` when it is None.
        """

    @abstractmethod
    def update_details(self, product: Product) -> None:
        """Persist name, price, status and category_id. Never writes stock."""

    @abstractmethod
    def decrement_stock(
        self, product_id: str, amount: int, require_active: bool = True
    ) -> bool:
        """Compare-and-decrement.

        Subtracts ``amount`` only if the product exists, currently has
        ``stock >= amount`` and (when ``require_active``) is Active. The
        check and the write are one indivisible storage operation.
        Returns True if the decrement was applied.
        """

    @abstractmethod
    def increment_stock(self, product_id: str, amount: int) -> bool:
        """Add ``amount`` to stock.

        Returns False if the product is missing or the result would exceed
        ``MAX_QUANTITY``.
        """
