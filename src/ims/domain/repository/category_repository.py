"""Abstract repository for the Category aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ims.domain.model.category import Category


class CategoryRepository(ABC):

    @abstractmethod
    def add(self, category: Category) -> Category:
        """Insert a new category; assigns ``category.id``."""

    @abstractmethod
    def get_by_id(self, category_id: int) -> Category | None:
        """Return a category by its ID, or None if not found."""

    @abstractmethod
    def get_by_name(self, name: str) -> Category | None:
        """Return a category by name (case-insensitive), or None."""

    @abstractmethod
    def list_all(self) -> list[Category]:
        """Return every category, ordered by name."""
