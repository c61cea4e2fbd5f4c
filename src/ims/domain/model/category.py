"""Category aggregate.

Categories group products and may nest under a parent category. A
product refers to its category by id; the id must exist when the
product is added or re-categorised.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from ims.domain.exceptions import ValidationError


class CategoryStatus(Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"

    @classmethod
    def parse(cls, raw: str) -> CategoryStatus:
        for status in cls:
            if status.value.lower() == str(raw).strip().lower():
                return status
        raise ValidationError(
            f"Invalid category status {raw!r} (expected Active or Inactive)"
        )


@dataclass
class Category:

    id: int | None
    name: str
    description: str = ""
    parent_id: int | None = None
    status: CategoryStatus = CategoryStatus.ACTIVE
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(
        name: str,
        description: str | None = None,
        parent_id: int | None = None,
        status: CategoryStatus = CategoryStatus.ACTIVE,
    ) -> Category:
        if not name or not name.strip():
            raise ValidationError("Category name is required")
        return Category(
            id=None,
            name=name.strip(),
            description=str(description or "").strip(),
            parent_id=parent_id,
            status=status,
        )
