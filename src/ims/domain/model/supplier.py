"""Supplier aggregate: who a purchase order is placed with."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from ims.domain.exceptions import ValidationError


def _optional(value: str | None) -> str | None:
    if value is None or not str(value).strip():
        return None
    return str(value).strip()


@dataclass
class Supplier:

    id: int | None
    name: str
    contact_email: str | None = None
    phone: str | None = None
    address: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(
        name: str,
        contact_email: str | None = None,
        phone: str | None = None,
        address: str | None = None,
    ) -> Supplier:
        if not name or not name.strip():
            raise ValidationError("Supplier name is required")
        email = _optional(contact_email)
        if email is not None and "@" not in email:
            raise ValidationError(f"Invalid contact email {email!r}")
        return Supplier(
            id=None,
            name=name.strip(),
            contact_email=email,
            phone=_optional(phone),
            address=_optional(address),
        )
