"""Input validation — raw form/JSON/CLI values to typed requests.

Transports hand over whatever they decoded (strings from a form, numbers
from JSON, options from click). Everything is checked and converted here,
so handlers and domain services only ever see typed values or get a
``ValidationError`` that names the offending field.
"""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Any, Mapping

from ims.application.dto import PurchaseLineSpec, SaleRequest
from ims.domain.exceptions import ValidationError
from ims.domain.model.value_objects import MAX_QUANTITY, Money, Quantity

SALE_FIELDS = ("product", "quantity", "price")


def _required(form: Mapping[str, Any], name: str) -> Any:
    value = form.get(name)
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"Field '{name}' is required")
    return value


def parse_sale_request(form: Mapping[str, Any]) -> SaleRequest:
    """Validate the ``product`` / ``quantity`` / ``price`` fields of a sale."""
    missing = [name for name in SALE_FIELDS if name not in form]
    if missing:
        raise ValidationError(f"Missing required field(s): {', '.join(missing)}")

    product_id = str(_required(form, "product")).strip()

    try:
        quantity = Quantity.of(_required(form, "quantity"))
    except ValidationError as exc:
        raise ValidationError(f"Field 'quantity': {exc}") from exc

    try:
        unit_price = Money.of(_required(form, "price"))
    except ValidationError as exc:
        raise ValidationError(f"Field 'price': {exc}") from exc

    return SaleRequest(product_id=product_id, quantity=quantity, unit_price=unit_price)


def parse_date(raw: str | date, field: str) -> date:
    """Parse ``YYYY-MM-DD``."""
    if isinstance(raw, date):
        return raw
    if raw is None or not str(raw).strip():
        raise ValidationError(f"Field '{field}' is required")
    try:
        return date.fromisoformat(str(raw).strip())
    except ValueError as exc:
        raise ValidationError(
            f"Field '{field}': expected a date as YYYY-MM-DD, got {raw!r}"
        ) from exc


def day_bounds(start: date, end: date) -> tuple[datetime, datetime]:
    """Turn an inclusive date range into UTC datetimes covering whole days."""
    if start > end:
        raise ValidationError(f"Start date {start} is after end date {end}")
    return (
        datetime.combine(start, time.min, tzinfo=timezone.utc),
        datetime.combine(end, time.max, tzinfo=timezone.utc),
    )


def parse_purchase_lines(raw: str) -> list[PurchaseLineSpec]:
    """Parse ``'1:10:2.50,2:5:4.00'`` (product:quantity:price) into line specs."""
    specs: list[PurchaseLineSpec] = []
    for chunk in raw.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        parts = chunk.split(":")
        if len(parts) != 3:
            raise ValidationError(
                f"Invalid line '{chunk}'. Expected 'ProductID:Quantity:Price'."
            )
        product_id, qty, price = (p.strip() for p in parts)
        try:
            quantity = Quantity.of(qty)
        except ValidationError as exc:
            raise ValidationError(f"Field 'quantity' in line '{chunk}': {exc}") from exc
        specs.append(
            PurchaseLineSpec(product_id=product_id, quantity=quantity.value, price=price)
        )
    if not specs:
        raise ValidationError("Purchase order must contain at least one line")
    return specs


def parse_stock(raw: Any, field: str = "stock") -> int:
    """Parse a non-negative integer stock level (zero allowed)."""
    if isinstance(raw, bool) or raw is None:
        raise ValidationError(f"Field '{field}': invalid integer {raw!r}")
    if isinstance(raw, int):
        value = raw
    else:
        try:
            value = int(str(raw).strip())
        except ValueError as exc:
            raise ValidationError(f"Field '{field}': invalid integer {raw!r}") from exc
    if value < 0:
        raise ValidationError(f"Field '{field}' cannot be negative")
    if value > MAX_QUANTITY:
        raise ValidationError(f"Field '{field}' cannot exceed {MAX_QUANTITY}")
    return value


def parse_id(raw: Any, field: str) -> int:
    """Parse a numeric record id such as a category or supplier id."""
    if isinstance(raw, bool) or raw is None or not str(raw).strip():
        raise ValidationError(f"Field '{field}' is required")
    try:
        value = int(str(raw).strip())
    except ValueError as exc:
        raise ValidationError(f"Field '{field}': invalid id {raw!r}") from exc
    if value < 1 or value > MAX_QUANTITY:
        raise ValidationError(f"Field '{field}': invalid id {raw!r}")
    return value


def parse_optional_id(raw: Any, field: str) -> int | None:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return None
    return parse_id(raw, field)
