"""Unit tests for the Product, Sale and PurchaseOrder aggregates."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from ims.domain.exceptions import ValidationError
from ims.domain.model.category import Category, CategoryStatus
from ims.domain.model.product import Product, ProductStatus
from ims.domain.model.purchase_order import (
    PurchaseOrder,
    PurchaseOrderLine,
    PurchaseOrderStatus,
)
from ims.domain.model.sale import Sale, SaleStatus
from ims.domain.model.supplier import Supplier
from ims.domain.model.value_objects import MAX_QUANTITY, Money, Quantity


class TestProduct:

    def test_create_strips_name(self):
        p = Product.create("1", "  Widget ", Money.of("5"), stock=10)
        assert p.name == "Widget"
        assert p.stock == 10
        assert p.status is ProductStatus.ACTIVE

    def test_create_requires_name(self):
        with pytest.raises(ValidationError, match="name is required"):
            Product.create("1", "  ", Money.of("5"))

    def test_create_rejects_negative_stock(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Product.create("1", "Widget", Money.of("5"), stock=-1)

    def test_create_rejects_stock_beyond_storage_range(self):
        with pytest.raises(ValidationError, match="cannot exceed"):
            Product.create("1", "Widget", Money.of("5"), stock=MAX_QUANTITY + 1)

    def test_assign_category(self):
        p = Product.create(None, "Widget", Money.of("5"), category_id=3)
        assert p.id is None
        assert p.category_id == 3
        p.assign_category(None)
        assert p.category_id is None

    def test_inactive_is_not_sellable(self):
        p = Product.create("1", "Widget", Money.of("5"), status=ProductStatus.INACTIVE)
        assert not p.is_sellable

    def test_status_parse_is_case_insensitive(self):
        assert ProductStatus.parse("inactive") is ProductStatus.INACTIVE

    def test_status_parse_rejects_unknown(self):
        with pytest.raises(ValidationError, match="Invalid product status"):
            ProductStatus.parse("Archived")


class TestSale:

    def test_record_computes_total(self):
        sale = Sale.record("1", Quantity(3), Money.of("5"))
        assert sale.total.amount == Decimal("15")
        assert sale.status is SaleStatus.COMPLETED
        assert sale.id is None

    def test_sale_is_immutable(self):
        sale = Sale.record("1", Quantity(1), Money.of("5"))
        with pytest.raises(AttributeError):
            sale.quantity = Quantity(2)  # type: ignore[misc]

    def test_sale_date_normalised_to_utc(self):
        plus_two = timezone(timedelta(hours=2))
        sale = Sale.record(
            "1", Quantity(1), Money.of("5"),
            sale_date=datetime(2026, 1, 1, 1, 0, tzinfo=plus_two),
        )
        assert sale.sale_date == datetime(2025, 12, 31, 23, 0, tzinfo=timezone.utc)
        assert sale.sale_date.tzinfo is timezone.utc


def _line(pid: str = "1", qty: int = 5, price: str = "2.00") -> PurchaseOrderLine:
    return PurchaseOrderLine(product_id=pid, quantity=Quantity(qty), price=Money.of(price))


class TestPurchaseOrder:

    def test_create_pending_by_default(self):
        order = PurchaseOrder.create(7, [_line()])
        assert order.status is PurchaseOrderStatus.PENDING
        assert order.total.amount == Decimal("10.00")

    def test_supplier_required(self):
        with pytest.raises(ValidationError, match="Supplier is required"):
            PurchaseOrder.create(None, [_line()])  # type: ignore[arg-type]

    def test_needs_lines(self):
        with pytest.raises(ValidationError, match="at least one line"):
            PurchaseOrder.create(7, [])

    def test_complete_twice_rejected(self):
        order = PurchaseOrder.create(7, [_line()])
        order.complete()
        with pytest.raises(ValidationError, match="already completed"):
            order.complete()

    def test_quantities_summed_per_product(self):
        order = PurchaseOrder.create(7, [_line("1", 2), _line("2", 3), _line("1", 4)])
        assert order.quantities_by_product() == {"1": 6, "2": 3}
        assert order.supplier_id == 7


class TestCategory:

    def test_create_defaults(self):
        c = Category.create("  Tools ")
        assert c.id is None
        assert c.name == "Tools"
        assert c.description == ""
        assert c.status is CategoryStatus.ACTIVE

    def test_name_required(self):
        with pytest.raises(ValidationError, match="Category name is required"):
            Category.create("")

    def test_status_parse(self):
        assert CategoryStatus.parse(" inactive ") is CategoryStatus.INACTIVE
        with pytest.raises(ValidationError, match="Invalid category status"):
            CategoryStatus.parse("Hidden")


class TestSupplier:

    def test_blank_optional_fields_become_none(self):
        s = Supplier.create("ACME", contact_email=" ", phone="", address=" 1 Main St ")
        assert s.contact_email is None
        assert s.phone is None
        assert s.address == "1 Main St"

    def test_name_required(self):
        with pytest.raises(ValidationError, match="Supplier name is required"):
            Supplier.create("  ")

    def test_email_needs_at_sign(self):
        with pytest.raises(ValidationError, match="Invalid contact email"):
            Supplier.create("ACME", contact_email="sales.acme.test")
