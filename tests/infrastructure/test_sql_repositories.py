"""Tests for the SQLAlchemy repositories and unit of work."""

from datetime import datetime, timezone

import pytest

from ims.domain.exceptions import TransactionAbortedError
from ims.domain.model.category import Category, CategoryStatus
from ims.domain.model.product import Product, ProductStatus
from ims.domain.model.purchase_order import PurchaseOrder, PurchaseOrderLine
from ims.domain.model.sale import Sale
from ims.domain.model.supplier import Supplier
from ims.domain.model.value_objects import MAX_QUANTITY, Money, Quantity


def _add_product(uow_factory, product_id="1", name="Widget", stock=10, status=ProductStatus.ACTIVE):
    with uow_factory() as uow:
        uow.products.add(
            Product.create(product_id, name, Money.of("5.00"), stock=stock, status=status)
        )
        uow.commit()


class TestSqlProductRepository:

    def test_round_trip(self, uow_factory):
        _add_product(uow_factory)

        with uow_factory() as uow:
            product = uow.products.get_by_id("1")

        assert product.name == "Widget"
        assert product.stock == 10
        assert product.price == Money.of("5.00")
        assert product.created_at.tzinfo is not None

    def test_get_by_name_ignores_case(self, uow_factory):
        _add_product(uow_factory)
        with uow_factory() as uow:
            assert uow.products.get_by_name(" WIDGET ").id == "1"
            assert uow.products.get_by_name("gizmo") is None

    def test_store_assigns_ids_and_orders_numerically(self, uow_factory):
        for product_id in ("2", "10"):
            _add_product(uow_factory, product_id, name=f"P{product_id}")

        with uow_factory() as uow:
            added = uow.products.add(Product.create(None, "Fresh", Money.of("1")))
            uow.commit()

        assert added.id == "11"
        with uow_factory() as uow:
            assert [p.id for p in uow.products.list_all()] == ["2", "10", "11"]

    @pytest.mark.parametrize("product_id", ["abc", "-1", str(MAX_QUANTITY + 1)])
    def test_unstorable_ids_are_unknown(self, uow_factory, product_id):
        _add_product(uow_factory)

        with uow_factory() as uow:
            assert uow.products.get_by_id(product_id) is None
            assert uow.products.decrement_stock(product_id, 1) is False
            assert uow.products.increment_stock(product_id, 1) is False

    def test_increment_stops_at_storage_range(self, uow_factory):
        _add_product(uow_factory, stock=MAX_QUANTITY - 2)

        with uow_factory() as uow:
            assert uow.products.increment_stock("1", 3) is False
            assert uow.products.increment_stock("1", MAX_QUANTITY + 1) is False
            assert uow.products.increment_stock("1", 2) is True
            uow.commit()

        with uow_factory() as uow:
            assert uow.products.get_by_id("1").stock == MAX_QUANTITY

    def test_category_reference(self, uow_factory):
        with uow_factory() as uow:
            tools = uow.categories.add(Category.create("Tools"))
            uow.products.add(
                Product.create(None, "Widget", Money.of("5"), category_id=tools.id)
            )
            uow.commit()

        with uow_factory() as uow:
            assert uow.products.get_by_id("1").category_id == tools.id

    def test_unknown_category_rejected_by_foreign_key(self, uow_factory):
        with pytest.raises(TransactionAbortedError):
            with uow_factory() as uow:
                uow.products.add(Product.create(None, "Widget", Money.of("5"), category_id=99))

    def test_decrement_is_conditional(self, uow_factory):
        _add_product(uow_factory, stock=3)

        with uow_factory() as uow:
            assert uow.products.decrement_stock("1", 4) is False
            assert uow.products.decrement_stock("1", 3) is True
            assert uow.products.decrement_stock("1", 1) is False
            uow.commit()

        with uow_factory() as uow:
            assert uow.products.get_by_id("1").stock == 0

    def test_decrement_respects_status(self, uow_factory):
        _add_product(uow_factory, status=ProductStatus.INACTIVE)

        with uow_factory() as uow:
            assert uow.products.decrement_stock("1", 1) is False
            assert uow.products.decrement_stock("1", 1, require_active=False) is True

    def test_update_details_leaves_stock(self, uow_factory):
        _add_product(uow_factory, stock=7)

        with uow_factory() as uow:
            product = uow.products.get_by_id("1")
            product.update_price(Money.of("9.99"))
            product.stock = 999
            uow.products.update_details(product)
            uow.commit()

        with uow_factory() as uow:
            stored = uow.products.get_by_id("1")
        assert stored.price == Money.of("9.99")
        assert stored.stock == 7


class TestSqlUnitOfWork:

    def test_uncommitted_work_is_rolled_back(self, uow_factory):
        _add_product(uow_factory)

        with uow_factory() as uow:
            uow.products.decrement_stock("1", 4)

        with uow_factory() as uow:
            assert uow.products.get_by_id("1").stock == 10

    def test_exception_rolls_back(self, uow_factory):
        _add_product(uow_factory)

        with pytest.raises(RuntimeError):
            with uow_factory() as uow:
                uow.products.decrement_stock("1", 4)
                raise RuntimeError("boom")

        with uow_factory() as uow:
            assert uow.products.get_by_id("1").stock == 10

    def test_constraint_violation_aborts_unit(self, uow_factory):
        _add_product(uow_factory)

        with pytest.raises(TransactionAbortedError):
            with uow_factory() as uow:
                uow.products.decrement_stock("1", 2)
                _insert_duplicate(uow)

        with uow_factory() as uow:
            assert uow.products.get_by_id("1").stock == 10

    def test_commit_twice_is_refused(self, uow_factory):
        _add_product(uow_factory)
        with uow_factory() as uow:
            uow.commit()
            with pytest.raises(TransactionAbortedError):
                uow.commit()


def _insert_duplicate(uow):
    uow.products.add(Product.create("1", "Other", Money.of("1")))


class TestSqlSaleRepository:

    def test_add_assigns_ids_and_lists_by_date(self, uow_factory):
        _add_product(uow_factory)
        late = datetime(2026, 3, 2, 12, tzinfo=timezone.utc)
        early = datetime(2026, 3, 1, 12, tzinfo=timezone.utc)

        with uow_factory() as uow:
            first = uow.sales.add(Sale.record("1", Quantity(1), Money.of("5"), sale_date=late))
            second = uow.sales.add(Sale.record("1", Quantity(2), Money.of("5"), sale_date=early))
            uow.commit()

        assert (first.id, second.id) == (1, 2)
        with uow_factory() as uow:
            assert [s.id for s in uow.sales.list_all()] == [2, 1]
            assert uow.sales.get_by_id(1).sale_date == late
            assert uow.sales.get_by_id(1).total == Money.of("5")
            between = uow.sales.list_between(
                datetime(2026, 3, 2, tzinfo=timezone.utc),
                datetime(2026, 3, 2, 23, 59, tzinfo=timezone.utc),
            )
        assert [s.id for s in between] == [1]

    def test_unknown_product_rejected_by_foreign_key(self, uow_factory):
        with pytest.raises(TransactionAbortedError):
            with uow_factory() as uow:
                uow.sales.add(Sale.record("404", Quantity(1), Money.of("1")))


class TestSqlPurchaseOrderRepository:

    def test_add_get_and_mark_completed(self, uow_factory):
        _add_product(uow_factory)
        with uow_factory() as uow:
            supplier = uow.suppliers.add(Supplier.create("ACME"))
            uow.commit()
        order = PurchaseOrder.create(
            supplier.id, [PurchaseOrderLine("1", Quantity(4), Money.of("2.25"))]
        )

        with uow_factory() as uow:
            uow.purchase_orders.add(order)
            uow.commit()

        assert order.id == 1
        with uow_factory() as uow:
            stored = uow.purchase_orders.get_by_id(1)
            assert stored.lines[0].quantity == Quantity(4)
            assert stored.total == Money.of("9.00")
            assert uow.purchase_orders.mark_completed(1) is True
            assert uow.purchase_orders.mark_completed(1) is False
            assert uow.purchase_orders.mark_completed(2) is False
            uow.commit()

        with uow_factory() as uow:
            assert uow.purchase_orders.list_all()[0].is_completed
            assert uow.purchase_orders.get_by_id(1).supplier_id == supplier.id

    def test_unknown_supplier_rejected_by_foreign_key(self, uow_factory):
        _add_product(uow_factory)
        order = PurchaseOrder.create(
            42, [PurchaseOrderLine("1", Quantity(1), Money.of("1"))]
        )

        with pytest.raises(TransactionAbortedError):
            with uow_factory() as uow:
                uow.purchase_orders.add(order)


class TestSqlCategoryRepository:

    def test_add_lookup_and_list(self, uow_factory):
        with uow_factory() as uow:
            tools = uow.categories.add(Category.create("Tools", "Hand tools"))
            uow.categories.add(
                Category.create("Saws", parent_id=tools.id, status=CategoryStatus.INACTIVE)
            )
            uow.commit()

        with uow_factory() as uow:
            saws = uow.categories.get_by_name(" SAWS ")
            assert saws.parent_id == tools.id
            assert saws.status is CategoryStatus.INACTIVE
            assert uow.categories.get_by_id(tools.id).description == "Hand tools"
            assert uow.categories.get_by_id(99) is None
            assert [c.name for c in uow.categories.list_all()] == ["Saws", "Tools"]

    def test_duplicate_name_aborts_unit(self, uow_factory):
        with uow_factory() as uow:
            uow.categories.add(Category.create("Tools"))
            uow.commit()

        with pytest.raises(TransactionAbortedError):
            with uow_factory() as uow:
                uow.categories.add(Category.create("tools"))


class TestSqlSupplierRepository:

    def test_add_and_lookup(self, uow_factory):
        with uow_factory() as uow:
            acme = uow.suppliers.add(
                Supplier.create("ACME", contact_email="sales@acme.test", address="1 Main St")
            )
            uow.suppliers.add(Supplier.create("Globex"))
            uow.commit()

        with uow_factory() as uow:
            stored = uow.suppliers.get_by_id(acme.id)
            assert stored.contact_email == "sales@acme.test"
            assert stored.phone is None
            assert stored.created_at.tzinfo is not None
            assert [s.name for s in uow.suppliers.list_all()] == ["ACME", "Globex"]
