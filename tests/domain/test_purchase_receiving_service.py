"""Unit tests for the PurchaseReceivingService domain service."""

import pytest

from ims.domain.exceptions import EntityNotFoundError, ValidationError
from ims.domain.model.product import Product
from ims.domain.model.purchase_order import (
    PurchaseOrder,
    PurchaseOrderLine,
    PurchaseOrderStatus,
)
from ims.domain.model.supplier import Supplier
from ims.domain.model.value_objects import MAX_QUANTITY, Money, Quantity
from ims.domain.service.purchase_receiving_service import PurchaseReceivingService
from tests.fakes import InMemoryStore, uow_factory_for


def _store() -> InMemoryStore:
    store = InMemoryStore(
        [
            Product(id="1", name="Widget", price=Money.of("5"), stock=1),
            Product(id="2", name="Gadget", price=Money.of("8"), stock=0),
        ]
    )
    store.suppliers[1] = Supplier(id=1, name="ACME")
    return store


def _order(
    *lines: tuple[str, int], status=PurchaseOrderStatus.PENDING, supplier_id: int = 1
) -> PurchaseOrder:
    return PurchaseOrder.create(
        supplier_id,
        [PurchaseOrderLine(pid, Quantity(qty), Money.of("1.00")) for pid, qty in lines],
        status=status,
    )


class TestPlace:

    def test_pending_order_does_not_touch_stock(self):
        store = _store()
        svc = PurchaseReceivingService(uow_factory_for(store))

        order = svc.place(_order(("1", 5)))

        assert order.id == 1
        assert store.products["1"].stock == 1

    def test_completed_order_adds_stock_immediately(self):
        store = _store()
        svc = PurchaseReceivingService(uow_factory_for(store))

        svc.place(_order(("1", 5), ("2", 3), status=PurchaseOrderStatus.COMPLETED))

        assert store.products["1"].stock == 6
        assert store.products["2"].stock == 3

    def test_unknown_product_rejected_without_insert(self):
        store = _store()
        svc = PurchaseReceivingService(uow_factory_for(store))

        with pytest.raises(EntityNotFoundError, match="'9'"):
            svc.place(_order(("1", 5), ("9", 1), status=PurchaseOrderStatus.COMPLETED))

        assert store.purchase_orders == {}
        assert store.products["1"].stock == 1

    def test_unknown_supplier_rejected_without_insert(self):
        store = _store()
        svc = PurchaseReceivingService(uow_factory_for(store))

        with pytest.raises(EntityNotFoundError, match="Supplier #5 not found"):
            svc.place(_order(("1", 5), status=PurchaseOrderStatus.COMPLETED, supplier_id=5))

        assert store.purchase_orders == {}
        assert store.products["1"].stock == 1

    def test_stock_beyond_storage_range_rejected(self):
        store = _store()
        svc = PurchaseReceivingService(uow_factory_for(store))

        with pytest.raises(ValidationError, match="exceed the maximum stock"):
            svc.place(_order(("1", MAX_QUANTITY), status=PurchaseOrderStatus.COMPLETED))

        assert store.purchase_orders == {}
        assert store.products["1"].stock == 1


class TestComplete:

    def test_complete_adds_each_line(self):
        store = _store()
        svc = PurchaseReceivingService(uow_factory_for(store))
        order = svc.place(_order(("1", 5), ("2", 2), ("1", 1)))

        completed = svc.complete(order.id)

        assert completed.status is PurchaseOrderStatus.COMPLETED
        assert store.products["1"].stock == 7
        assert store.products["2"].stock == 2

    def test_complete_twice_rejected_and_stock_added_once(self):
        store = _store()
        svc = PurchaseReceivingService(uow_factory_for(store))
        order = svc.place(_order(("1", 5)))
        svc.complete(order.id)

        with pytest.raises(ValidationError, match="already completed"):
            svc.complete(order.id)

        assert store.products["1"].stock == 6

    def test_complete_unknown_order(self):
        svc = PurchaseReceivingService(uow_factory_for(_store()))

        with pytest.raises(EntityNotFoundError, match="#42"):
            svc.complete(42)

    def test_product_removed_before_completion_rolls_back(self):
        store = _store()
        svc = PurchaseReceivingService(uow_factory_for(store))
        order = svc.place(_order(("1", 5), ("2", 2)))
        del store.products["2"]

        with pytest.raises(EntityNotFoundError):
            svc.complete(order.id)

        assert store.products["1"].stock == 1
        assert store.purchase_orders[order.id].status is PurchaseOrderStatus.PENDING
