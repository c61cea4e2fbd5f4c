"""Integration tests for the RecordSale use case."""

import pytest

from ims.application.record_sale import RecordSaleHandler
from ims.application.retry import RetryPolicy
from ims.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    TransactionAbortedError,
    ValidationError,
)
from ims.domain.model.product import Product
from ims.domain.model.value_objects import Money
from tests.fakes import InMemoryStore, uow_factory_for


def _setup(stock: int = 10):
    store = InMemoryStore([Product(id="1", name="Widget", price=Money.of("5"), stock=stock)])
    return store, uow_factory_for(store)


class TestRecordSaleHandler:

    def test_scenario_a(self):
        store, factory = _setup(stock=10)

        dto = RecordSaleHandler(factory).handle({"product": "1", "quantity": "3", "price": "5"})

        assert dto.quantity == 3
        assert dto.total == "15.00"
        assert dto.status == "Completed"
        assert store.products["1"].stock == 7

    def test_scenario_c_missing_product(self):
        store, factory = _setup()

        with pytest.raises(EntityNotFoundError):
            RecordSaleHandler(factory).handle({"product": "nope", "quantity": "1", "price": "5"})
        assert store.products["1"].stock == 10

    def test_scenario_d_zero_quantity(self):
        store, factory = _setup()

        with pytest.raises(ValidationError, match="quantity"):
            RecordSaleHandler(factory).handle({"product": "1", "quantity": "0", "price": "5"})
        assert store.commits == 0

    def test_insufficient_stock(self):
        _, factory = _setup(stock=2)

        with pytest.raises(InsufficientStockError):
            RecordSaleHandler(factory).handle({"product": "1", "quantity": "3", "price": "5"})

    def test_abort_is_retried_with_same_inputs(self):
        store, factory = _setup(stock=10)
        store.abort_commits = 2
        handler = RecordSaleHandler(factory, retry_policy=RetryPolicy(attempts=3, backoff=0))

        dto = handler.handle({"product": "1", "quantity": "4", "price": "5"})

        assert dto.id == 1
        assert store.products["1"].stock == 6
        assert len(store.sales) == 1

    def test_abort_surfaces_when_retries_exhausted(self):
        store, factory = _setup(stock=10)
        store.abort_commits = 5
        handler = RecordSaleHandler(factory, retry_policy=RetryPolicy(attempts=2, backoff=0))

        with pytest.raises(TransactionAbortedError):
            handler.handle({"product": "1", "quantity": "4", "price": "5"})
        assert store.products["1"].stock == 10
        assert store.sales == {}
