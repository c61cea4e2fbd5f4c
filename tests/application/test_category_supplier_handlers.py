"""Tests for the category and supplier use cases."""

import pytest

from ims.application.add_category import AddCategoryHandler
from ims.application.add_supplier import AddSupplierHandler
from ims.application.show_categories import ListCategoriesHandler, ShowCategoryHandler
from ims.application.show_suppliers import ListSuppliersHandler, ShowSupplierHandler
from ims.domain.exceptions import EntityNotFoundError, ValidationError
from tests.fakes import InMemoryStore, uow_factory_for


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def factory(store):
    return uow_factory_for(store)


class TestCategories:

    def test_add_with_parent(self, factory):
        tools = AddCategoryHandler(factory).handle("Tools", "Hand tools")
        saws = AddCategoryHandler(factory).handle("Saws", parent_id="1", status="inactive")

        assert (tools.id, saws.id) == (1, 2)
        assert tools.description == "Hand tools"
        assert saws.parent_id == 1
        assert saws.status == "Inactive"

    def test_duplicate_name_case_insensitive(self, factory, store):
        AddCategoryHandler(factory).handle("Tools")

        with pytest.raises(ValidationError, match="already exists"):
            AddCategoryHandler(factory).handle(" TOOLS ")
        assert len(store.categories) == 1

    def test_unknown_parent(self, factory, store):
        with pytest.raises(EntityNotFoundError, match="Parent category #7 not found"):
            AddCategoryHandler(factory).handle("Saws", parent_id=7)
        assert store.categories == {}

    def test_list_ordered_by_name_and_show(self, factory):
        AddCategoryHandler(factory).handle("Tools")
        AddCategoryHandler(factory).handle("Garden")

        assert [c.name for c in ListCategoriesHandler(factory).handle()] == ["Garden", "Tools"]
        assert ShowCategoryHandler(factory).handle(2).name == "Garden"

    def test_show_missing(self, factory):
        with pytest.raises(EntityNotFoundError, match="Category #3 not found"):
            ShowCategoryHandler(factory).handle(3)


class TestSuppliers:

    def test_add_and_show(self, factory):
        dto = AddSupplierHandler(factory).handle(
            "ACME", contact_email="sales@acme.test", phone="555-0100"
        )

        assert dto.id == 1
        shown = ShowSupplierHandler(factory).handle(1)
        assert shown.contact_email == "sales@acme.test"
        assert shown.address is None

    def test_invalid_email_writes_nothing(self, factory, store):
        with pytest.raises(ValidationError, match="Invalid contact email"):
            AddSupplierHandler(factory).handle("ACME", contact_email="nobody")
        assert store.suppliers == {}

    def test_list(self, factory):
        AddSupplierHandler(factory).handle("ACME")
        AddSupplierHandler(factory).handle("Globex")

        assert [s.name for s in ListSuppliersHandler(factory).handle()] == ["ACME", "Globex"]

    def test_show_missing(self, factory):
        with pytest.raises(EntityNotFoundError, match="Supplier #4 not found"):
            ShowSupplierHandler(factory).handle(4)
