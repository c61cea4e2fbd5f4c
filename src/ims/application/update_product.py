"""Application service: Update Product use case."""

from __future__ import annotations

from typing import Any

from ims.application.dto import ProductDTO
from ims.application.validation import parse_optional_id
from ims.domain.exceptions import EntityNotFoundError, ValidationError
from ims.domain.model.product import ProductStatus
from ims.domain.model.value_objects import Money
from ims.domain.repository.unit_of_work import UnitOfWorkFactory


class UpdateProductHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(
        self,
        product_id: str,
        price: str | None = None,
        status: str | None = None,
        name: str | None = None,
        category_id: Any = None,
    ) -> ProductDTO:
        """Update catalog details of a product.

        Stock cannot be edited here: it moves only through sales and
        completed purchase orders. Existing sales keep their recorded
        unit price.
        """
        if price is None and status is None and name is None and category_id is None:
            raise ValidationError("Nothing to update")

        with self._uow_factory() as uow:
            product = uow.products.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

            if name is not None:
                clash = uow.products.get_by_name(name.strip())
                if clash is not None and clash.id != product.id:
                    raise ValidationError(f"Product '{name.strip()}' already exists")
                product.rename(name)
            if price is not None:
                product.update_price(Money.of(price))
            if status is not None:
                product.set_status(ProductStatus.parse(status))
            if category_id is not None:
                new_category = parse_optional_id(category_id, "category")
                if new_category is not None and uow.categories.get_by_id(new_category) is None:
                    raise EntityNotFoundError(f"Category #{new_category} not found")
                product.assign_category(new_category)

            uow.products.update_details(product)
            uow.commit()

        return ProductDTO.from_domain(product)
