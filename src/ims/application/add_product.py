"""Application service: Add Product use case.

The store assigns the product id on insert, so concurrent adds never
compete for the same id. Aborted units (e.g. two concurrent adds of the
same name racing on the unique index) are resubmitted by the retry
policy, and the retried attempt then reports the duplicate name.
"""

from __future__ import annotations

from typing import Any

from ims.application.dto import ProductDTO
from ims.application.retry import NO_RETRY, RetryPolicy
from ims.application.validation import parse_optional_id, parse_stock
from ims.domain.exceptions import EntityNotFoundError, ValidationError
from ims.domain.model.product import Product, ProductStatus
from ims.domain.model.value_objects import Money
from ims.domain.repository.unit_of_work import UnitOfWorkFactory


class AddProductHandler:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        retry_policy: RetryPolicy = NO_RETRY,
    ) -> None:
        self._uow_factory = uow_factory
        self._retry_policy = retry_policy

    def handle(
        self,
        name: str,
        price: str,
        stock: int | str = 0,
        category_id: Any = None,
        status: str = ProductStatus.ACTIVE.value,
    ) -> ProductDTO:
        """Add a new product to the catalog with its opening stock."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")

        unit_price = Money.of(price)
        opening_stock = parse_stock(stock)
        parsed_status = ProductStatus.parse(status)
        parsed_category = parse_optional_id(category_id, "category")

        def insert() -> Product:
            product = Product.create(
                product_id=None,
                name=name,
                price=unit_price,
                stock=opening_stock,
                status=parsed_status,
                category_id=parsed_category,
            )
            with self._uow_factory() as uow:
                if uow.products.get_by_name(product.name) is not None:
                    raise ValidationError(f"Product '{product.name}' already exists")
                if (
                    parsed_category is not None
                    and uow.categories.get_by_id(parsed_category) is None
                ):
                    raise EntityNotFoundError(f"Category #{parsed_category} not found")
                uow.products.add(product)
                uow.commit()
            return product

        return ProductDTO.from_domain(self._retry_policy.run(insert))
