"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI/HTTP and application layers without
exposing domain internals to the outside world. Money is rendered as a
plain decimal string (``"15.00"``) so both JSON and tables can use it.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass

from ims.domain.model.category import Category
from ims.domain.model.product import Product
from ims.domain.model.purchase_order import PurchaseOrder
from ims.domain.model.sale import Sale
from ims.domain.model.supplier import Supplier
from ims.domain.model.value_objects import Money, Quantity


def format_amount(money: Money) -> str:
    return f"{money.amount:.2f}"


@dataclass(frozen=True)
class SaleRequest:
    """Input: a validated request to record a sale."""

    product_id: str
    quantity: Quantity
    unit_price: Money


@dataclass(frozen=True)
class PurchaseLineSpec:
    """Input: one purchase order line as typed by the user."""

    product_id: str
    quantity: int
    price: str


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    category_id: int | None
    stock: int
    price: str
    status: str

    @staticmethod
    def from_domain(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,
            name=product.name,
            category_id=product.category_id,
            stock=product.stock,
            price=format_amount(product.price),
            status=product.status.value,
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class CategoryDTO:
    id: int
    name: str
    description: str
    parent_id: int | None
    status: str

    @staticmethod
    def from_domain(category: Category) -> CategoryDTO:
        return CategoryDTO(
            id=category.id,  # type: ignore[arg-type]
            name=category.name,
            description=category.description,
            parent_id=category.parent_id,
            status=category.status.value,
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class SupplierDTO:
    id: int
    name: str
    contact_email: str | None
    phone: str | None
    address: str | None

    @staticmethod
    def from_domain(supplier: Supplier) -> SupplierDTO:
        return SupplierDTO(
            id=supplier.id,  # type: ignore[arg-type]
            name=supplier.name,
            contact_email=supplier.contact_email,
            phone=supplier.phone,
            address=supplier.address,
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class SaleDTO:
    id: int
    product_id: str
    quantity: int
    price: str
    total: str
    status: str
    sale_date: str  # ISO 8601, UTC

    @staticmethod
    def from_domain(sale: Sale) -> SaleDTO:
        return SaleDTO(
            id=sale.id,  # type: ignore[arg-type]
            product_id=sale.product_id,
            quantity=sale.quantity.value,
            price=format_amount(sale.price),
            total=format_amount(sale.total),
            status=sale.status.value,
            sale_date=sale.sale_date.isoformat(),
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class PurchaseLineDTO:
    product_id: str
    quantity: int
    price: str
    line_total: str


@dataclass(frozen=True)
class PurchaseOrderDTO:
    id: int
    supplier_id: int
    status: str
    lines: list[PurchaseLineDTO]
    total: str
    order_date: str

    @staticmethod
    def from_domain(order: PurchaseOrder) -> PurchaseOrderDTO:
        return PurchaseOrderDTO(
            id=order.id,  # type: ignore[arg-type]
            supplier_id=order.supplier_id,
            status=order.status.value,
            lines=[
                PurchaseLineDTO(
                    product_id=line.product_id,
                    quantity=line.quantity.value,
                    price=format_amount(line.price),
                    line_total=format_amount(line.line_total),
                )
                for line in order.lines
            ],
            total=format_amount(order.total),
            order_date=order.order_date.isoformat(),
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ReportRowDTO:
    """One aggregated period of a daily or monthly report."""

    period: str  # "YYYY-MM-DD" or "YYYY-MM"
    count: int
    total: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class DateRangeReportDTO:
    start: str
    end: str
    sales: list[SaleDTO]
    total: str

    def to_dict(self) -> dict:
        return asdict(self)
