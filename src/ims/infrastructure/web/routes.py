"""JSON endpoints.

Request bodies may be JSON or form-encoded; both are reduced to a plain
mapping and validated by the application layer, never here.
"""

from __future__ import annotations

from typing import Any

from flask import Blueprint, jsonify, request

from ims.application.add_category import AddCategoryHandler
from ims.application.add_product import AddProductHandler
from ims.application.add_supplier import AddSupplierHandler
from ims.application.complete_purchase_order import CompletePurchaseOrderHandler
from ims.application.create_purchase_order import CreatePurchaseOrderHandler
from ims.application.dto import PurchaseLineSpec
from ims.application.record_sale import RecordSaleHandler
from ims.application.sales_report import SalesReportHandler
from ims.application.show_categories import ListCategoriesHandler, ShowCategoryHandler
from ims.application.show_products import ListProductsHandler, ShowProductHandler
from ims.application.show_purchase_orders import (
    ListPurchaseOrdersHandler,
    ShowPurchaseOrderHandler,
)
from ims.application.show_sales import ListSalesHandler, ShowSaleHandler
from ims.application.show_suppliers import ListSuppliersHandler, ShowSupplierHandler
from ims.application.validation import parse_date
from ims.domain.exceptions import ValidationError
from ims.domain.model.value_objects import MAX_QUANTITY
from ims.infrastructure.web.context import request_context

api = Blueprint("api", __name__)

# Ids beyond the storage integer range are unknown, not errors.
_ID = f"int(max={MAX_QUANTITY})"


def _body() -> dict[str, Any]:
    if request.is_json:
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            raise ValidationError("Request body must be a JSON object")
        return payload
    return request.form.to_dict()


# --- Sales ---------------------------------------------------------------------


@api.post("/sales")
def create_sale():
    ctx = request_context()
    handler = RecordSaleHandler(ctx.uow_factory, retry_policy=ctx.retry_policy)
    dto = handler.handle(_body())
    return jsonify(dto.to_dict()), 201


@api.get("/sales")
def list_sales():
    sales = ListSalesHandler(request_context().uow_factory).handle()
    return jsonify([s.to_dict() for s in sales])


@api.get(f"/sales/<{_ID}:sale_id>")
def show_sale(sale_id: int):
    return jsonify(ShowSaleHandler(request_context().uow_factory).handle(sale_id).to_dict())


# --- Products ------------------------------------------------------------------


@api.post("/products")
def create_product():
    ctx = request_context()
    body = _body()
    handler = AddProductHandler(ctx.uow_factory, retry_policy=ctx.retry_policy)
    dto = handler.handle(
        name=str(body.get("name") or ""),
        price=body.get("price"),
        stock=body.get("stock", 0),
        category_id=body.get("category_id"),
        status=body.get("status", "Active"),
    )
    return jsonify(dto.to_dict()), 201


@api.get("/products")
def list_products():
    products = ListProductsHandler(request_context().uow_factory).handle()
    return jsonify([p.to_dict() for p in products])


@api.get("/products/<product_id>")
def show_product(product_id: str):
    dto = ShowProductHandler(request_context().uow_factory).handle(product_id)
    return jsonify(dto.to_dict())


# --- Categories ----------------------------------------------------------------


@api.post("/categories")
def create_category():
    ctx = request_context()
    body = _body()
    handler = AddCategoryHandler(ctx.uow_factory, retry_policy=ctx.retry_policy)
    dto = handler.handle(
        name=str(body.get("name") or ""),
        description=body.get("description"),
        parent_id=body.get("parent_id"),
        status=body.get("status", "Active"),
    )
    return jsonify(dto.to_dict()), 201


@api.get("/categories")
def list_categories():
    categories = ListCategoriesHandler(request_context().uow_factory).handle()
    return jsonify([c.to_dict() for c in categories])


@api.get(f"/categories/<{_ID}:category_id>")
def show_category(category_id: int):
    dto = ShowCategoryHandler(request_context().uow_factory).handle(category_id)
    return jsonify(dto.to_dict())


# --- Suppliers -----------------------------------------------------------------


@api.post("/suppliers")
def create_supplier():
    ctx = request_context()
    body = _body()
    handler = AddSupplierHandler(ctx.uow_factory, retry_policy=ctx.retry_policy)
    dto = handler.handle(
        name=str(body.get("name") or ""),
        contact_email=body.get("contact_email"),
        phone=body.get("phone"),
        address=body.get("address"),
    )
    return jsonify(dto.to_dict()), 201


@api.get("/suppliers")
def list_suppliers():
    suppliers = ListSuppliersHandler(request_context().uow_factory).handle()
    return jsonify([s.to_dict() for s in suppliers])


@api.get(f"/suppliers/<{_ID}:supplier_id>")
def show_supplier(supplier_id: int):
    dto = ShowSupplierHandler(request_context().uow_factory).handle(supplier_id)
    return jsonify(dto.to_dict())


# --- Purchase orders -----------------------------------------------------------


def _purchase_lines(raw: Any) -> list[PurchaseLineSpec]:
    if not isinstance(raw, list) or not raw:
        raise ValidationError("Field 'lines' must be a non-empty list")
    lines = []
    for item in raw:
        if not isinstance(item, dict):
            raise ValidationError("Each purchase line must be an object")
        missing = [k for k in ("product", "quantity", "price") if k not in item]
        if missing:
            raise ValidationError(f"Purchase line missing field(s): {', '.join(missing)}")
        lines.append(
            PurchaseLineSpec(
                product_id=str(item["product"]),
                quantity=item["quantity"],
                price=item["price"],
            )
        )
    return lines


@api.post("/purchases")
def create_purchase():
    ctx = request_context()
    body = _body()
    handler = CreatePurchaseOrderHandler(ctx.uow_factory, retry_policy=ctx.retry_policy)
    dto = handler.handle(
        supplier_id=body.get("supplier_id"),
        lines=_purchase_lines(body.get("lines")),
        status=body.get("status", "Pending"),
    )
    return jsonify(dto.to_dict()), 201


@api.post(f"/purchases/<{_ID}:order_id>/complete")
def complete_purchase(order_id: int):
    ctx = request_context()
    handler = CompletePurchaseOrderHandler(ctx.uow_factory, retry_policy=ctx.retry_policy)
    return jsonify(handler.handle(order_id).to_dict())


@api.get("/purchases")
def list_purchases():
    orders = ListPurchaseOrdersHandler(request_context().uow_factory).handle()
    return jsonify([o.to_dict() for o in orders])


@api.get(f"/purchases/<{_ID}:order_id>")
def show_purchase(order_id: int):
    dto = ShowPurchaseOrderHandler(request_context().uow_factory).handle(order_id)
    return jsonify(dto.to_dict())


# --- Reports -------------------------------------------------------------------


@api.get("/reports/daily")
def report_daily():
    rows = SalesReportHandler(request_context().uow_factory).daily()
    return jsonify([r.to_dict() for r in rows])


@api.get("/reports/monthly")
def report_monthly():
    rows = SalesReportHandler(request_context().uow_factory).monthly()
    return jsonify([r.to_dict() for r in rows])


@api.get("/reports/by-date")
def report_by_date():
    report = SalesReportHandler(request_context().uow_factory).by_date_range(
        parse_date(request.args.get("start"), "start"),
        parse_date(request.args.get("end"), "end"),
    )
    return jsonify(report.to_dict())
