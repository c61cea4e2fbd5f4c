"""SQLAlchemy table definitions and engine construction.

Tables are declared with SQLAlchemy Core so repositories can issue the
conditional ``UPDATE ... WHERE stock >= :amount`` that the ledger relies
on, and read ``rowcount`` to learn whether it applied.

Money columns are stored as decimal strings (same representation the
domain uses) so SQLite keeps them exact.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    String,
    Table,
    create_engine,
    event,
)
from sqlalchemy.engine import Connection, CursorResult, Engine
from sqlalchemy.exc import DBAPIError
from sqlalchemy.sql import Executable

from ims.domain.exceptions import TransactionAbortedError
from ims.domain.model.value_objects import MAX_QUANTITY

logger = logging.getLogger(__name__)

metadata = MetaData()

categories = Table(
    "categories",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(200), nullable=False),
    Column("name_key", String(200), nullable=False, unique=True),
    Column("description", String(1000), nullable=False, default=""),
    Column("parent_id", Integer, ForeignKey("categories.id"), nullable=True),
    Column("status", String(16), nullable=False, default="Active"),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

suppliers = Table(
    "suppliers",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(200), nullable=False),
    Column("contact_email", String(254), nullable=True),
    Column("phone", String(50), nullable=True),
    Column("address", String(500), nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

products = Table(
    "products",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(200), nullable=False),
    # Lower-cased name; enforces case-insensitive uniqueness.
    Column("name_key", String(200), nullable=False, unique=True),
    Column("category_id", Integer, ForeignKey("categories.id"), nullable=True, index=True),
    Column("stock", Integer, nullable=False, default=0),
    Column("price", String(32), nullable=False),
    Column("currency", String(3), nullable=False, default="USD"),
    Column("status", String(16), nullable=False, default="Active"),
    Column("created_at", DateTime(timezone=True), nullable=False),
    CheckConstraint("stock >= 0", name="ck_products_stock_non_negative"),
)

sales = Table(
    "sales",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("product_id", Integer, ForeignKey("products.id"), nullable=False, index=True),
    Column("quantity", Integer, nullable=False),
    Column("price", String(32), nullable=False),
    Column("total", String(32), nullable=False),
    Column("currency", String(3), nullable=False, default="USD"),
    Column("status", String(16), nullable=False, default="Completed"),
    Column("sale_date", DateTime(timezone=True), nullable=False, index=True),
    CheckConstraint("quantity > 0", name="ck_sales_quantity_positive"),
)

purchase_orders = Table(
    "purchase_orders",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("supplier_id", Integer, ForeignKey("suppliers.id"), nullable=False, index=True),
    Column("status", String(16), nullable=False, default="Pending"),
    Column("order_date", DateTime(timezone=True), nullable=False),
)

purchase_order_lines = Table(
    "purchase_order_lines",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("order_id", Integer, ForeignKey("purchase_orders.id"), nullable=False, index=True),
    Column("product_id", Integer, ForeignKey("products.id"), nullable=False),
    Column("quantity", Integer, nullable=False),
    Column("price", String(32), nullable=False),
    Column("currency", String(3), nullable=False, default="USD"),
    CheckConstraint("quantity > 0", name="ck_purchase_lines_quantity_positive"),
)


def build_engine(database_url: str, timeout: float = 5.0, echo: bool = False) -> Engine:
    """Create an engine whose writers wait up to ``timeout`` seconds for locks."""
    connect_args: dict = {}
    if database_url.startswith("sqlite"):
        connect_args = {"timeout": timeout, "check_same_thread": False}
    elif database_url.startswith("postgresql"):
        connect_args = {"options": f"-c lock_timeout={int(timeout * 1000)}"}

    engine = create_engine(
        database_url,
        echo=echo,
        connect_args=connect_args,
        pool_pre_ping=True,
    )

    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)

    logger.info(
        "engine_initialized dialect=%s timeout=%s", engine.dialect.name, timeout
    )
    return engine


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_schema(engine: Engine) -> None:
    metadata.create_all(engine)
    logger.info("schema_created tables=%s", ",".join(sorted(metadata.tables)))


def run_statement(connection: Connection, statement: Executable) -> CursorResult:
    """Execute inside the current unit; storage failures abort the unit."""
    try:
        return connection.execute(statement)
    except DBAPIError as exc:
        raise TransactionAbortedError(f"Storage operation failed: {exc.orig}") from exc


def as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; everything is stored as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def product_key(product_id: str) -> int | None:
    """Product ids are strings in the domain and integers in storage."""
    text = str(product_id).strip()
    if not text.isdigit() or int(text) > MAX_QUANTITY:
        return None
    return int(text)
