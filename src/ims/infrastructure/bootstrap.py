"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions (``UnitOfWorkFactory``,
``RetryPolicy``).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from sqlalchemy.engine import Engine
from sqlalchemy.engine.url import make_url

from ims.application.retry import RetryPolicy
from ims.domain.repository.unit_of_work import UnitOfWorkFactory
from ims.infrastructure.config import Settings, load_settings
from ims.infrastructure.logging_config import configure_logging
from ims.infrastructure.persistence.schema import build_engine, create_schema
from ims.infrastructure.persistence.sql_unit_of_work import SqlAlchemyUnitOfWork


@dataclass(frozen=True)
class Container:
    settings: Settings
    engine: Engine
    uow_factory: UnitOfWorkFactory
    retry_policy: RetryPolicy


def build_container(settings: Settings | None = None, init_schema: bool = True) -> Container:
    """Build the engine, unit-of-work factory and retry policy from settings."""
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    _ensure_sqlite_directory(settings.database_url)
    engine = build_engine(
        settings.database_url, timeout=settings.db_timeout, echo=settings.echo_sql
    )
    if init_schema:
        create_schema(engine)

    return Container(
        settings=settings,
        engine=engine,
        uow_factory=lambda: SqlAlchemyUnitOfWork(engine),
        retry_policy=RetryPolicy(
            attempts=settings.retry_attempts, backoff=settings.retry_backoff
        ),
    )


def _ensure_sqlite_directory(database_url: str) -> None:
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite" and url.database not in (None, "", ":memory:"):
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
