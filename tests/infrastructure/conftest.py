import pytest

from ims.infrastructure.bootstrap import build_container
from ims.infrastructure.config import Settings
from ims.infrastructure.logging_config import reset_logging


@pytest.fixture
def settings(tmp_path):
    # A file database: every pooled connection sees the same data.
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'ims.db'}",
        db_timeout=10.0,
        log_level="WARNING",
        retry_attempts=5,
        retry_backoff=0.0,
    )


@pytest.fixture
def container(settings):
    container = build_container(settings)
    yield container
    container.engine.dispose()
    reset_logging()


@pytest.fixture
def uow_factory(container):
    return container.uow_factory
