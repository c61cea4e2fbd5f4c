"""Per-request context for the HTTP layer.

Each request gets its own ``RequestContext`` carrying the collaborators
the view needs; nothing request-related is kept in module globals.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass

from flask import current_app, g, request

from ims.application.retry import RetryPolicy
from ims.domain.repository.unit_of_work import UnitOfWorkFactory

CONTAINER_KEY = "ims.container"


@dataclass(frozen=True)
class RequestContext:
    request_id: str
    uow_factory: UnitOfWorkFactory
    retry_policy: RetryPolicy


def open_request_context() -> None:
    container = current_app.extensions[CONTAINER_KEY]
    g.ims = RequestContext(
        request_id=request.headers.get("X-Request-ID") or uuid.uuid4().hex,
        uow_factory=container.uow_factory,
        retry_policy=container.retry_policy,
    )


def request_context() -> RequestContext:
    return g.ims
