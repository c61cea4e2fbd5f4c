"""Flask application factory for the JSON API."""

from __future__ import annotations

from flask import Flask

from ims.infrastructure.bootstrap import Container, build_container
from ims.infrastructure.web.context import CONTAINER_KEY, open_request_context
from ims.infrastructure.web.errors import register_error_handlers
from ims.infrastructure.web.routes import api


def create_app(container: Container | None = None) -> Flask:
    app = Flask(__name__)
    app.extensions[CONTAINER_KEY] = container or build_container()
    app.before_request(open_request_context)
    app.register_blueprint(api)
    register_error_handlers(app)
    return app
