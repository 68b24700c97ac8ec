"""Falcon ASGI application."""

import falcon
import falcon.asgi
import structlog
from falcon.asgi import App

from docrag.interfaces.api.resources.health import HealthResource
from docrag.interfaces.api.resources.retrieval import (
    DocumentRetrieveResource,
    RetrieveResource,
)

logger = structlog.get_logger()


async def handle_unexpected_error(req, resp, ex, params) -> None:
    """Log unhandled exceptions and answer 500."""
    logger.exception("unhandled_request_error", path=req.path, method=req.method)
    resp.status = falcon.HTTP_500
    resp.media = {"title": "500 Internal Server Error"}


def create_app(
    retrieve_resource: RetrieveResource,
    document_retrieve_resource: DocumentRetrieveResource,
    health_resource: HealthResource,
    middleware: list | None = None,
) -> App:
    """Create Falcon ASGI app with routes."""
    app = falcon.asgi.App(middleware=middleware or [])
    app.add_error_handler(Exception, handle_unexpected_error)
    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/health/ready", health_resource, suffix="ready")
    app.add_route("/v1/retrieve", retrieve_resource)
    app.add_route("/v1/retrieve/documents", document_retrieve_resource)
    return app
