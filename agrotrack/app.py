"""Flask adapter around :class:`agrotrack.router.Router`.

Flask only carries bytes in and out here: every path and method is sent to
one view, which builds a :class:`Request`, lets the router pick the handler
and turns the resulting :class:`Reply` into a response. Only 200, 404 and
500 ever reach the client.
"""

from __future__ import annotations

import logging
from typing import Optional

from flask import Flask, Response, request
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge
from werkzeug.serving import BaseWSGIServer, make_server

from .router import Router, not_found_reply, server_error_reply
from .settings import Settings
from .types import Reply, Request

logger = logging.getLogger(__name__)

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def _preferred_type() -> Optional[str]:
    accept = request.accept_mimetypes
    if accept.quality("text/plain") > accept.quality("text/html"):
        return "text/plain"
    return "text/html"


def _read_body(limit: int) -> bytes:
    """Read the full request body, refusing anything above ``limit`` bytes."""

    if request.content_length is not None and request.content_length > limit:
        raise RequestEntityTooLarge()
    data = request.get_data(cache=False)
    if len(data) > limit:
        raise RequestEntityTooLarge()
    return data


def _to_response(reply: Reply) -> Response:
    return Response(reply.body_bytes(), status=reply.status, content_type=reply.content_type)


def create_app(settings: Settings, router: Optional[Router] = None) -> Flask:
    """Build the Flask application serving ``settings.public_root``."""

    site_router = router or Router.for_settings(settings)

    app = Flask(__name__, static_folder=None)
    app.config["MAX_CONTENT_LENGTH"] = settings.max_body_bytes
    app.url_map.merge_slashes = False

    @app.route("/", defaults={"path": ""}, methods=ALL_METHODS, provide_automatic_options=False)
    @app.route("/<path:path>", methods=ALL_METHODS, provide_automatic_options=False)
    def handle(path: str) -> Response:
        method = "GET" if request.method == "HEAD" else request.method
        try:
            body = _read_body(settings.max_body_bytes) if method == "POST" else b""
        except RequestEntityTooLarge:
            logger.warning(
                "Rejected %s %s: body larger than %d bytes",
                request.method,
                request.path,
                settings.max_body_bytes,
            )
            return _to_response(server_error_reply())

        incoming = Request(method=method, path=request.path, body=body, accept=_preferred_type())
        return _to_response(site_router.dispatch(incoming))

    @app.errorhandler(HTTPException)
    def handle_http_exception(exc: HTTPException) -> Response:
        if exc.code == 404:
            return _to_response(not_found_reply())
        logger.warning("HTTP error %s on %s %s", exc.code, request.method, request.path)
        return _to_response(server_error_reply())

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception) -> Response:
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return _to_response(server_error_reply())

    return app


def make_site_server(app: Flask, settings: Settings) -> BaseWSGIServer:
    """Bind a threaded Werkzeug server for ``app`` on the configured address."""

    return make_server(settings.host, settings.port, app, threaded=True)
