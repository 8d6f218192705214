from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional, Tuple
from urllib.parse import parse_qsl

from . import pages
from .contact_log import ContactLog, format_timestamp, record_from_form
from .settings import Settings
from .static import NotFound, StaticResolver
from .types import EMAIL_PLACEHOLDER, NAME_PLACEHOLDER, Handler, Reply, Request, Route

logger = logging.getLogger(__name__)

HTML = "text/html; charset=utf-8"
PLAIN_TEXT = "text/plain; charset=utf-8"


def parse_form(body: bytes) -> Dict[str, str]:
    """Decode an ``application/x-www-form-urlencoded`` body.

    The first value of a repeated field wins; undecodable bytes are replaced.
    """

    fields: Dict[str, str] = {}
    text = body.decode("utf-8", errors="replace")
    for key, value in parse_qsl(text, keep_blank_values=True):
        fields.setdefault(key, value)
    return fields


def not_found_reply() -> Reply:
    return Reply(status=404, content_type=HTML, body=pages.NOT_FOUND_HTML)


def server_error_reply() -> Reply:
    return Reply(status=500, content_type=HTML, body=pages.SERVER_ERROR_HTML)


class SiteHandlers:
    """Route handlers bound to one public root and one contact log."""

    def __init__(
        self,
        settings: Settings,
        resolver: Optional[StaticResolver] = None,
        store: Optional[ContactLog] = None,
    ) -> None:
        self.settings = settings
        self.resolver = resolver or StaticResolver(settings.public_root)
        self.store = store or ContactLog(settings.data_file)

    def page(self, filename: str) -> Handler:
        """Handler serving ``filename`` from the public root."""

        def serve(_request: Request) -> Reply:
            return self._serve_file(filename)

        return serve

    def static(self, request: Request) -> Reply:
        return self._serve_file(request.path)

    def _serve_file(self, path: str) -> Reply:
        try:
            resolved, data = self.resolver.read(path)
        except NotFound:
            return not_found_reply()
        return Reply(status=200, content_type=resolved.content_type, body=data)

    def recover_password(self, request: Request) -> Reply:
        form = parse_form(request.body)
        user = form.get("usuario") or form.get("nombre") or NAME_PLACEHOLDER
        email = form.get("email") or EMAIL_PLACEHOLDER
        logger.debug("Password recovery form received")
        body = pages.recovery_page(user, email, has_password=bool(form.get("clave")))
        return Reply(status=200, content_type=HTML, body=body)

    def submit_contact(self, request: Request) -> Reply:
        form = parse_form(request.body)
        record = record_from_form(form, timestamp=format_timestamp(fmt=self.settings.timestamp_format))
        written = self.store.append(record)
        logger.debug("Stored contact record (%d bytes)", written)
        return Reply(status=200, content_type=HTML, body=pages.thank_you_page(record))

    def list_contacts(self, request: Request) -> Reply:
        # a missing file and an empty one are both the empty state
        content = self.store.read_all()
        if request.accept == "text/plain":
            return Reply(status=200, content_type=PLAIN_TEXT, body=content or pages.EMPTY_LOG_MESSAGE)
        if not content:
            return Reply(status=200, content_type=HTML, body=pages.empty_listing_page())
        return Reply(status=200, content_type=HTML, body=pages.listing_page(content))

    def not_found(self, _request: Request) -> Reply:
        return not_found_reply()


def build_route_table(handlers: SiteHandlers) -> Tuple[Route, ...]:
    """Return the fixed route table for ``handlers``; first match wins."""

    index = handlers.page("index.html")
    return (
        Route("GET", "/", index),
        Route("GET", "/index.html", index),
        Route("GET", "/productos.html", handlers.page("productos.html")),
        Route("GET", "/login", handlers.page("login.html")),
        Route("GET", "/contacto", handlers.page("contacto.html")),
        Route("POST", "/auth/recuperar", handlers.recover_password),
        Route("POST", "/contacto/cargar", handlers.submit_contact),
        Route("GET", "/contacto/listar", handlers.list_contacts),
    )


class Router:
    """Exact (method, path) dispatch with a static-file fallback for GET."""

    def __init__(self, routes: Iterable[Route], fallback: Handler, not_found: Handler) -> None:
        self.routes: Tuple[Route, ...] = tuple(routes)
        self.fallback = fallback
        self.not_found = not_found

    @classmethod
    def for_settings(cls, settings: Settings) -> "Router":
        handlers = SiteHandlers(settings)
        return cls(build_route_table(handlers), fallback=handlers.static, not_found=handlers.not_found)

    def route(self, method: str, path: str) -> Handler:
        for route in self.routes:
            if route.method == method and route.path == path:
                return route.handler
        if method == "GET":
            return self.fallback
        return self.not_found

    def dispatch(self, request: Request) -> Reply:
        """Run the matching handler; any exception becomes the generic 500."""

        try:
            reply = self.route(request.method, request.path)(request)
        except Exception:
            logger.exception("Error handling %s %s", request.method, request.path)
            reply = server_error_reply()
        logger.info("%s %s -> %d", request.method, request.path, reply.status)
        return reply
