"""Fixed HTML bodies produced by the server.

Every value interpolated here must already be escaped with
:func:`agrotrack.escape.escape_html`, except where a function escapes it
itself (the page builders below do).
"""

from __future__ import annotations

from .escape import escape_html
from .types import ContactRecord

EMPTY_LOG_MESSAGE = "No hay consultas registradas todavía."

NOT_FOUND_HTML = "<h1>404 - Página no encontrada</h1>"
SERVER_ERROR_HTML = "<h1>Error interno del servidor</h1>"


def _document(title: str, body: str) -> str:
    return (
        "<!doctype html>\n"
        '<html lang="es">\n'
        '<head><meta charset="utf-8"><title>'
        f"{escape_html(title)}</title></head>\n"
        f"<body>\n{body}\n</body>\n"
        "</html>\n"
    )


def thank_you_page(record: ContactRecord) -> str:
    body = "\n".join(
        [
            "<h1>Gracias por su consulta</h1>",
            f"<p><strong>Nombre:</strong> {escape_html(record.name)}</p>",
            f"<p><strong>Email:</strong> {escape_html(record.email)}</p>",
            f"<p><strong>Mensaje:</strong> {escape_html(record.message)}</p>",
            '<p><a href="/">Volver al inicio</a> | '
            '<a href="/contacto/listar">Ver todas las consultas</a></p>',
        ]
    )
    return _document("Gracias", body)


def recovery_page(user: str, email: str, has_password: bool) -> str:
    password_note = "recibida" if has_password else "no informada"
    body = "\n".join(
        [
            "<h1>Recuperación de contraseña</h1>",
            f"<p><strong>Usuario:</strong> {escape_html(user)}</p>",
            f"<p><strong>Email:</strong> {escape_html(email)}</p>",
            f"<p><strong>Clave:</strong> {password_note}</p>",
            '<p><a href="/login">Volver al login</a></p>',
        ]
    )
    return _document("Recuperar contraseña", body)


def listing_page(content: str) -> str:
    body = "\n".join(
        [
            "<h1>Consultas recibidas</h1>",
            f"<pre>{escape_html(content)}</pre>",
            '<p><a href="/">Volver al inicio</a></p>',
        ]
    )
    return _document("Consultas", body)


def empty_listing_page() -> str:
    body = "\n".join(
        [
            "<h1>Consultas recibidas</h1>",
            f"<p>{escape_html(EMPTY_LOG_MESSAGE)}</p>",
            '<p><a href="/contacto">Enviar una consulta</a></p>',
        ]
    )
    return _document("Consultas", body)
