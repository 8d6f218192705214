"""Extension based content-type lookup for static files."""

from __future__ import annotations

from pathlib import PurePath
from types import MappingProxyType
from typing import Mapping, Union

DEFAULT_CONTENT_TYPE = "application/octet-stream"

MIME_TYPES: Mapping[str, str] = MappingProxyType(
    {
        ".html": "text/html; charset=utf-8",
        ".htm": "text/html; charset=utf-8",
        ".css": "text/css; charset=utf-8",
        ".js": "text/javascript; charset=utf-8",
        ".mjs": "text/javascript; charset=utf-8",
        ".json": "application/json; charset=utf-8",
        ".txt": "text/plain; charset=utf-8",
        ".csv": "text/csv; charset=utf-8",
        ".xml": "application/xml; charset=utf-8",
        ".svg": "image/svg+xml",
        ".png": "image/png",
        ".jpg": "image/jpeg",
        ".jpeg": "image/jpeg",
        ".gif": "image/gif",
        ".webp": "image/webp",
        ".ico": "image/x-icon",
        ".pdf": "application/pdf",
        ".woff": "font/woff",
        ".woff2": "font/woff2",
        ".ttf": "font/ttf",
        ".mp4": "video/mp4",
        ".mp3": "audio/mpeg",
        ".wasm": "application/wasm",
    }
)


def content_type_for(path: Union[str, PurePath]) -> str:
    """Return the content type for ``path`` based on its extension.

    Matching is case-insensitive; unknown or missing extensions map to
    ``application/octet-stream``.
    """

    suffix = PurePath(path).suffix.lower()
    return MIME_TYPES.get(suffix, DEFAULT_CONTENT_TYPE)
