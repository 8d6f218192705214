from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Union


NAME_PLACEHOLDER = "Sin nombre"
EMAIL_PLACEHOLDER = "Sin email"


@dataclass(frozen=True)
class ContactRecord:
    """A single contact-form submission as stored in the log."""

    timestamp: str
    name: str = NAME_PLACEHOLDER
    email: str = EMAIL_PLACEHOLDER
    message: str = ""


@dataclass(frozen=True)
class ResolvedFile:
    """A static file found under the public root."""

    path: Path
    content_type: str


@dataclass(frozen=True)
class Request:
    """Framework independent view of an incoming HTTP request."""

    method: str
    path: str
    body: bytes = b""
    accept: Optional[str] = None  # preferred response type, if the client stated one


@dataclass
class Reply:
    """Response produced by a route handler."""

    status: int
    content_type: str
    body: Union[str, bytes] = ""

    def body_bytes(self) -> bytes:
        if isinstance(self.body, bytes):
            return self.body
        return self.body.encode("utf-8")


Handler = Callable[[Request], Reply]


@dataclass(frozen=True)
class Route:
    method: str
    path: str
    handler: Handler
