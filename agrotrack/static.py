"""Resolution of request paths to files under the public root.

Request paths are untrusted: they are joined onto the root with a
normalizing join and anything that lands outside the root is refused.
Callers should catch :class:`NotFound`; :class:`Forbidden` derives from it
so a path escape is answered exactly like a missing file.
"""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path
from typing import Tuple, Union

from .mime import content_type_for
from .types import ResolvedFile

logger = logging.getLogger(__name__)

INDEX_FILE = "index.html"


class NotFound(Exception):
    """No readable file exists for the requested path."""


class Forbidden(NotFound):
    """The requested path resolves outside the public root."""


class StaticResolver:
    """Map URL paths to files inside ``root``."""

    def __init__(self, root: Union[str, Path]) -> None:
        self.root = os.path.normpath(os.path.abspath(os.fspath(root)))

    def _join(self, request_path: str) -> str:
        if "\x00" in request_path:
            raise NotFound(request_path)
        relative = request_path.replace("\\", "/").lstrip("/")
        candidate = os.path.normpath(os.path.join(self.root, relative))
        if not self.contains(candidate):
            logger.warning("Rejected path outside public root: %r", request_path)
            raise Forbidden(request_path)
        return candidate

    def contains(self, path: str) -> bool:
        """Return True when ``path`` is the root or lies beneath it."""

        return os.path.commonpath([self.root, path]) == self.root

    def resolve(self, request_path: str) -> ResolvedFile:
        """Resolve ``request_path`` to a file under the public root.

        Directories fall back to their ``index.html``. Raises
        :class:`Forbidden` for paths escaping the root and :class:`NotFound`
        for anything missing or not a regular file. Other ``OSError``
        instances (permission problems, I/O failures) propagate.
        """

        candidate = self._join(request_path)
        if os.path.isdir(candidate):
            candidate = os.path.join(candidate, INDEX_FILE)

        try:
            info = os.stat(candidate)
        except (FileNotFoundError, NotADirectoryError):
            raise NotFound(request_path) from None

        if not stat.S_ISREG(info.st_mode):
            raise NotFound(request_path)

        return ResolvedFile(path=Path(candidate), content_type=content_type_for(candidate))

    def read(self, request_path: str) -> Tuple[ResolvedFile, bytes]:
        """Resolve ``request_path`` and return the file with its contents."""

        resolved = self.resolve(request_path)
        try:
            data = resolved.path.read_bytes()
        except FileNotFoundError:
            # removed between stat and open
            raise NotFound(request_path) from None
        return resolved, data
