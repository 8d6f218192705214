"""Runtime settings for the site server.

Settings are built once at startup and passed to the router and the HTTP
adapter; nothing reads the environment after that point. The only
environment variable consulted is ``PORT``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping, Optional

from .contact_log import DEFAULT_TIMESTAMP_FORMAT

logger = logging.getLogger(__name__)

PORT_ENV = "PORT"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8888
DEFAULT_PUBLIC_DIR = "public"
DEFAULT_DATA_FILE = os.path.join("data", "consultas.txt")
DEFAULT_MAX_BODY_BYTES = 1024 * 1024


@dataclass(frozen=True)
class Settings:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    public_root: Path = Path(DEFAULT_PUBLIC_DIR)
    data_file: Path = Path(DEFAULT_DATA_FILE)
    max_body_bytes: int = DEFAULT_MAX_BODY_BYTES
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, base: Optional[Path] = None) -> "Settings":
        """Build settings from ``environ`` (defaults to ``os.environ``).

        Relative paths are anchored at ``base`` (the working directory when
        omitted). An unusable ``PORT`` value is ignored with a warning.
        """

        env = os.environ if environ is None else environ
        root = Path(base) if base is not None else Path.cwd()
        port = _parse_port(env.get(PORT_ENV))
        return cls(
            port=port,
            public_root=(root / DEFAULT_PUBLIC_DIR).resolve(),
            data_file=(root / DEFAULT_DATA_FILE).resolve(),
        )

    def with_overrides(self, **values: Any) -> "Settings":
        """Return a copy with every non-``None`` value in ``values`` applied."""

        changes = {key: value for key, value in values.items() if value is not None}
        for key in ("public_root", "data_file"):
            if key in changes:
                changes[key] = Path(changes[key]).expanduser().resolve()
        return replace(self, **changes)


def _parse_port(raw: Optional[str]) -> int:
    if raw is None or not raw.strip():
        return DEFAULT_PORT
    try:
        port = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not a number, using %d", PORT_ENV, raw, DEFAULT_PORT)
        return DEFAULT_PORT
    if not 0 <= port <= 65535:
        logger.warning("Ignoring %s=%r: out of range, using %d", PORT_ENV, raw, DEFAULT_PORT)
        return DEFAULT_PORT
    return port
