"""Append-only storage for contact-form submissions.

Records live in a single human-readable text file. Each record is written
as one complete block with a single unbuffered append, which keeps
concurrent writers from interleaving partial records without any lock.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Mapping, Optional, Union

from .types import EMAIL_PLACEHOLDER, NAME_PLACEHOLDER, ContactRecord

logger = logging.getLogger(__name__)

SEPARATOR = "-" * 25
DEFAULT_TIMESTAMP_FORMAT = "%d/%m/%y %H:%M"


def format_timestamp(moment: Optional[datetime] = None, fmt: str = DEFAULT_TIMESTAMP_FORMAT) -> str:
    return (moment or datetime.now()).strftime(fmt)


def record_from_form(
    form: Mapping[str, str],
    *,
    timestamp: Optional[str] = None,
) -> ContactRecord:
    """Build a record from submitted form fields.

    Missing or blank ``nombre``/``email`` fall back to placeholders and a
    missing ``mensaje`` becomes an empty string.
    """

    return ContactRecord(
        timestamp=timestamp or format_timestamp(),
        name=form.get("nombre") or NAME_PLACEHOLDER,
        email=form.get("email") or EMAIL_PLACEHOLDER,
        message=form.get("mensaje") or "",
    )


def format_record(record: ContactRecord) -> str:
    lines = [
        SEPARATOR,
        f"Fecha: {record.timestamp}",
        f"Nombre: {record.name}",
        f"Email: {record.email}",
        f"Mensaje: {record.message}",
        SEPARATOR,
        "",
        "",
    ]
    return "\n".join(lines)


class ContactLog:
    """Reader/writer for the contact log file at ``path``."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def append(self, record: ContactRecord) -> int:
        """Append ``record`` and return the number of bytes written."""

        block = format_record(record).encode("utf-8")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # buffering=0 gives one write() syscall for the whole block
        with open(self.path, "ab", buffering=0) as handle:
            written = handle.write(block)
        if written != len(block):
            raise OSError(f"short write to contact log ({written} of {len(block)} bytes)")
        logger.debug("Appended %d bytes to %s", written, self.path)
        return written

    def read_all(self) -> Optional[str]:
        """Return the whole log, or ``None`` if nothing was stored yet.

        Undecodable bytes are replaced rather than failing the read.
        """

        try:
            return self.path.read_text(encoding="utf-8", errors="replace")
        except FileNotFoundError:
            return None

    def count(self) -> int:
        """Number of records stored so far."""

        content = self.read_all()
        if content is None:
            return 0
        lines = content.splitlines()
        return sum(
            1
            for previous, line in zip(lines, lines[1:])
            if previous == SEPARATOR and line.startswith("Fecha: ")
        )
