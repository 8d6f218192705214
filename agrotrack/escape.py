from __future__ import annotations

from typing import Optional

from markupsafe import escape


def escape_html(text: Optional[str]) -> str:
    """Escape ``& < > " '`` so ``text`` can be embedded in an HTML body."""

    if text is None:
        return ""
    return str(escape(str(text)))
