from __future__ import annotations

import html

import pytest

from agrotrack.escape import escape_html
from agrotrack.mime import DEFAULT_CONTENT_TYPE, content_type_for


@pytest.mark.parametrize(
    "text",
    [
        "<script>alert('x')</script>",
        'Tom & "Jerry"',
        "a > b && c < d",
        "sin caracteres especiales",
        "",
    ],
)
def test_escape_removes_raw_characters_and_unescapes_back(text: str) -> None:
    escaped = escape_html(text)

    for char in "<>\"'":
        assert char not in escaped
    assert html.unescape(escaped) == text


def test_escape_ampersand_only_appears_in_entities() -> None:
    escaped = escape_html("a & b")
    assert escaped == "a &amp; b"


def test_escape_none_is_empty() -> None:
    assert escape_html(None) == ""


@pytest.mark.parametrize(
    "path, expected",
    [
        ("index.html", "text/html; charset=utf-8"),
        ("/css/estilos.CSS", "text/css; charset=utf-8"),
        ("app.js", "text/javascript; charset=utf-8"),
        ("logo.png", "image/png"),
        ("foto.JPEG", "image/jpeg"),
        ("icono.svg", "image/svg+xml"),
    ],
)
def test_known_extensions(path: str, expected: str) -> None:
    assert content_type_for(path) == expected


@pytest.mark.parametrize("path", ["archivo.xyz", "README", "carpeta/", ".bashrc"])
def test_unknown_extensions_fall_back(path: str) -> None:
    assert content_type_for(path) == DEFAULT_CONTENT_TYPE
