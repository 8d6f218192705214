from __future__ import annotations

from pathlib import Path

import pytest

from agrotrack.settings import Settings

INDEX_HTML = "<html><body><h1>AgroTrack</h1></body></html>"


@pytest.fixture
def public_root(tmp_path: Path) -> Path:
    root = tmp_path / "public"
    (root / "css").mkdir(parents=True)
    (root / "docs").mkdir()
    (root / "empty").mkdir()
    (root / "index.html").write_text(INDEX_HTML, encoding="utf-8")
    (root / "productos.html").write_text("<h1>Productos</h1>", encoding="utf-8")
    (root / "login.html").write_text("<h1>Ingresar</h1>", encoding="utf-8")
    (root / "contacto.html").write_text("<h1>Contacto</h1>", encoding="utf-8")
    (root / "css" / "estilos.css").write_text("body { margin: 0; }", encoding="utf-8")
    (root / "docs" / "index.html").write_text("<h1>Docs</h1>", encoding="utf-8")
    (root / "logo.bin").write_bytes(b"\x00\x01\x02")
    (tmp_path / "secret.txt").write_text("top secret", encoding="utf-8")
    return root


@pytest.fixture
def settings(tmp_path: Path, public_root: Path) -> Settings:
    return Settings(
        host="127.0.0.1",
        port=0,
        public_root=public_root,
        data_file=tmp_path / "data" / "consultas.txt",
        max_body_bytes=4096,
    )
