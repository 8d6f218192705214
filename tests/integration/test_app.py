from __future__ import annotations

import pytest

pytest.importorskip("flask")

from agrotrack.app import create_app
from agrotrack.settings import Settings


@pytest.fixture
def client(settings: Settings):
    app = create_app(settings)
    app.testing = True
    return app.test_client()


def test_index_serves_public_index(client, public_root) -> None:
    response = client.get("/")

    assert response.status_code == 200
    assert response.content_type == "text/html; charset=utf-8"
    assert response.get_data(as_text=True) == (public_root / "index.html").read_text(encoding="utf-8")


def test_contact_submission_then_listing(client) -> None:
    response = client.post(
        "/contacto/cargar",
        data="nombre=Ana&email=ana@x.com&mensaje=Hola",
        content_type="application/x-www-form-urlencoded",
    )

    assert response.status_code == 200
    page = response.get_data(as_text=True)
    assert "Ana" in page
    assert "ana@x.com" in page

    listing = client.get("/contacto/listar")
    assert listing.status_code == 200
    assert "Nombre: Ana" in listing.get_data(as_text=True)


def test_unknown_path_is_generic_404(client) -> None:
    response = client.get("/no-existe")

    assert response.status_code == 404
    assert response.get_data(as_text=True) == "<h1>404 - Página no encontrada</h1>"


def test_empty_contact_submission_stores_placeholders(client, settings: Settings) -> None:
    response = client.post("/contacto/cargar", data=b"")

    assert response.status_code == 200
    stored = settings.data_file.read_text(encoding="utf-8")
    assert "Nombre: Sin nombre\n" in stored
    assert "Email: Sin email\n" in stored
    assert "Mensaje: \n" in stored


def test_body_parsed_without_form_content_type(client, settings: Settings) -> None:
    client.post("/contacto/cargar", data=b"nombre=Luis", content_type="text/plain")

    assert "Nombre: Luis\n" in settings.data_file.read_text(encoding="utf-8")


def test_listing_before_any_submission(client) -> None:
    response = client.get("/contacto/listar")

    assert response.status_code == 200
    assert "No hay consultas registradas" in response.get_data(as_text=True)


def test_listing_plain_text_by_accept_header(client) -> None:
    response = client.get("/contacto/listar", headers={"Accept": "text/plain"})

    assert response.status_code == 200
    assert response.content_type == "text/plain; charset=utf-8"


def test_static_files_and_directory_index(client) -> None:
    css = client.get("/css/estilos.css")
    assert css.status_code == 200
    assert css.content_type == "text/css; charset=utf-8"

    docs = client.get("/docs/")
    assert docs.status_code == 200
    assert docs.get_data(as_text=True) == "<h1>Docs</h1>"

    binary = client.get("/logo.bin")
    assert binary.content_type == "application/octet-stream"
    assert binary.data == b"\x00\x01\x02"


def test_encoded_traversal_is_404(client) -> None:
    response = client.get("/%2e%2e/secret.txt")

    assert response.status_code == 404
    assert b"top secret" not in response.data


def test_other_methods_are_404(client) -> None:
    assert client.put("/").status_code == 404
    assert client.delete("/contacto/listar").status_code == 404
    assert client.options("/").status_code == 404
    assert client.post("/").status_code == 404


def test_head_behaves_like_get(client) -> None:
    assert client.head("/").status_code == 200
    assert client.head("/no-existe").status_code == 404


def test_oversized_body_is_rejected(client, settings: Settings) -> None:
    response = client.post(
        "/contacto/cargar",
        data="mensaje=" + "x" * settings.max_body_bytes,
        content_type="application/x-www-form-urlencoded",
    )

    assert response.status_code == 500
    assert response.get_data(as_text=True) == "<h1>Error interno del servidor</h1>"
    assert not settings.data_file.exists()


def test_unexpected_error_is_generic_500(client, monkeypatch) -> None:
    def boom(self, request_path):
        raise OSError("disk on fire at /srv/public")

    monkeypatch.setattr("agrotrack.static.StaticResolver.read", boom)

    response = client.get("/")

    assert response.status_code == 500
    assert "/srv/public" not in response.get_data(as_text=True)


def test_recovery_form_echo(client) -> None:
    response = client.post(
        "/auth/recuperar",
        data={"usuario": "<i>juan</i>", "email": "j@x.com", "clave": "1234"},
    )

    page = response.get_data(as_text=True)
    assert response.status_code == 200
    assert "&lt;i&gt;juan&lt;/i&gt;" in page
    assert "1234" not in page
