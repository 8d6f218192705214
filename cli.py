"""AgroTrack command line interface."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

# Load environment variables from .env file
load_dotenv()

from agrotrack.app import create_app, make_site_server
from agrotrack.settings import Settings

console = Console()


def _configure_logging(detailed: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if detailed else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=detailed, rich_tracebacks=True)],
        force=True,
    )
    # request lines are logged by the router
    logging.getLogger("werkzeug").setLevel(logging.WARNING)


def _serve(
    *,
    host: Optional[str],
    port: Optional[int],
    public: Optional[Path],
    data_file: Optional[Path],
    max_body: Optional[int],
    detailed_log: bool,
) -> None:
    _configure_logging(detailed_log)

    settings = Settings.from_env().with_overrides(
        host=host,
        port=port,
        public_root=public,
        data_file=data_file,
        max_body_bytes=max_body,
    )

    if not settings.public_root.is_dir():
        console.print(f"[red]Public directory not found: {settings.public_root}[/red]")
        raise typer.Exit(1)

    app = create_app(settings)
    try:
        server = make_site_server(app, settings)
    except OSError as exc:
        console.print(f"[red]Cannot listen on {settings.host}:{settings.port}: {exc}[/red]")
        raise typer.Exit(1)

    console.print(f"Servidor AgroTrack iniciado en http://localhost:{server.server_port}/")
    console.print(f"Public: {settings.public_root}")
    console.print(f"Consultas: {settings.data_file}")

    try:
        server.serve_forever()
    except KeyboardInterrupt:
        console.print("\nServidor detenido.")
    finally:
        server.server_close()


main = typer.Typer(help="AgroTrack site server.")


@main.callback()
def _root() -> None:
    """AgroTrack site server."""


@main.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Interface to bind (default 0.0.0.0)"),
    port: Optional[int] = typer.Option(
        None,
        "--port",
        min=0,
        max=65535,
        help="Port to listen on (default: $PORT or 8888)",
    ),
    public: Optional[Path] = typer.Option(None, "--public", help="Directory served as the public root"),
    data_file: Optional[Path] = typer.Option(None, "--data-file", help="Contact log file"),
    max_body: Optional[int] = typer.Option(
        None,
        "--max-body",
        min=1,
        help="Largest accepted request body in bytes",
    ),
    detailed_log: bool = typer.Option(
        False,
        "--detailed-log/--concise-log",
        help="Log debug output",
    ),
) -> None:
    """Serve the site until interrupted."""

    _serve(
        host=host,
        port=port,
        public=public,
        data_file=data_file,
        max_body=max_body,
        detailed_log=detailed_log,
    )


if __name__ == "__main__":
    main()
