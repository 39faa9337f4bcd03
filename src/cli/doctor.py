"""Doctor command for environment diagnostics."""

from __future__ import annotations

import os
from pathlib import Path
from urllib.parse import urlsplit

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_client
from core.config import (
    IDENTITY_DEFAULTS,
    AppSettings,
    env_var_name,
    load_properties,
    load_settings,
    resolve_identity,
    write_properties,
)

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    parts = urlsplit(url)
    origin = f"{parts.scheme}://{parts.netloc}/"
    try:
        with build_client(settings) as client:
            response = client.get(origin)
        return True, f"HTTP {response.status_code} from {origin}"
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        return False, str(exc)


def _check_writable(path: Path) -> tuple[bool, str]:
    target_dir = path.resolve().parent
    if not target_dir.is_dir():
        return False, f"{target_dir} does not exist"
    if not os.access(target_dir, os.W_OK):
        return False, f"{target_dir} is not writable"
    return True, str(path)


def _source_of(key: str, properties: dict[str, str]) -> str:
    env_name = env_var_name(key)
    if (os.environ.get(env_name) or "").strip():
        return f"env {env_name}"
    if key in properties:
        return "properties"
    return "default"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings, settings_error = load_settings()
    properties = load_properties(settings.properties_file)
    identity = resolve_identity(os.environ, properties)

    table = Table(title="BFHL Submit Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    if settings_error is not None:
        detail = f"Invalid BFHL_* values, using defaults ({settings_error.error_count()} errors)"
        table.add_row("Settings", "WARN", detail)

    # Identity
    values = {"name": identity.name, "regNo": identity.reg_no, "email": identity.email}
    for key in IDENTITY_DEFAULTS:
        source = _source_of(key, properties)
        status = "DEFAULT" if source == "default" else "OK"
        table.add_row(key, status, f"{values[key]} ({source})")

    table.add_row("Endpoint", "OK", settings.generate_webhook_url)
    table.add_row("HTTP timeout", "OK", f"{settings.http_timeout_seconds:g}s")

    ok_out, detail_out = _check_writable(settings.output_path)
    table.add_row("Output file", "OK" if ok_out else "WARN", detail_out)

    # Connectivity (best-effort)
    ok_http, detail_http = _check_http(settings.generate_webhook_url, settings)
    table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not ok_out:
        _console.print(
            "\n[yellow]Note:[/yellow] The local copy is best-effort; the query is still submitted."
        )


@app.command(name="setup")
def setup() -> None:
    """Interactive identity setup (stores name/regNo/email in the properties file)."""

    settings, _ = load_settings()
    current = resolve_identity(os.environ, load_properties(settings.properties_file))

    name = typer.prompt("Name", default=current.name, show_default=True).strip()
    reg_no = typer.prompt("Registration number", default=current.reg_no, show_default=True).strip()
    email = typer.prompt("Email", default=current.email, show_default=True).strip()

    if not name or not reg_no or not email:
        raise typer.BadParameter("name, regNo and email are required")

    path = write_properties(settings.properties_file, {"name": name, "regNo": reg_no, "email": email})
    _console.print(f"[green]Saved identity to:[/green] {path}")
