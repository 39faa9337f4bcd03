"""CLI principal (Typer).

Comandos:
- `run`    ejecuta el flujo completo (generateWebhook -> query -> fichero -> submission)
- `query`  imprime la query final sin tocar la red
- `doctor` diagnósticos de configuración/conectividad
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import typer
from rich.console import Console

from adapters.challenge_api import HiringChallengeClient
from adapters.http_client import build_client
from cli.doctor import app as doctor_app
from cli.logging_setup import configure_logging
from cli.ui_components import build_query_panel, build_summary_table, print_banner
from core.config import load_properties, load_settings, resolve_identity
from core.query import build_final_query
from core.services.submission_pipeline import PipelineHooks, run_submission

app = typer.Typer(no_args_is_help=True, help="Submit the SQL challenge answer to the hiring webhook.")
app.add_typer(doctor_app, name="doctor")

_console = Console()
logger = logging.getLogger(__name__)


@app.command(name="run")
def run_command(
    name: str | None = typer.Option(None, "--name", help="Override the resolved candidate name."),
    reg_no: str | None = typer.Option(None, "--reg-no", help="Override the resolved registration number."),
    email: str | None = typer.Option(None, "--email", help="Override the resolved email."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Where to save the final query."),
    timeout: float | None = typer.Option(None, "--timeout", min=0.1, help="HTTP timeout in seconds."),
    properties: Path | None = typer.Option(None, "--properties", help="key=value file with name/regNo/email."),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level (DEBUG, INFO, ...)."),
    banner: bool = typer.Option(True, "--banner/--no-banner", help="Show the welcome banner."),
) -> None:
    """Request the webhook, save the query locally and submit it."""

    settings, settings_error = load_settings()
    updates: dict[str, object] = {}
    if output is not None:
        updates["output_path"] = output
    if timeout is not None:
        updates["http_timeout_seconds"] = timeout
    if properties is not None:
        updates["properties_file"] = properties
    if log_level is not None:
        updates["log_level"] = log_level
    if updates:
        settings = settings.model_copy(update=updates)

    configure_logging(settings.log_level)
    if settings_error is not None:
        logger.warning("Invalid BFHL_* settings, falling back to defaults: %s", settings_error)
    if banner:
        print_banner(_console)

    identity = resolve_identity(os.environ, load_properties(settings.properties_file))
    overrides = {
        key: value
        for key, value in (("name", name), ("reg_no", reg_no), ("email", email))
        if value is not None and value.strip()
    }
    if overrides:
        identity = identity.model_copy(update=overrides)

    hooks = PipelineHooks(warning=lambda message: _console.print(f"[yellow]Warning:[/yellow] {message}"))
    with build_client(settings) as client:
        api = HiringChallengeClient(client, generate_url=settings.generate_webhook_url)
        result = run_submission(
            identity=identity,
            api=api,
            output_path=settings.output_path,
            hooks=hooks,
        )

    _console.print(build_summary_table(result))
    if result.succeeded:
        _console.print("[green]SQL query submitted successfully.[/green]")
    else:
        _console.print(f"[red]Run ended in state '{result.state.value}'.[/red]")


@app.command(name="query")
def query_command(
    plain: bool = typer.Option(False, "--plain", help="Print raw SQL without formatting."),
) -> None:
    """Print the final SQL query."""

    query = build_final_query()
    if plain:
        typer.echo(query)
        return
    _console.print(build_query_panel(query))


def run() -> None:
    app()
