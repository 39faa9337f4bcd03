"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from core.domain.models import PipelineResult, RunState

_STATE_STYLES: dict[RunState, str] = {
    RunState.SUBMITTED: "bold green",
    RunState.SUBMIT_FAILED: "bold yellow",
    RunState.ABORTED: "bold red",
}


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("BFHL SUBMIT", style="bold cyan")
    subtitle = Text("generateWebhook • SQL • submission", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_query_panel(query: str) -> Panel:
    """Panel con la query final resaltada."""

    return Panel(Syntax(query, "sql", word_wrap=True), title="Final query", border_style="magenta")


def build_summary_table(result: PipelineResult) -> Table:
    """Tabla resumen de una ejecución del flujo."""

    table = Table(title="Submission run")
    table.add_column("Step", style="cyan", no_wrap=True)
    table.add_column("Result", style="white")

    identity = result.identity
    table.add_row("Identity", f"{identity.name} / {identity.reg_no} / {identity.email}")

    webhook = result.webhook
    if result.credential is not None:
        table.add_row("Webhook", result.credential.webhook_url)
        table.add_row("Access token", result.credential.masked_token())
    elif webhook is not None and webhook.failure is not None:
        table.add_row("Webhook", Text(f"FAILED ({webhook.failure.value}) {webhook.detail}", style="red"))
    else:
        table.add_row("Webhook", Text("not obtained", style="red"))

    if result.query is not None:
        saved = str(result.saved_path) if result.saved else Text("not saved", style="yellow")
        table.add_row("Local copy", saved)

    submission = result.submission
    if submission is not None:
        if submission.status_code is not None:
            status = f"HTTP {submission.status_code}"
        else:
            status = submission.failure.value if submission.failure else "-"
        table.add_row("Submission", Text(status, style="green" if submission.success else "red"))

    style = _STATE_STYLES.get(result.state, "white")
    table.add_row("Final state", Text(result.state.value, style=style))
    return table
