"""Configuración de logging para la CLI (Rich).

Por qué aquí:
- El Core y los adapters solo usan `logging.getLogger(__name__)`; decidir el
  handler y el nivel es responsabilidad del entry-point.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_HANDLER_NAME = "bfhl-rich"


def configure_logging(level: str | int = "INFO", *, console: Console | None = None) -> None:
    """Instala un `RichHandler` en el root logger (idempotente)."""

    if isinstance(level, str):
        resolved = logging.getLevelName(level.strip().upper())
        level = resolved if isinstance(resolved, int) else logging.INFO

    root = logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers:
        if handler.get_name() == _HANDLER_NAME:
            handler.setLevel(level)
            return

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    handler.set_name(_HANDLER_NAME)
    handler.setLevel(level)
    root.addHandler(handler)

    # httpx loguea cada request a nivel INFO; ya lo hacen nuestros adapters.
    logging.getLogger("httpx").setLevel(logging.WARNING)
