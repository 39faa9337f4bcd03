"""Persistencia local de la query final.

Por qué best-effort:
- La copia en disco es solo evidencia; si falla, la submission sigue adelante.
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def save_query(content: str, path: Path) -> bool:
    """Sobrescribe `path` con `content` (UTF-8). Devuelve False si no pudo escribir."""

    try:
        with open(path, "w", encoding="utf-8") as fh:
            fh.write(content)
    except OSError as exc:
        logger.warning("Could not write final query to %s: %s", path, exc)
        return False

    logger.info("Saved final query to %s", path)
    return True
