"""Atajo de desarrollo para `bfhl-submit` desde un checkout.

Uso:
- `python main.py run --name "Jane Roe" --reg-no REG1 --email jane@x.com`
- `python main.py query --plain`

Instalado (`pip install -e .`) el console script `bfhl-submit` hace lo mismo;
este fichero solo añade `src/` al path para no tener que instalar nada.
"""

from __future__ import annotations

import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parent / "src"


def main() -> None:
    if str(SRC_DIR) not in sys.path:
        sys.path.insert(0, str(SRC_DIR))

    from cli.main import run as run_cli  # noqa: PLC0415

    run_cli()


if __name__ == "__main__":
    main()
