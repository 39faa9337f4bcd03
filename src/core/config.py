"""Configuración del Core.

Por qué aquí:
- Centraliza los ajustes de la aplicación (pydantic-settings) sin contaminar la CLI.
- Resuelve la identidad del candidato con una función pura sobre un snapshot
  del entorno, de modo que los tests no necesitan mutar `os.environ`.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.models import Identity

GENERATE_WEBHOOK_URL = "https://bfhldevapigw.healthrx.co.in/hiring/generateWebhook/JAVA"

IDENTITY_DEFAULTS: dict[str, str] = {
    "name": "John Doe",
    "regNo": "REG12347",
    "email": "john@example.com",
}


def _parse_properties_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith(("#", "!")):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def load_properties(path: Path | None) -> dict[str, str]:
    """Lee un fichero `key=value` (estilo application.properties).

    Un fichero ausente o ilegible equivale a no tener propiedades.
    """

    if path is None or not path.is_file():
        return {}
    try:
        return _parse_properties_lines(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError):
        return {}


def write_properties(path: Path, values: dict[str, str]) -> Path:
    """Escribe/actualiza propiedades en `path` conservando las existentes."""

    path.parent.mkdir(parents=True, exist_ok=True)

    existing = load_properties(path)
    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# bfhl-submit properties"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def env_var_name(key: str) -> str:
    """`regNo` -> `REGNO`, `app.user-name` -> `APP_USER_NAME`."""

    return key.replace(".", "_").replace("-", "_").upper()


def resolve_config_value(
    key: str,
    default: str,
    *,
    environ: Mapping[str, str],
    properties: Mapping[str, str] | None = None,
) -> str:
    """Resuelve un valor: variable de entorno > propiedad > default.

    La variable de entorno solo cuenta si no está vacía (tras `strip`).
    """

    from_env = environ.get(env_var_name(key))
    if from_env is not None and from_env.strip():
        return from_env
    if properties:
        from_props = properties.get(key)
        if from_props is not None:
            return from_props
    return default


def resolve_identity(
    environ: Mapping[str, str] | None = None,
    properties: Mapping[str, str] | None = None,
) -> Identity:
    environ = os.environ if environ is None else environ
    values = {
        key: resolve_config_value(key, default, environ=environ, properties=properties)
        for key, default in IDENTITY_DEFAULTS.items()
    }
    return Identity(name=values["name"], reg_no=values["regNo"], email=values["email"])


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="BFHL_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    generate_webhook_url: str = Field(
        default=GENERATE_WEBHOOK_URL,
        min_length=8,
        description="Endpoint que emite el par webhook/accessToken.",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="bfhl-submit/0.1",
        min_length=1,
        description="User-Agent para las peticiones HTTP.",
    )
    output_path: Path = Field(
        default=Path("final-query.sql"),
        description="Fichero donde se guarda la query final (se sobrescribe).",
    )
    properties_file: Path = Field(
        default=Path("application.properties"),
        description="Fichero opcional de propiedades nombradas (name, regNo, email).",
    )
    log_level: str = Field(
        default="INFO",
        min_length=1,
        description="Nivel de logging de la CLI.",
    )


def load_settings() -> tuple[AppSettings, ValidationError | None]:
    """Carga `AppSettings`; si algún `BFHL_*` es inválido, usa los defaults.

    La configuración nunca hace fallar la ejecución: el error se devuelve para
    que el entry-point lo registre una vez configurado el logging.
    """

    try:
        return AppSettings(), None
    except ValidationError as exc:
        return AppSettings.model_construct(), exc
