"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación estricta en el borde JSON (respuesta de generateWebhook) sin acoplar
  el Core a librerías de I/O.
- Los alias conservan los nombres del wire (`regNo`, `accessToken`) mientras el
  código Python usa snake_case.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class FailureKind(str, Enum):
    """Motivo de fallo de una llamada HTTP del flujo."""

    HTTP_STATUS = "http_status"
    INVALID_JSON = "invalid_json"
    MISSING_FIELDS = "missing_fields"
    NETWORK = "network"
    TIMEOUT = "timeout"
    INVALID_URL = "invalid_url"


class RunState(str, Enum):
    """Estados de la máquina de orquestación."""

    INIT = "init"
    WEBHOOK_REQUESTED = "webhook_requested"
    CREDENTIAL_OBTAINED = "credential_obtained"
    ABORTED = "aborted"
    QUERY_BUILT = "query_built"
    QUERY_SAVED = "query_saved"
    SUBMITTED = "submitted"
    SUBMIT_FAILED = "submit_failed"

    @property
    def terminal(self) -> bool:
        return self in (RunState.ABORTED, RunState.SUBMITTED, RunState.SUBMIT_FAILED)


class Identity(BaseModel):
    """Datos del candidato que se envían a generateWebhook.

    Inmutable: se construye una vez desde la configuración.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(..., description="Nombre completo.")
    reg_no: str = Field(..., alias="regNo", description="Número de registro.")
    email: str = Field(..., description="Correo de contacto.")

    def to_payload(self) -> dict[str, str]:
        return self.model_dump(by_alias=True)


class WebhookCredential(BaseModel):
    """Par webhook/token devuelto por generateWebhook."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    webhook_url: str = Field(
        ...,
        alias="webhook",
        min_length=1,
        description="URL a la que se envía la query final.",
    )
    access_token: str = Field(
        ...,
        alias="accessToken",
        min_length=1,
        description="Token bearer para la submission.",
    )

    def masked_token(self, visible: int = 8) -> str:
        if len(self.access_token) <= visible:
            return "*" * len(self.access_token)
        return self.access_token[:visible] + "…"


class WebhookResult(BaseModel):
    """Resultado (valor, no excepción) de generateWebhook."""

    success: bool
    credential: WebhookCredential | None = None
    failure: FailureKind | None = None
    status_code: int | None = None
    detail: str = ""

    @classmethod
    def ok(cls, credential: WebhookCredential, status_code: int) -> "WebhookResult":
        return cls(success=True, credential=credential, status_code=status_code)

    @classmethod
    def failed(
        cls,
        failure: FailureKind,
        detail: str,
        status_code: int | None = None,
    ) -> "WebhookResult":
        return cls(success=False, failure=failure, status_code=status_code, detail=detail)


class SubmissionResult(BaseModel):
    """Resultado de enviar la query final al webhook."""

    success: bool
    status_code: int | None = None
    failure: FailureKind | None = None
    body: str | None = None
    detail: str = ""

    def __bool__(self) -> bool:
        return self.success


class PipelineResult(BaseModel):
    """Salida de una ejecución completa del flujo."""

    state: RunState
    identity: Identity
    credential: WebhookCredential | None = None
    query: str | None = None
    saved_path: Path | None = None
    saved: bool = False
    submission: SubmissionResult | None = None
    webhook: WebhookResult | None = None
    warnings: list[str] = Field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.state is RunState.SUBMITTED
