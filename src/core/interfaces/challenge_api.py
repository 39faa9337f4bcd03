"""Contrato del API del reto.

Por qué Protocol:
- El orquestador depende de esta abstracción, no de httpx.
- Los tests pueden inyectar un fake y contar llamadas (p.ej. que la submission
  nunca ocurre si generateWebhook falla).
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import Identity, SubmissionResult, WebhookResult


@runtime_checkable
class ChallengeAPI(Protocol):
    """Las dos llamadas HTTP del flujo.

    Reglas de diseño:
    - Ninguno de los métodos lanza por fallos de red/HTTP: devuelven un resultado.
    - Una sola petición por llamada (sin reintentos).
    """

    def generate_webhook(self, identity: Identity) -> WebhookResult:
        """Solicita el par webhook/accessToken para `identity`."""

        ...

    def submit_final_query(self, webhook_url: str, access_token: str, query: str) -> SubmissionResult:
        """Envía `query` al webhook con autenticación bearer."""

        ...
