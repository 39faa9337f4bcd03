"""Cliente HTTP del API de hiring (generateWebhook + submission).

Implementación:
- Recibe un `httpx.Client` ya construido (inyección explícita, sin singletons).
- Convierte cualquier fallo (status, JSON, red, timeout, URL inválida) en un resultado;
  nunca propaga excepciones de httpx al orquestador.

Notas:
- 200/201 => generateWebhook correcto (si el body trae webhook + accessToken)
- 2xx     => submission aceptada
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from core.config import GENERATE_WEBHOOK_URL
from core.domain.models import (
    FailureKind,
    Identity,
    SubmissionResult,
    WebhookCredential,
    WebhookResult,
)
from core.interfaces.challenge_api import ChallengeAPI

logger = logging.getLogger(__name__)

_WEBHOOK_OK_STATUSES = (200, 201)
_REQUEST_ERRORS = (httpx.HTTPError, httpx.InvalidURL)


def _classify_transport_error(exc: Exception) -> FailureKind:
    if isinstance(exc, httpx.InvalidURL):
        return FailureKind.INVALID_URL
    if isinstance(exc, httpx.TimeoutException):
        return FailureKind.TIMEOUT
    return FailureKind.NETWORK


class HiringChallengeClient(ChallengeAPI):
    """Implementación httpx de `ChallengeAPI`."""

    def __init__(self, client: httpx.Client, *, generate_url: str = GENERATE_WEBHOOK_URL) -> None:
        self._client = client
        self._generate_url = generate_url

    def generate_webhook(self, identity: Identity) -> WebhookResult:
        logger.info("Calling generateWebhook API at %s", self._generate_url)

        try:
            response = self._client.post(self._generate_url, json=identity.to_payload())
        except _REQUEST_ERRORS as exc:
            kind = _classify_transport_error(exc)
            logger.error("generateWebhook request failed (%s): %s", kind.value, exc)
            return WebhookResult.failed(kind, str(exc))

        status = response.status_code
        if status not in _WEBHOOK_OK_STATUSES:
            logger.error("generateWebhook returned non-OK status %s: %s", status, response.text)
            return WebhookResult.failed(
                FailureKind.HTTP_STATUS,
                f"unexpected status {status}",
                status_code=status,
            )

        try:
            payload: Any = response.json()
        except ValueError as exc:
            logger.error("generateWebhook returned a non-JSON body: %s", exc)
            return WebhookResult.failed(FailureKind.INVALID_JSON, str(exc), status_code=status)

        if not isinstance(payload, dict):
            logger.error("generateWebhook returned JSON that is not an object: %r", payload)
            return WebhookResult.failed(
                FailureKind.INVALID_JSON,
                "response body is not a JSON object",
                status_code=status,
            )

        try:
            credential = WebhookCredential.model_validate(payload)
        except ValidationError as exc:
            missing = sorted({str(err["loc"][0]) for err in exc.errors() if err.get("loc")})
            logger.error("Webhook URL or access token missing in response: %s", ", ".join(missing))
            return WebhookResult.failed(
                FailureKind.MISSING_FIELDS,
                "invalid or missing fields: " + ", ".join(missing),
                status_code=status,
            )

        logger.info(
            "Received webhook %s and access token %s",
            credential.webhook_url,
            credential.masked_token(),
        )
        return WebhookResult.ok(credential, status)

    def submit_final_query(self, webhook_url: str, access_token: str, query: str) -> SubmissionResult:
        logger.info("Submitting final SQL query to webhook: %s", webhook_url)

        headers = {
            "Authorization": f"Bearer {access_token}",
            "Content-Type": "application/json",
        }
        try:
            response = self._client.post(webhook_url, json={"finalQuery": query}, headers=headers)
        except _REQUEST_ERRORS as exc:
            kind = _classify_transport_error(exc)
            logger.error("Error while submitting final query (%s): %s", kind.value, exc)
            return SubmissionResult(success=False, failure=kind, detail=str(exc))

        logger.info("Webhook response status: %s", response.status_code)
        logger.info("Webhook response body: %s", response.text)

        if response.is_success:
            return SubmissionResult(success=True, status_code=response.status_code, body=response.text)
        return SubmissionResult(
            success=False,
            status_code=response.status_code,
            failure=FailureKind.HTTP_STATUS,
            body=response.text,
            detail=f"unexpected status {response.status_code}",
        )
