"""Submission workflow orchestration.

The flow is strictly sequential: request the webhook credential, build the
final query, persist a local copy and submit it. Only a failed webhook
request aborts the run; a failed local save is a warning and a failed
submission is reported through the result. Side-effects for the UI
(printing, progress) stay out of here and are reached through hooks.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from adapters.query_file import save_query
from core.domain.models import (
    Identity,
    PipelineResult,
    RunState,
    SubmissionResult,
    WebhookCredential,
    WebhookResult,
)
from core.interfaces.challenge_api import ChallengeAPI
from core.query import build_final_query

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_PATH = Path("final-query.sql")


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers (state transitions, warnings)."""

    warning: Callable[[str], None] | None = None
    state_changed: Callable[[RunState], None] | None = None


def run_submission(
    *,
    identity: Identity,
    api: ChallengeAPI,
    output_path: Path = DEFAULT_OUTPUT_PATH,
    hooks: PipelineHooks | None = None,
    saver: Callable[[str, Path], bool] = save_query,
) -> PipelineResult:
    """Run the whole flow once and return where it ended.

    Never raises: unexpected errors are logged with traceback and end the run
    as `aborted` (before submission) or `submit_failed` (after).
    """

    hooks = hooks or PipelineHooks()
    warnings: list[str] = []
    state = RunState.INIT
    webhook: WebhookResult | None = None
    credential: WebhookCredential | None = None
    query: str | None = None
    saved = False
    submission: SubmissionResult | None = None

    def advance(new_state: RunState) -> None:
        nonlocal state
        state = new_state
        logger.debug("Run state -> %s", new_state.value)
        if hooks.state_changed:
            hooks.state_changed(new_state)

    def warn(message: str) -> None:
        warnings.append(message)
        if hooks.warning:
            hooks.warning(message)

    logger.info("Starting submission flow for %s (%s)", identity.name, identity.reg_no)

    try:
        advance(RunState.WEBHOOK_REQUESTED)
        webhook = api.generate_webhook(identity)
        if not webhook.success or webhook.credential is None:
            logger.error("Failed to generate webhook (%s). Aborting.", _describe(webhook))
            advance(RunState.ABORTED)
            return _result(state, identity, webhook, credential, query, output_path, saved, submission, warnings)

        credential = webhook.credential
        advance(RunState.CREDENTIAL_OBTAINED)

        query = build_final_query()
        advance(RunState.QUERY_BUILT)

        saved = saver(query, output_path)
        if not saved:
            warn(f"Could not save final query to {output_path}; submitting anyway.")
        advance(RunState.QUERY_SAVED)

        submission = api.submit_final_query(credential.webhook_url, credential.access_token, query)
        if submission.success:
            logger.info("Submission complete (HTTP %s).", submission.status_code)
            advance(RunState.SUBMITTED)
        else:
            logger.warning("Submission failed (%s).", submission.detail or submission.failure)
            advance(RunState.SUBMIT_FAILED)
    except Exception as exc:
        logger.exception("Unexpected error during run: %s", exc)
        # Hooks are skipped here: they may be what raised.
        warnings.append(f"Unexpected error: {exc}")
        if state is RunState.QUERY_SAVED:
            state = RunState.SUBMIT_FAILED
        elif not state.terminal:
            state = RunState.ABORTED

    return _result(state, identity, webhook, credential, query, output_path, saved, submission, warnings)


def _describe(webhook: WebhookResult) -> str:
    if webhook.failure is None:
        return "no credential"
    if webhook.status_code is not None:
        return f"{webhook.failure.value}, HTTP {webhook.status_code}"
    return webhook.failure.value


def _result(
    state: RunState,
    identity: Identity,
    webhook: WebhookResult | None,
    credential: WebhookCredential | None,
    query: str | None,
    output_path: Path,
    saved: bool,
    submission: SubmissionResult | None,
    warnings: list[str],
) -> PipelineResult:
    return PipelineResult(
        state=state,
        identity=identity,
        webhook=webhook,
        credential=credential,
        query=query,
        saved_path=output_path if saved else None,
        saved=saved,
        submission=submission,
        warnings=warnings,
    )
