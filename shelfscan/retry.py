"""Caller-side retry of failed supplier runs.

The orchestrator never retries on its own; a caller that wants another
attempt after a FAILED run (the CLI, a scheduler tick) wraps it with the
tenacity retryer built here.
"""

from collections.abc import Callable
from typing import Any

import logfire
from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_result,
    stop_after_attempt,
    wait_exponential,
)

from shelfscan.models import ExtractionRun, RunStatus


def _is_failed(run: ExtractionRun) -> bool:
    return run.status is RunStatus.FAILED


def get_retryer(
    max_attempts: int = 3,
    wait_min: float = 1.0,
    wait_max: float = 60.0,
    wait_multiplier: float = 2.0,
    log_callback: Callable[[RetryCallState], None] | None = None,
) -> Retrying:
    """Create a tenacity Retrying object that retries FAILED runs.

    Args:
        max_attempts: Maximum number of runs, including the first.
        wait_min: Minimum wait time between runs in seconds.
        wait_max: Maximum wait time between runs in seconds.
        wait_multiplier: Multiplier for exponential backoff.
        log_callback: Optional before_sleep callback. Receives the retry state.

    Returns:
        A configured tenacity.Retrying object.

    """
    return Retrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=wait_multiplier, min=wait_min, max=wait_max),
        retry=retry_if_result(_is_failed),
        before_sleep=log_callback,
        retry_error_callback=lambda state: state.outcome.result(),
    )


def log_retry(retry_state: RetryCallState) -> None:
    """Default logging callback for retried runs.

    Args:
        retry_state: The tenacity retry state object.

    """
    run: Any = retry_state.outcome.result() if retry_state.outcome else None
    reason = run.reason if isinstance(run, ExtractionRun) else 'unknown'
    logfire.warn('Retrying failed run', attempt=retry_state.attempt_number, reason=reason)


def run_with_retry(
    run: Callable[[], ExtractionRun],
    max_attempts: int = 3,
    **kwargs: Any,
) -> ExtractionRun:
    """Call run until it does not fail or attempts are exhausted.

    Args:
        run: Zero-argument callable producing an ExtractionRun
        max_attempts: Maximum number of runs, including the first
        **kwargs: Passed through to get_retryer

    Returns:
        The first non-failed run, or the last failed one

    """
    kwargs.setdefault('log_callback', log_retry)
    retryer = get_retryer(max_attempts=max_attempts, **kwargs)
    return retryer(run)
