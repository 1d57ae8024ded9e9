import logging
import random
from dataclasses import dataclass
from typing import Optional

from tenacity import (
    retry,
    stop_after_attempt,
    retry_if_exception,
)

from exceptions import create_error_context, is_retryable_error, log_error_with_context


logger = logging.getLogger(__name__)


@dataclass
class RetryConfig:
    # Backoff policy for opening an automation session
    max_attempts: int = 1
    base_wait_seconds: float = 2.0
    max_wait_seconds: float = 30.0
    jitter_multiplier: float = 0.1
    exponential_base: int = 2


def create_retry_decorator(
    config: RetryConfig,
    operation: str,
    correlation_id: Optional[str] = None
):
    # Retry only errors classified as transient/retryable, re-raising the last one

    def jitter_wait(retry_state):
        base_wait = config.base_wait_seconds * (config.exponential_base ** (retry_state.attempt_number - 1))
        jitter = base_wait * config.jitter_multiplier * random.random()
        return min(base_wait + jitter, config.max_wait_seconds)

    def before_sleep(retry_state):
        correlation_msg = f" [correlation_id: {correlation_id}]" if correlation_id else ""
        logger.warning(
            f"Retrying {operation}{correlation_msg} - "
            f"attempt {retry_state.attempt_number}/{config.max_attempts} "
            f"after {retry_state.seconds_since_start:.2f}s"
        )

    def after_attempt(retry_state):
        if retry_state.outcome and retry_state.outcome.failed:
            context = create_error_context(
                correlation_id=correlation_id,
                component="Retry",
                operation=operation,
                retry_count=retry_state.attempt_number
            )
            log_error_with_context(retry_state.outcome.exception(), context, level="warning")

    return retry(
        stop=stop_after_attempt(max(1, config.max_attempts)),
        wait=jitter_wait,
        retry=retry_if_exception(is_retryable_error),
        before_sleep=before_sleep,
        after=after_attempt,
        reraise=True
    )
