"""Linear backoff retry for throttled operations."""

import time
from collections.abc import Callable
from typing import TypeVar

from tenacity import (
    RetryCallState,
    RetryError,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_incrementing,
)

from transcript_cleaner.exceptions import ThrottledExhaustedError, ThrottlingError
from transcript_cleaner.logging import setup_logging

logger = setup_logging()

T = TypeVar("T")


class ThrottleRetryPolicy:
    """
    Retries an operation only while it fails with ThrottlingError.

    Attempt n that is throttled waits `backoff_seconds * n` before the next
    attempt. Any other error propagates immediately.
    """

    def __init__(
        self,
        max_attempts: int = 30,
        backoff_seconds: float = 2.0,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._max_attempts = max_attempts
        self._backoff_seconds = backoff_seconds
        self._sleep = sleep

    def invoke(self, operation: Callable[[], T], max_attempts: int | None = None) -> T:
        """
        Runs the operation, retrying on throttling.

        Args:
            operation: Zero-argument callable to run.
            max_attempts: Overrides the policy's attempt limit for this call.

        Returns:
            The operation's result.

        Raises:
            ThrottledExhaustedError: If every attempt was throttled.
            ValueError: If max_attempts is below 1.
        """
        attempts = self._max_attempts if max_attempts is None else max_attempts
        if attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        def log_retry(retry_state: RetryCallState) -> None:
            logger.warning(
                "Throttled, retrying",
                extra={
                    "attempt": retry_state.attempt_number,
                    "max_attempts": attempts,
                    "wait_seconds": retry_state.next_action.sleep if retry_state.next_action else None,
                },
            )

        retrying = Retrying(
            stop=stop_after_attempt(attempts),
            wait=wait_incrementing(start=self._backoff_seconds, increment=self._backoff_seconds),
            retry=retry_if_exception_type(ThrottlingError),
            sleep=self._sleep,
            before_sleep=log_retry,
        )
        try:
            return retrying(operation)
        except RetryError as e:
            last_error = e.last_attempt.exception()
            logger.error("Throttling retries exhausted", extra={"attempts": attempts})
            raise ThrottledExhaustedError(attempts, cause=last_error) from last_error
