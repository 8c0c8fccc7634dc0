"""
app/acquisition/retry.py

Bounded-attempt retry executor shared by every source adapter.

Retries only on rate limiting and transient transport failures
(timeouts, connection errors, 5xx). NotFound, ClientError, and
ParseFailure are raised after the first attempt.
"""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

from app.acquisition.errors import (
    ErrorKind,
    SourceError,
    classify_exception,
)
from app.acquisition.logging_utils import log_event

logger = logging.getLogger(__name__)

T = TypeVar("T")

ErrorClassifier = Callable[[BaseException], "SourceError | None"]
FailureCallback = Callable[[SourceError, int], None]


@dataclass(frozen=True)
class RetrySettings:
    """
    Attempt budget and backoff constants for one source.
    """

    max_attempts: int = 3
    base_delay_seconds: float = 1.0
    jitter_seconds: float = 0.5


class RetryPolicy:
    """
    Runs one operation with an explicit attempt loop.

    ``sleep``, ``rng`` and ``clock`` are injectable so callers (and tests)
    control waiting, jitter, and deadlines.
    """

    def __init__(
        self,
        *,
        sleep: Callable[[float], None] = time.sleep,
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._sleep = sleep
        self._rng = rng or random.Random()
        self._clock = clock

    def execute(
        self,
        operation: Callable[[], T],
        *,
        settings: RetrySettings,
        classify: ErrorClassifier = classify_exception,
        on_failure: FailureCallback | None = None,
        deadline: float | None = None,
        label: str = "operation",
    ) -> T:
        """Run ``operation`` until it succeeds or the attempt budget is spent.

        Args:
            operation: Zero-argument callable performing one attempt.
            settings: Attempt budget and backoff constants.
            classify: Maps a raised exception to a ``SourceError``; exceptions
                it returns None for are re-raised untouched.
            on_failure: Called with ``(error, attempt_number)`` after every
                failed attempt, before the next wait or the final raise.
            deadline: Optional ``clock()`` value after which no new attempt
                starts; the call then fails with ``ErrorKind.TIMEOUT``.
            label: Name used in log lines.

        Returns:
            The operation's return value.

        Raises:
            SourceError: The last classified failure.
        """

        if settings.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1.")

        attempt = 0
        last_error: SourceError | None = None

        while True:
            if deadline is not None and self._clock() >= deadline:
                timeout = SourceError(
                    ErrorKind.TIMEOUT,
                    f"{label}: deadline reached before attempt {attempt + 1}",
                )
                if last_error is not None:
                    timeout.__cause__ = last_error
                raise timeout

            try:
                return operation()
            except Exception as exc:
                error = classify(exc)
                if error is None:
                    raise
                if error is not exc:
                    error.__cause__ = exc

            attempt += 1
            last_error = error
            if on_failure is not None:
                on_failure(error, attempt)

            if error.is_terminal:
                raise error
            if attempt >= settings.max_attempts:
                log_event(
                    logger,
                    logging.ERROR,
                    "retries_exhausted",
                    label=label,
                    attempts=attempt,
                    error_kind=error.kind,
                )
                raise error

            delay = self.compute_delay(error, attempt - 1, settings)
            if deadline is not None and self._clock() + delay >= deadline:
                timeout = SourceError(
                    ErrorKind.TIMEOUT,
                    f"{label}: deadline reached while backing off after attempt {attempt}",
                )
                timeout.__cause__ = error
                raise timeout

            log_event(
                logger,
                logging.WARNING,
                "retry_scheduled",
                label=label,
                attempt=attempt,
                max_attempts=settings.max_attempts,
                error_kind=error.kind,
                wait_seconds=round(delay, 3),
            )
            self._sleep(delay)

    def compute_delay(self, error: SourceError, attempt_index: int, settings: RetrySettings) -> float:
        """
        Wait before the next attempt, given the zero-based index of the failed one.
        """

        exponential = settings.base_delay_seconds * (2**attempt_index)
        if error.kind is ErrorKind.RATE_LIMITED:
            if error.retry_after is not None:
                return error.retry_after
            return exponential
        jitter = self._rng.uniform(0.0, settings.jitter_seconds) if settings.jitter_seconds > 0 else 0.0
        return exponential + jitter
