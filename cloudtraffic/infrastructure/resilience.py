# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Timeout, retry and circuit-breaker wrapper for outbound simulator calls."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from threading import Lock
from typing import Any, TypeVar

from tenacity import AsyncRetrying, retry_if_not_exception_type, stop_after_attempt, wait_exponential

from cloudtraffic.shared.logging import logger

T = TypeVar("T")


class CircuitOpenError(RuntimeError):
    pass


class BreakerState(str, Enum):
    CLOSED = "closed"
    OPEN = "open"


class CircuitBreaker:
    """Opens after ``failure_threshold`` consecutive failures; retries once ``reset_timeout`` passes."""

    def __init__(
        self,
        failure_threshold: int,
        reset_timeout: float,
        *,
        name: str = "default",
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.failure_threshold = failure_threshold
        self.reset_timeout = reset_timeout
        self.name = name
        self._clock = clock
        self._lock = Lock()
        self._consecutive_failures = 0
        self._opened_at: float | None = None

    @property
    def state(self) -> BreakerState:
        return BreakerState.CLOSED if self._opened_at is None else BreakerState.OPEN

    def before_call(self) -> None:
        with self._lock:
            if self._opened_at is None:
                return
            if self._clock() - self._opened_at < self.reset_timeout:
                raise CircuitOpenError(f"circuit '{self.name}' is open")
            logger.info(f"breaker[{self.name}]: reset window elapsed, letting a trial call through")
            self._opened_at = None
            self._consecutive_failures = 0

    def record_success(self) -> None:
        with self._lock:
            self._consecutive_failures = 0
            self._opened_at = None

    def record_failure(self) -> None:
        with self._lock:
            self._consecutive_failures += 1
            if self._opened_at is None and self._consecutive_failures >= self.failure_threshold:
                self._opened_at = self._clock()
                logger.error(
                    f"breaker[{self.name}]: open after {self._consecutive_failures} failures"
                )


@dataclass(frozen=True)
class RetryPolicy:
    max_retries: int = 0
    backoff_base: float = 0.5
    backoff_cap: float = 8.0

    def retrying(self) -> AsyncRetrying:
        return AsyncRetrying(
            stop=stop_after_attempt(self.max_retries + 1),
            wait=wait_exponential(multiplier=self.backoff_base, max=self.backoff_cap),
            retry=retry_if_not_exception_type(CircuitOpenError),
            reraise=True,
        )


async def resilient_call(  # noqa: UP047
    func: Callable[..., Awaitable[T]],
    *args: Any,
    breaker: CircuitBreaker,
    timeout: float,
    retry_policy: RetryPolicy | None = None,
    **kwargs: Any,
) -> T:
    """Await ``func`` under ``timeout``, retrying per ``retry_policy``.

    The breaker sees one outcome per call, not per attempt. An open breaker
    raises ``CircuitOpenError`` without invoking ``func``.
    """

    breaker.before_call()
    try:
        async for attempt in (retry_policy or RetryPolicy()).retrying():
            with attempt:
                logger.debug(
                    f"resilience[{breaker.name}]: attempt {attempt.retry_state.attempt_number}"
                )
                result = await asyncio.wait_for(func(*args, **kwargs), timeout=timeout)
    except Exception:
        breaker.record_failure()
        raise
    breaker.record_success()
    return result


__all__ = ["BreakerState", "CircuitBreaker", "CircuitOpenError", "RetryPolicy", "resilient_call"]
