# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Resilience utilities (retries, circuit breaker)."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from threading import Lock
from typing import Any, TypeVar

from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from keystone.shared.logging import logger

T = TypeVar("T")


class CircuitOpenError(RuntimeError):
    pass


@dataclass
class CircuitBreaker:
    """Simple in-memory circuit breaker."""

    failure_threshold: int
    reset_timeout: float
    _failures: int = field(default=0, init=False)
    _opened_at: float | None = field(default=None, init=False)
    _lock: Lock = field(default_factory=Lock, init=False, repr=False)

    def allow(self) -> bool:
        with self._lock:
            if self._opened_at is None:
                return True
            if time.monotonic() - self._opened_at >= self.reset_timeout:
                logger.info("breaker: half-open state")
                self._opened_at = None
                self._failures = 0
                return True
            logger.warning("breaker: open state refusing call")
            return False

    def on_success(self) -> None:
        with self._lock:
            self._failures = 0
            self._opened_at = None

    def on_failure(self) -> None:
        with self._lock:
            self._failures += 1
            if self._failures >= self.failure_threshold:
                self._opened_at = time.monotonic()
                logger.error("breaker: opening circuit after failures")


def resilient_call(  # noqa: UP047
    func: Callable[..., T],
    *args: Any,
    breaker: CircuitBreaker,
    retry_on: tuple[type[BaseException], ...],
    max_retries: int,
    backoff_base: float,
    backoff_cap: float,
    **kwargs: Any,
) -> T:
    """Call ``func`` retrying only ``retry_on`` errors, behind ``breaker``."""

    if not breaker.allow():
        raise CircuitOpenError("Circuit breaker is open")

    retry = Retrying(
        stop=stop_after_attempt(max_retries + 1),
        wait=wait_exponential(multiplier=backoff_base, max=backoff_cap),
        retry=retry_if_exception_type(retry_on),
        reraise=True,
    )

    try:
        for attempt in retry:
            with attempt:
                logger.debug(
                    f"resilience: attempt={attempt.retry_state.attempt_number} "
                    f"func={getattr(func, '__name__', func)}"
                )
                result = func(*args, **kwargs)
    except retry_on:
        breaker.on_failure()
        raise
    breaker.on_success()
    return result


__all__ = ["CircuitBreaker", "CircuitOpenError", "resilient_call"]
