# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time
from collections import deque
from collections.abc import Callable
from functools import wraps
from threading import Lock

from flask import Flask, Request, jsonify, request

from cloudtraffic.shared.logging import logger

RATE_LIMITED_BODY = {"error": "rate_limited"}


class InMemoryRateLimiter:
    """Sliding-window limiter: at most ``limit`` hits per key within ``window_seconds``.

    Keys whose hits have all left the window are swept at most once per window.
    """

    def __init__(
        self,
        limit: int,
        window_seconds: float,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if limit < 1 or window_seconds <= 0:
            raise ValueError("limit must be >= 1 and window_seconds > 0")
        self._limit = int(limit)
        self._window = float(window_seconds)
        self._clock = clock
        self._lock = Lock()
        self._hits: dict[str, deque[float]] = {}
        self._next_sweep = clock() + self._window

    def __len__(self) -> int:
        with self._lock:
            return len(self._hits)

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def window(self) -> float:
        return self._window

    def allow(self, key: str) -> bool:
        """Record a hit for ``key`` unless it already has ``limit`` hits in the window."""
        now = self._clock()
        horizon = now - self._window
        with self._lock:
            if now >= self._next_sweep:
                self._sweep(horizon)
                self._next_sweep = now + self._window

            hits = self._hits.setdefault(key, deque())
            while hits and hits[0] < horizon:
                hits.popleft()
            if len(hits) >= self._limit:
                return False
            hits.append(now)
            return True

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()

    def _sweep(self, horizon: float) -> None:
        stale = [key for key, hits in self._hits.items() if not hits or hits[-1] < horizon]
        for key in stale:
            del self._hits[key]
        if stale:
            logger.debug(f"rate_limit: dropped {len(stale)} idle buckets")


def client_key(req: Request) -> str:
    # ``remote_addr`` only reflects X-Forwarded-For when ProxyFix trusts a proxy hop.
    return req.remote_addr or "unknown"


def rate_limit(limiter: InMemoryRateLimiter | None, *, scope: str | None = None):
    """Per-route limit keyed on ``scope`` and client IP; ``None`` disables it.

    Without an explicit scope the view's endpoint name is used, without its
    blueprint prefix, so a view mounted under several prefixes shares one bucket.
    """

    def decorator(f: Callable):
        if limiter is None:
            return f

        @wraps(f)
        def wrapper(*args, **kwargs):
            name = scope or (request.endpoint or f.__name__).rsplit(".", 1)[-1]
            key = f"{name}:{client_key(request)}"
            if not limiter.allow(key):
                logger.warning(f"rate_limit: route limit hit key={key}")
                return jsonify(RATE_LIMITED_BODY), 429
            return f(*args, **kwargs)

        return wrapper

    return decorator


def configure_rate_limiting(app: Flask, limiter: InMemoryRateLimiter | None) -> None:
    """Apply one limiter to every request, keyed on client IP only."""

    if limiter is None:
        return

    @app.before_request
    def _global_rate_limit():
        key = client_key(request)
        if not limiter.allow(key):
            logger.warning(
                f"rate_limit: global limit hit ip={key} "
                f"limit={limiter.limit} window={limiter.window:.0f}s"
            )
            return jsonify(RATE_LIMITED_BODY), 429
        return None


__all__ = [
    "InMemoryRateLimiter",
    "RATE_LIMITED_BODY",
    "client_key",
    "configure_rate_limiting",
    "rate_limit",
]
