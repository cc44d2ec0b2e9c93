# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from threading import Lock

from cloudtraffic.shared.logging import logger


@dataclass
class LoginAttempt:
    timestamp: float
    success: bool
    ip_address: str | None = None


class LoginAttemptsTracker:
    """Failed-login lockout keyed on the login identifier (e-mail).

    Unknown identifiers are tracked exactly like registered ones.
    """

    def __init__(
        self,
        *,
        max_attempts: int = 5,
        lockout_duration: float = 15 * 60,  # 15 minutes in seconds
        attempt_window: float = 60 * 60,  # 1 hour in seconds
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.max_attempts = max_attempts
        self.lockout_duration = lockout_duration
        self.attempt_window = attempt_window
        self._clock = clock
        self._attempts: dict[str, deque[LoginAttempt]] = {}
        self._lock = Lock()
        self._lockouts: dict[str, float] = {}  # identifier -> unlock_time
        self._next_sweep = clock() + attempt_window

    def __len__(self) -> int:
        with self._lock:
            return len(self._attempts.keys() | self._lockouts.keys())

    def record_attempt(
        self, identifier: str, success: bool, ip_address: str | None = None
    ) -> None:
        with self._lock:
            attempt = LoginAttempt(
                timestamp=self._clock(),
                success=success,
                ip_address=ip_address,
            )

            self._attempts.setdefault(
                identifier, deque(maxlen=self.max_attempts * 2)
            ).append(attempt)

            if success:
                self._attempts.pop(identifier, None)
                if self._lockouts.pop(identifier, None) is not None:
                    logger.info("login_attempts: cleared lockout after successful login")
            else:
                self._check_and_lock(identifier)

            if attempt.timestamp >= self._next_sweep:
                self._sweep(attempt.timestamp)
                self._next_sweep = attempt.timestamp + self.attempt_window

    def is_locked(self, identifier: str) -> bool:
        with self._lock:
            if identifier not in self._lockouts:
                return False

            if self._clock() >= self._lockouts[identifier]:
                del self._lockouts[identifier]
                logger.info("login_attempts: lockout expired")
                return False

            return True

    def get_lockout_remaining(self, identifier: str) -> float:
        with self._lock:
            if identifier not in self._lockouts:
                return 0.0
            return max(0.0, self._lockouts[identifier] - self._clock())

    def get_failed_attempts_count(self, identifier: str) -> int:
        with self._lock:
            return len(self._recent_failures(identifier))

    def clear_attempts(self, identifier: str) -> None:
        with self._lock:
            self._attempts.pop(identifier, None)
            self._lockouts.pop(identifier, None)

    def _recent_failures(self, identifier: str) -> list[LoginAttempt]:
        if identifier not in self._attempts:
            return []
        cutoff = self._clock() - self.attempt_window
        return [
            attempt
            for attempt in self._attempts[identifier]
            if not attempt.success and attempt.timestamp > cutoff
        ]

    def _sweep(self, now: float) -> None:
        """Forget identifiers with no failures in the window and no active lockout."""
        for identifier, unlock_at in list(self._lockouts.items()):
            if now >= unlock_at:
                del self._lockouts[identifier]
        stale = [
            identifier
            for identifier in self._attempts
            if identifier not in self._lockouts and not self._recent_failures(identifier)
        ]
        for identifier in stale:
            del self._attempts[identifier]
        if stale:
            logger.debug(f"login_attempts: dropped {len(stale)} idle identifiers")

    def _check_and_lock(self, identifier: str) -> None:
        failed_attempts = self._recent_failures(identifier)

        if len(failed_attempts) >= self.max_attempts:
            self._lockouts[identifier] = self._clock() + self.lockout_duration

            ips = {attempt.ip_address for attempt in failed_attempts if attempt.ip_address}
            logger.warning(
                f"login_attempts: ACCOUNT LOCKED identifier={identifier} "
                f"failed_attempts={len(failed_attempts)} "
                f"lockout_duration={self.lockout_duration}s "
                f"ip_addresses={sorted(ips) if ips else 'unknown'}"
            )


__all__ = ["LoginAttempt", "LoginAttemptsTracker"]
