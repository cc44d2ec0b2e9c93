# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import AccessToken, User


class UserRepository(Protocol):
    def find_by_email(self, email: str) -> User | None: ...
    def find_by_id(self, user_id: str) -> User | None: ...
    def add(self, user: User) -> User: ...

    def update_credits(self, user_id: str, delta: int) -> int:
        """Apply ``delta`` atomically and return the new balance.

        Raises ``UserNotFoundError`` for an unknown id and
        ``InsufficientBalanceError`` when the result would be negative.
        """
        ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...


class TokenIssuer(Protocol):
    def issue(self, user_id: str) -> AccessToken: ...
    def verify(self, token: str) -> str: ...
