# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from cloudtraffic.domain.users.entities import AccessToken
from cloudtraffic.domain.users.exceptions import InvalidCredentialsError
from cloudtraffic.domain.users.repositories import PasswordHasher, TokenIssuer, UserRepository
from cloudtraffic.infrastructure.auth.login_attempts import LoginAttemptsTracker
from cloudtraffic.shared.errors.base import AppError

from .register_user import normalize_email


class AccountLockedError(AppError):
    def __init__(self, lockout_remaining: float = 0) -> None:
        super().__init__(
            code="account_locked",
            status=HTTPStatus.TOO_MANY_REQUESTS,
            context={"lockout_remaining_seconds": round(lockout_remaining, 1)},
            message="Too many failed login attempts",
        )


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        tokens: TokenIssuer,
        password_hasher: PasswordHasher,
        attempts: LoginAttemptsTracker | None = None,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._password_hasher = password_hasher
        self._attempts = attempts
        self._decoy_hash: str | None = None

    def execute(self, email: str, password: str, ip_address: str | None = None) -> AccessToken:
        email = normalize_email(email or "")

        if self._attempts and self._attempts.is_locked(email):
            raise AccountLockedError(lockout_remaining=self._attempts.get_lockout_remaining(email))

        user = self._users.find_by_email(email)
        if user is None:
            # Unknown e-mails pay the same hashing cost as a real check.
            self._password_hasher.verify(password, self._decoy())
            password_valid = False
        else:
            password_valid = self._password_hasher.verify(password, user.password_hash)

        if not password_valid or user is None:
            if self._attempts:
                self._attempts.record_attempt(email, success=False, ip_address=ip_address)
            raise InvalidCredentialsError()

        if self._attempts:
            self._attempts.record_attempt(email, success=True, ip_address=ip_address)

        return self._tokens.issue(user.id)

    def _decoy(self) -> str:
        if self._decoy_hash is None:
            self._decoy_hash = self._password_hasher.hash("decoy-password-never-matches")
        return self._decoy_hash
