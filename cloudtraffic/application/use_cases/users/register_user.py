# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from cloudtraffic.domain.users.entities import User
from cloudtraffic.domain.users.exceptions import EmailAlreadyRegisteredError
from cloudtraffic.domain.users.repositories import PasswordHasher, UserRepository
from cloudtraffic.shared.errors.base import ValidationError
from cloudtraffic.shared.errors.validation_types import ValidationErrorType
from cloudtraffic.shared.logging import logger


def normalize_email(email: str) -> str:
    return email.strip().lower()


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, username: str, email: str, password: str) -> User:
        missing = [
            name
            for name, value in (("username", username), ("email", email), ("password", password))
            if not value or not value.strip()
        ]
        if missing:
            raise ValidationError(
                ValidationErrorType.MISSING_FIELDS,
                message="Username, email and password are required",
                context={"rule": ValidationErrorType.MISSING_FIELDS, "fields": missing},
            )

        email = normalize_email(email)
        if self._users.find_by_email(email):
            raise EmailAlreadyRegisteredError()

        user = User(
            id=str(uuid.uuid4()),
            username=username.strip(),
            email=email,
            password_hash=self._password_hasher.hash(password),
            created_at=datetime.now(UTC),
        )
        persisted = self._users.add(user)
        logger.info(f"register: created user_id={persisted.id}")
        return persisted
