# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from cloudtraffic.shared.errors.base import (
    AuthenticationError,
    ConflictError,
    DomainError,
    ForbiddenError,
    NotFoundError,
)


class EmailAlreadyRegisteredError(ConflictError):
    default_code = "email_taken"
    default_message = "Email is already registered"


class UsernameTakenError(ConflictError):
    default_code = "username_taken"
    default_message = "Username is already taken"


class InvalidCredentialsError(AuthenticationError):
    default_code = "invalid_credentials"
    default_message = "Invalid credentials"


class InvalidTokenError(AuthenticationError):
    default_code = "invalid_token"
    default_message = "Invalid or expired token"


class UserMismatchError(ForbiddenError):
    default_code = "user_mismatch"
    default_message = "Token does not belong to this user"


class UserNotFoundError(NotFoundError):
    default_code = "user_not_found"
    default_message = "User not found"


class InsufficientBalanceError(DomainError):
    default_code = "insufficient_balance"
    default_status = HTTPStatus.BAD_REQUEST
    default_message = "Insufficient credits"
