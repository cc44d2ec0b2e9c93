# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Error hierarchy shared by every layer.

Each class pins a default ``code``, ``status`` and ``message``; instances may
override any of them and attach a JSON-safe ``context``. The HTTP layer
renders ``to_dict()`` as the response body and ``status`` as its status.
"""

from __future__ import annotations

from collections.abc import Mapping
from http import HTTPStatus
from typing import Any, ClassVar


class AppError(Exception):
    default_code: ClassVar[str] = "error"
    default_status: ClassVar[HTTPStatus] = HTTPStatus.BAD_REQUEST
    default_message: ClassVar[str | None] = None

    def __init__(
        self,
        code: str | None = None,
        *,
        status: HTTPStatus | None = None,
        message: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        self.code = code or self.default_code
        self.status = status or self.default_status
        self.message = message or self.default_message
        self.context = dict(context) if context else None
        super().__init__(self.message or self.code)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, status={int(self.status)})"

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code}
        if self.message:
            payload["message"] = self.message
        if self.context:
            payload["context"] = self.context
        return payload


class DomainError(AppError):
    """A business rule refused the operation."""


class InfrastructureError(AppError):
    default_code = "infrastructure_error"
    default_status = HTTPStatus.INTERNAL_SERVER_ERROR


class ValidationError(AppError):
    default_code = "validation_error"
    default_message = "Invalid input"


class ConflictError(DomainError):
    default_code = "conflict"
    default_message = "Resource already exists"


class AuthenticationError(DomainError):
    default_code = "authentication_failed"
    default_status = HTTPStatus.UNAUTHORIZED
    default_message = "Authentication failed"


class ForbiddenError(DomainError):
    default_code = "forbidden"
    default_status = HTTPStatus.FORBIDDEN
    default_message = "Forbidden"


class NotFoundError(DomainError):
    default_code = "not_found"
    default_status = HTTPStatus.NOT_FOUND
    default_message = "Not found"


__all__ = [
    "AppError",
    "AuthenticationError",
    "ConflictError",
    "DomainError",
    "ForbiddenError",
    "InfrastructureError",
    "NotFoundError",
    "ValidationError",
]
