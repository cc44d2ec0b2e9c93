# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .base import (
    AppError,
    AuthenticationError,
    ConflictError,
    DomainError,
    ForbiddenError,
    InfrastructureError,
    NotFoundError,
    ValidationError,
)
from .validation import format_pydantic_errors, raise_validation_error
from .validation_types import ValidationErrorType

__all__ = [
    "AppError",
    "AuthenticationError",
    "ConflictError",
    "DomainError",
    "ForbiddenError",
    "InfrastructureError",
    "NotFoundError",
    "ValidationError",
    "ValidationErrorType",
    "format_pydantic_errors",
    "raise_validation_error",
]
