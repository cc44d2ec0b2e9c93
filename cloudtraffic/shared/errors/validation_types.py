# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations


class ValidationErrorType:
    MISSING_FIELDS = "missing_fields"
    EMAIL_INVALID = "email_invalid"
    USERNAME_INVALID_CHARS = "username_invalid_chars"
    PASSWORD_TOO_SHORT = "password_too_short"
    UNSUPPORTED_PLATFORM = "unsupported_platform"
    INVALID_URL = "invalid_url"


__all__ = ["ValidationErrorType"]
