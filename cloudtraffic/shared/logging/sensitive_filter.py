# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Scrubs credentials and personal data from log lines before any sink sees them."""

from __future__ import annotations

import re
from typing import Any

_REDACTED = "***REDACTED***"

_RULES: list[tuple[re.Pattern[str], str]] = [
    # Signing secrets
    (re.compile(r"((?:jwt|secret)[_-]?(?:secret|key)?\s*[:=]\s*['\"]?)[^'\"\s,}]{4,}", re.I), rf"\1{_REDACTED}"),
    # Bearer / Authorization values, and bare JWTs anywhere in the line
    (re.compile(r"(authorization\s*[:=]\s*['\"]?)[^'\"\n]{8,}", re.I), rf"\1{_REDACTED}"),
    (re.compile(r"(bearer\s+)[\w\-.]{16,}", re.I), rf"\1{_REDACTED}"),
    (re.compile(r"eyJ[\w-]{8,}\.[\w-]{8,}\.[\w-]+"), _REDACTED),
    (re.compile(r"(token['\"]?\s*[:=]\s*['\"]?)[\w\-.]{16,}", re.I), rf"\1{_REDACTED}"),
    # Passwords in key=value or JSON-ish form
    (re.compile(r"(pass(?:word|wd)?['\"]?\s*[:=]\s*['\"]?)[^'\"\s,}]{1,}", re.I), rf"\1{_REDACTED}"),
    # Credentials embedded in database URLs
    (re.compile(r"([a-z][\w+]*://[^:/@\s]+:)[^@\s]+@", re.I), rf"\1{_REDACTED}@"),
    # E-mail local part
    (re.compile(r"[\w.%+-]+@([\w-]+(?:\.[\w-]+)+)"), r"***@\1"),
]


def sanitize_message(message: str) -> str:
    for pattern, replacement in _RULES:
        message = pattern.sub(replacement, message)
    return message


def sanitize_record(record: dict[str, Any]) -> bool:
    """loguru ``filter`` hook: rewrites the message in place, never drops the record."""

    record["message"] = sanitize_message(record["message"])
    return True
