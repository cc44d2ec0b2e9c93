# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from cloudtraffic.shared.errors.base import InfrastructureError, ValidationError
from cloudtraffic.shared.errors.validation_types import ValidationErrorType


class MissingTrafficFieldsError(ValidationError):
    def __init__(self, fields: list[str]) -> None:
        super().__init__(
            ValidationErrorType.MISSING_FIELDS,
            message="Platform and Blog URL are required",
            context={"rule": ValidationErrorType.MISSING_FIELDS, "fields": fields},
        )


class UnsupportedPlatformError(ValidationError):
    def __init__(self, platform: str, supported: tuple[str, ...]) -> None:
        super().__init__(
            ValidationErrorType.UNSUPPORTED_PLATFORM,
            message="Unsupported platform",
            context={
                "rule": ValidationErrorType.UNSUPPORTED_PLATFORM,
                "field": "platform",
                "value": platform,
                "supported": list(supported),
            },
        )


class InvalidBlogUrlError(ValidationError):
    def __init__(self) -> None:
        super().__init__(
            ValidationErrorType.INVALID_URL,
            message="Invalid Blog URL",
            context={"rule": ValidationErrorType.INVALID_URL, "field": "blogUrl"},
        )


class TrafficGenerationError(InfrastructureError):
    def __init__(self, platform: str) -> None:
        super().__init__(
            "traffic_generation_failed",
            message="Traffic generation failed",
            context={"platform": platform},
        )
