# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any, NoReturn

from pydantic import ValidationError as PydanticValidationError

from .base import ValidationError


def format_pydantic_errors(exc: PydanticValidationError) -> dict[str, Any]:
    """Reduce pydantic's error list to ``{"fields": [...], "errors": [...]}``.

    Field names are reported as the client sent them (aliases), and the raw
    input value is never echoed back.
    """

    errors: list[dict[str, Any]] = []
    for item in exc.errors(include_url=False, include_input=False):
        field = ".".join(str(part) for part in item["loc"]) or "body"
        entry: dict[str, Any] = {"field": field, "type": item["type"], "message": item["msg"]}
        if ctx := item.get("ctx"):
            entry["ctx"] = {key: str(value) for key, value in ctx.items()}
        errors.append(entry)

    return {
        "fields": sorted({entry["field"] for entry in errors}),
        "errors": errors,
    }


def raise_validation_error(exc: PydanticValidationError) -> NoReturn:
    raise ValidationError(
        message="Invalid request body", context=format_pydantic_errors(exc)
    ) from exc


__all__ = ["format_pydantic_errors", "raise_validation_error"]
