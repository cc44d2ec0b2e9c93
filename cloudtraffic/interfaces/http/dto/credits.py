# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CreditRequestDTO(BaseModel):
    user_id: str | None = Field(default=None, alias="userId", min_length=1, max_length=64)

    model_config = ConfigDict(validate_by_name=True, str_strip_whitespace=True)


class CreditsDTO(BaseModel):
    credits: int
