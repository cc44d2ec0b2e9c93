# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from pydantic import BaseModel


class TrafficResultDTO(BaseModel):
    success: bool
    message: str
