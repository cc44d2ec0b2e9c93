# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime

from ..exceptions import InvariantViolation


@dataclass(slots=True, frozen=True)
class User:
    """Registered account; ``credits`` is the ledger balance."""

    id: str
    username: str
    email: str
    password_hash: str
    created_at: datetime
    credits: int = 0

    def __post_init__(self) -> None:
        if self.credits < 0:
            raise InvariantViolation("credits cannot be negative", field="credits")

    def with_credits(self, credits: int) -> User:
        return replace(self, credits=credits)


@dataclass(slots=True, frozen=True)
class AccessToken:

    user_id: str
    token: str
    expires_at: datetime
