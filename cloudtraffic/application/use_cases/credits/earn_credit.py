# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from cloudtraffic.domain.users.repositories import UserRepository
from cloudtraffic.shared.logging import logger

CREDIT_UNIT = 1


class EarnCreditUseCase:
    def __init__(self, *, users: UserRepository, amount: int = CREDIT_UNIT) -> None:
        self._users = users
        self._amount = amount

    def execute(self, user_id: str) -> int:
        balance = self._users.update_credits(user_id, self._amount)
        logger.info(f"credits.earn: ok user_id={user_id} balance={balance}")
        return balance
