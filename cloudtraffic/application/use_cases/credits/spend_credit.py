# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from cloudtraffic.domain.users.exceptions import InsufficientBalanceError
from cloudtraffic.domain.users.repositories import UserRepository
from cloudtraffic.shared.logging import logger

from .earn_credit import CREDIT_UNIT


class SpendCreditUseCase:
    def __init__(self, *, users: UserRepository, amount: int = CREDIT_UNIT) -> None:
        self._users = users
        self._amount = amount

    def execute(self, user_id: str) -> int:
        try:
            balance = self._users.update_credits(user_id, -self._amount)
        except InsufficientBalanceError:
            logger.info(f"credits.spend: rejected user_id={user_id} (balance too low)")
            raise
        logger.info(f"credits.spend: ok user_id={user_id} balance={balance}")
        return balance
