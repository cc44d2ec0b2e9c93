# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from cloudtraffic.domain.users.exceptions import UserNotFoundError
from cloudtraffic.domain.users.repositories import UserRepository


class GetBalanceUseCase:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def execute(self, user_id: str) -> int:
        user = self._users.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError()
        return user.credits
