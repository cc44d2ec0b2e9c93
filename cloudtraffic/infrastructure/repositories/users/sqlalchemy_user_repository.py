# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from cloudtraffic.domain.users.entities import User as DomainUser
from cloudtraffic.domain.users.exceptions import (
    EmailAlreadyRegisteredError,
    InsufficientBalanceError,
    UsernameTakenError,
    UserNotFoundError,
)
from cloudtraffic.domain.users.repositories import UserRepository
from cloudtraffic.infrastructure.db.models import User
from cloudtraffic.infrastructure.db.session import session_scope
from cloudtraffic.shared.logging import logger


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        username=row.username,
        email=row.email,
        password_hash=row.password_hash,
        credits=int(row.credits or 0),
        created_at=row.created_at,
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def find_by_email(self, email: str) -> DomainUser | None:
        with session_scope(self._session_factory) as session:
            row = session.execute(select(User).where(User.email == email)).scalar_one_or_none()
            return _to_domain(row) if row else None

    def find_by_id(self, user_id: str) -> DomainUser | None:
        with session_scope(self._session_factory) as session:
            row = session.get(User, user_id)
            return _to_domain(row) if row else None

    def add(self, user: DomainUser) -> DomainUser:
        try:
            with session_scope(self._session_factory) as session:
                row = User(
                    id=user.id,
                    username=user.username,
                    email=user.email,
                    password_hash=user.password_hash,
                    credits=user.credits,
                    created_at=user.created_at,
                )
                session.add(row)
                session.flush()
                return _to_domain(row)
        except IntegrityError as exc:
            # Lost a race on one of the unique columns.
            if self.find_by_email(user.email) is not None:
                raise EmailAlreadyRegisteredError() from exc
            raise UsernameTakenError() from exc

    def update_credits(self, user_id: str, delta: int) -> int:
        with session_scope(self._session_factory) as session:
            result = session.execute(
                update(User)
                .where(User.id == user_id, User.credits + delta >= 0)
                .values(credits=User.credits + delta)
                .execution_options(synchronize_session=False)
            )
            current = session.execute(
                select(User.credits).where(User.id == user_id)
            ).scalar_one_or_none()

            if result.rowcount == 0:
                if current is None:
                    raise UserNotFoundError()
                raise InsufficientBalanceError(context={"balance": int(current)})

            logger.debug(f"users.update_credits: user_id={user_id} delta={delta} balance={current}")
            return int(current)
