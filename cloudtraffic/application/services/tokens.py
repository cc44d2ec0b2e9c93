# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Signed bearer tokens."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import jwt

from cloudtraffic.domain.users.entities import AccessToken
from cloudtraffic.domain.users.exceptions import InvalidTokenError
from cloudtraffic.domain.users.repositories import TokenIssuer
from cloudtraffic.shared.logging import logger


def _utcnow() -> datetime:
    return datetime.now(UTC)


class JwtTokenIssuer(TokenIssuer):
    def __init__(
        self,
        *,
        secret: str,
        algorithm: str = "HS256",
        expires_in: int = 3600,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret:
            raise ValueError("token secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = timedelta(seconds=expires_in)
        self._clock = clock

    def issue(self, user_id: str) -> AccessToken:
        issued_at = self._clock()
        expires_at = issued_at + self._ttl
        payload = {
            "sub": user_id,
            "userId": user_id,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        token = jwt.encode(payload, self._secret, algorithm=self._algorithm)
        logger.debug(f"tokens.issue: user={user_id} exp={expires_at.isoformat()}")
        return AccessToken(user_id=user_id, token=token, expires_at=expires_at)

    def verify(self, token: str) -> str:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError as exc:
            logger.info("tokens.verify: expired token")
            raise InvalidTokenError() from exc
        except jwt.InvalidTokenError as exc:
            logger.warning(f"tokens.verify: rejected token ({type(exc).__name__})")
            raise InvalidTokenError() from exc
        return str(payload["sub"])


__all__ = ["JwtTokenIssuer"]
