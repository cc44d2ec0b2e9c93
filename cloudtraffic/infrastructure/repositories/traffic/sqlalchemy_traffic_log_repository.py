# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable

from sqlalchemy.orm import Session

from cloudtraffic.application.interfaces import TrafficLogRepository
from cloudtraffic.domain.traffic import Platform, TrafficLogEntry
from cloudtraffic.infrastructure.db.models import TrafficLog
from cloudtraffic.infrastructure.db.session import session_scope


class SqlAlchemyTrafficLogRepository(TrafficLogRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def append(self, entry: TrafficLogEntry) -> TrafficLogEntry:
        with session_scope(self._session_factory) as session:
            row = TrafficLog(
                platform=entry.platform.value,
                blog_url=entry.blog_url,
                timestamp=entry.timestamp,
            )
            session.add(row)
            session.flush()
            return TrafficLogEntry(
                id=row.id,
                platform=Platform(row.platform),
                blog_url=row.blog_url,
                timestamp=row.timestamp,
            )
