# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Traffic generation value objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum

from ..exceptions import InvariantViolation


class Platform(str, Enum):
    YOUTUBE = "youtube"
    QUORA = "quora"
    FACEBOOK = "facebook"

    @classmethod
    def values(cls) -> tuple[str, ...]:
        return tuple(member.value for member in cls)


@dataclass(slots=True, frozen=True)
class TrafficRequest:
    """A validated request to send traffic from ``platform`` to ``blog_url``."""

    platform: Platform
    blog_url: str

    def __post_init__(self) -> None:
        if not self.blog_url:
            raise InvariantViolation("blog url is required", field="blog_url")


@dataclass(slots=True, frozen=True)
class TrafficLogEntry:
    """Append-only record of a completed traffic request."""

    platform: Platform
    blog_url: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    id: int | None = None


@dataclass(slots=True, frozen=True)
class SimulationReport:
    platform: Platform
    blog_url: str
    dispatched_at: datetime
    detail: str = ""
