# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Built-in platform simulators.

These record the dispatch and report back; they send no outbound traffic.
Deployments that need real delivery register their own ``TrafficSimulator``
per platform.
"""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime
from typing import ClassVar

from cloudtraffic.application.interfaces import TrafficSimulator
from cloudtraffic.domain.traffic import Platform, SimulationReport, TrafficRequest
from cloudtraffic.shared.logging import logger


class DispatchRecordingSimulator(TrafficSimulator):
    platform: ClassVar[Platform]

    async def simulate(self, request: TrafficRequest) -> SimulationReport:
        if request.platform is not self.platform:
            raise ValueError(
                f"{type(self).__name__} cannot handle platform {request.platform.value}"
            )
        await asyncio.sleep(0)
        logger.info(f"simulator.{self.platform.value}: dispatch recorded url={request.blog_url}")
        return SimulationReport(
            platform=self.platform,
            blog_url=request.blog_url,
            dispatched_at=datetime.now(UTC),
            detail="dispatch recorded",
        )


class YouTubeTrafficSimulator(DispatchRecordingSimulator):
    platform = Platform.YOUTUBE


class QuoraTrafficSimulator(DispatchRecordingSimulator):
    platform = Platform.QUORA


class FacebookTrafficSimulator(DispatchRecordingSimulator):
    platform = Platform.FACEBOOK


def default_simulators() -> dict[Platform, TrafficSimulator]:
    simulators: list[DispatchRecordingSimulator] = [
        YouTubeTrafficSimulator(),
        QuoraTrafficSimulator(),
        FacebookTrafficSimulator(),
    ]
    return {simulator.platform: simulator for simulator in simulators}


__all__ = [
    "DispatchRecordingSimulator",
    "FacebookTrafficSimulator",
    "QuoraTrafficSimulator",
    "YouTubeTrafficSimulator",
    "default_simulators",
]
