# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from cloudtraffic.domain.traffic import (
    Platform,
    SimulationReport,
    TrafficGenerationError,
    TrafficLogEntry,
    validate_traffic_request,
)
from cloudtraffic.infrastructure.resilience import CircuitBreaker, RetryPolicy, resilient_call
from cloudtraffic.shared.logging import logger

from ...interfaces import SimulatorRegistry, TrafficLogRepository


@dataclass(slots=True)
class GenerateTrafficOutput:
    platform: Platform
    blog_url: str
    report: SimulationReport
    log_entry: TrafficLogEntry

    @property
    def message(self) -> str:
        return f"Traffic sent via {self.platform.value}"


class GenerateTrafficUseCase:
    def __init__(
        self,
        *,
        simulators: SimulatorRegistry,
        logs: TrafficLogRepository,
        timeout: float = 15.0,
        retry_policy: RetryPolicy | None = None,
        failure_threshold: int = 5,
        reset_timeout: float = 60.0,
    ) -> None:
        self._simulators = simulators
        self._logs = logs
        self._timeout = timeout
        self._retry_policy = retry_policy or RetryPolicy()
        self._breakers = {
            platform: CircuitBreaker(
                failure_threshold=failure_threshold,
                reset_timeout=reset_timeout,
                name=platform.value,
            )
            for platform in Platform
        }

    async def execute(self, platform: Any, blog_url: Any) -> GenerateTrafficOutput:
        request = validate_traffic_request(platform, blog_url)

        simulator = self._simulators.get(request.platform)
        if simulator is None:
            logger.error(f"traffic.generate: no simulator registered for {request.platform.value}")
            raise TrafficGenerationError(request.platform.value)

        try:
            report = await resilient_call(
                simulator.simulate,
                request,
                breaker=self._breakers[request.platform],
                timeout=self._timeout,
                retry_policy=self._retry_policy,
            )
        except Exception as exc:
            logger.exception(
                f"traffic.generate: simulator failed platform={request.platform.value} "
                f"({type(exc).__name__})"
            )
            raise TrafficGenerationError(request.platform.value) from exc

        entry = self._logs.append(
            TrafficLogEntry(platform=request.platform, blog_url=request.blog_url)
        )
        logger.info(
            f"traffic.generate: ok platform={request.platform.value} log_id={entry.id}"
        )
        return GenerateTrafficOutput(
            platform=request.platform,
            blog_url=request.blog_url,
            report=report,
            log_entry=entry,
        )
