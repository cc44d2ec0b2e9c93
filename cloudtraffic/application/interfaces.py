# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol

from cloudtraffic.domain.traffic import Platform, SimulationReport, TrafficLogEntry, TrafficRequest


class TrafficSimulator(Protocol):
    """Delivers traffic for one platform.

    What "traffic" means for a platform, and how success is judged, is up to
    the implementation; the use case only awaits the report under a timeout.
    """

    async def simulate(self, request: TrafficRequest) -> SimulationReport: ...


SimulatorRegistry = Mapping[Platform, TrafficSimulator]


class TrafficLogRepository(Protocol):
    def append(self, entry: TrafficLogEntry) -> TrafficLogEntry: ...
