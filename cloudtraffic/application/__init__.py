# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .interfaces import SimulatorRegistry, TrafficLogRepository, TrafficSimulator
from .use_cases.traffic.generate_traffic import GenerateTrafficOutput, GenerateTrafficUseCase

__all__ = [
    "GenerateTrafficOutput",
    "GenerateTrafficUseCase",
    "SimulatorRegistry",
    "TrafficLogRepository",
    "TrafficSimulator",
]
