# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .exceptions import InvariantViolation
from .traffic import Platform, SimulationReport, TrafficLogEntry, TrafficRequest
from .users.entities import AccessToken, User

__all__ = [
    "AccessToken",
    "InvariantViolation",
    "Platform",
    "SimulationReport",
    "TrafficLogEntry",
    "TrafficRequest",
    "User",
]
