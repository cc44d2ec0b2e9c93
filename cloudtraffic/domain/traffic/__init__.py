# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import Platform, SimulationReport, TrafficLogEntry, TrafficRequest
from .exceptions import (
    InvalidBlogUrlError,
    MissingTrafficFieldsError,
    TrafficGenerationError,
    UnsupportedPlatformError,
)
from .validation import validate_traffic_request

__all__ = [
    "InvalidBlogUrlError",
    "MissingTrafficFieldsError",
    "Platform",
    "SimulationReport",
    "TrafficGenerationError",
    "TrafficLogEntry",
    "TrafficRequest",
    "UnsupportedPlatformError",
    "validate_traffic_request",
]
