# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import request


def get_client_ip() -> str | None:
    # Forwarded headers are applied by ProxyFix only for trusted proxy hops.
    return request.remote_addr


def get_bearer_token() -> str | None:
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        return auth_header[7:].strip() or None
    return None


__all__ = ["get_bearer_token", "get_client_ip"]
