# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hashlib
import secrets
import time

from flask import Flask, Response, g, request

from cloudtraffic.shared.logging import clear_correlation_id, logger, set_correlation_id

from .rate_limit import client_key

REQUEST_ID_HEADER = "X-Request-ID"

_SECRET_HEADERS = frozenset({"authorization", "cookie", "x-api-key"})
_SECRET_PARAMS = ("password", "token", "secret", "key")


def _fingerprint(value: str) -> str:
    return f"<sha256:{hashlib.sha256(value.encode()).hexdigest()[:8]}>"


def _describe_request() -> str:
    headers = {
        name: _fingerprint(value) if name.lower() in _SECRET_HEADERS else value
        for name, value in request.headers.items()
    }
    params = {
        name: "<redacted>" if any(p in name.lower() for p in _SECRET_PARAMS) else value
        for name, value in request.args.items()
    }
    return f"query={params} headers={headers} body_size={request.content_length or 0}"


def configure_request_logging(app: Flask, *, debug_mode: bool = False) -> None:
    """Tag each request with a correlation id and log its start and outcome."""

    @app.before_request
    def _start() -> None:
        g.correlation_id = request.headers.get(REQUEST_ID_HEADER) or secrets.token_urlsafe(8)
        g.request_started = time.perf_counter()
        set_correlation_id(g.correlation_id)

        line = f"--> {request.method} {request.path} ip={client_key(request)}"
        if debug_mode:
            line += f" {_describe_request()}"
        logger.info(line)

    @app.after_request
    def _finish(response: Response) -> Response:
        elapsed = time.perf_counter() - g.get("request_started", time.perf_counter())
        line = f"<-- {request.method} {request.path} status={response.status_code} {elapsed * 1000:.1f}ms"
        if debug_mode:
            line += f" user={g.get('user_id')}"
        logger.info(line)
        response.headers.setdefault(REQUEST_ID_HEADER, g.get("correlation_id", "-"))
        return response

    @app.teardown_request
    def _teardown(exc: BaseException | None) -> None:
        if exc is not None:
            logger.error(f"request aborted: {type(exc).__name__} on {request.method} {request.path}")
        clear_correlation_id()


__all__ = ["REQUEST_ID_HEADER", "configure_request_logging"]
