# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Flask, Response, g, jsonify, request
from werkzeug.exceptions import HTTPException

from cloudtraffic.shared.errors import AppError
from cloudtraffic.shared.logging import logger

from .rate_limit import client_key

INTERNAL_ERROR_BODY = {"error": "Internal Server Error"}


def app_error_response(error: AppError) -> tuple[Response, int]:
    return jsonify(error.to_dict()), int(error.status)


def configure_error_handling(app: Flask, *, debug_mode: bool = False) -> None:
    """Map every failure to a JSON body; internals reach the log only."""

    @app.errorhandler(AppError)
    def _on_app_error(exc: AppError):
        level = "WARNING" if exc.status < HTTPStatus.INTERNAL_SERVER_ERROR else "ERROR"
        logger.log(level, f"{exc.code} ({int(exc.status)}) on {request.method} {request.path}")
        return app_error_response(exc)

    @app.errorhandler(HTTPException)
    def _on_http_error(exc: HTTPException):
        return jsonify({"error": exc.name}), exc.code or HTTPStatus.BAD_REQUEST

    @app.errorhandler(Exception)
    def _on_unhandled(exc: Exception):
        where = f"{request.method} {request.path}"
        if debug_mode:
            where += (
                f" ip={client_key(request)} user={getattr(g, 'user_id', None)}"
                f" query={dict(request.args)}"
            )
        logger.exception(f"Unhandled {type(exc).__name__} on {where}")
        return jsonify(INTERNAL_ERROR_BODY), HTTPStatus.INTERNAL_SERVER_ERROR


__all__ = ["INTERNAL_ERROR_BODY", "app_error_response", "configure_error_handling"]
