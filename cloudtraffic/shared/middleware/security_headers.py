# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask, Response

# JSON-only API: nothing may be framed, embedded or sniffed.
BASE_SECURITY_HEADERS: dict[str, str] = {
    "X-Frame-Options": "DENY",
    "X-Content-Type-Options": "nosniff",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
    "Permissions-Policy": "geolocation=(), microphone=(), camera=(), payment=(), usb=()",
    "X-Permitted-Cross-Domain-Policies": "none",
}

HSTS_VALUE = "max-age=31536000; includeSubDomains"


def configure_security_headers(app: Flask, *, enable_hsts: bool = False) -> None:
    headers = dict(BASE_SECURITY_HEADERS)
    if enable_hsts:
        headers["Strict-Transport-Security"] = HSTS_VALUE

    @app.after_request
    def _apply_security_headers(resp: Response) -> Response:
        for name, value in headers.items():
            resp.headers.setdefault(name, value)
        return resp


__all__ = ["BASE_SECURITY_HEADERS", "HSTS_VALUE", "configure_security_headers"]
