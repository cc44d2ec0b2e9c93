# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Command-line client for the CloudTraffic HTTP API."""

from __future__ import annotations

import argparse
import json
import os
import sys
from collections.abc import Sequence
from typing import Any

import httpx

from cloudtraffic.shared.logging import logger

DEFAULT_BASE_URL = "http://127.0.0.1:5000"


class ApiClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        token: str | None = None,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self._http = httpx.Client(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    def __enter__(self) -> ApiClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def register(self, username: str, email: str, password: str) -> httpx.Response:
        return self._http.post(
            "/api/auth/register",
            json={"username": username, "email": email, "password": password},
        )

    def login(self, email: str, password: str) -> httpx.Response:
        return self._http.post("/api/auth/login", json={"email": email, "password": password})

    def earn(self, user_id: str | None = None) -> httpx.Response:
        return self._http.post("/api/traffic/earn", json=_user_body(user_id))

    def spend(self, user_id: str | None = None) -> httpx.Response:
        return self._http.post("/api/traffic/spend", json=_user_body(user_id))

    def balance(self, user_id: str | None = None) -> httpx.Response:
        params = {"userId": user_id} if user_id else None
        return self._http.get("/api/traffic/balance", params=params)

    def generate(self, platform: str, blog_url: str) -> httpx.Response:
        return self._http.post(
            "/api/generate-traffic", json={"platform": platform, "blogUrl": blog_url}
        )


def _user_body(user_id: str | None) -> dict[str, Any]:
    return {"userId": user_id} if user_id else {}


def _emit(response: httpx.Response) -> int:
    try:
        body: Any = response.json()
    except ValueError:
        body = {"status": response.status_code, "body": response.text}
    print(json.dumps(body, indent=2, sort_keys=True))
    return 0 if response.is_success else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cloudtraffic", description="CloudTraffic API client")
    parser.add_argument(
        "--base-url",
        default=os.environ.get("CLOUDTRAFFIC_URL", DEFAULT_BASE_URL),
        help="API base URL (env CLOUDTRAFFIC_URL)",
    )
    parser.add_argument(
        "--token",
        default=os.environ.get("CLOUDTRAFFIC_TOKEN"),
        help="Bearer token for credit commands (env CLOUDTRAFFIC_TOKEN)",
    )
    parser.add_argument("--timeout", type=float, default=10.0)

    sub = parser.add_subparsers(dest="command", required=True)

    register = sub.add_parser("register", help="Create an account")
    register.add_argument("username")
    register.add_argument("email")
    register.add_argument("password")

    login = sub.add_parser("login", help="Obtain a bearer token")
    login.add_argument("email")
    login.add_argument("password")

    for name, help_text in (
        ("earn", "Add one credit"),
        ("spend", "Spend one credit"),
        ("balance", "Show current credits"),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("--user-id", default=None)

    generate = sub.add_parser("generate", help="Request traffic for a blog URL")
    generate.add_argument("platform", help="youtube, quora or facebook")
    generate.add_argument("blog_url")

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)

    return parser


def _serve(args: argparse.Namespace) -> int:
    from cloudtraffic.app import create_app
    from cloudtraffic.shared.config import load_config

    config = load_config()
    app = create_app(config)
    app.run(host=args.host or config.host, port=args.port or config.port, debug=False)
    return 0


def main(
    argv: Sequence[str] | None = None,
    *,
    transport: httpx.BaseTransport | None = None,
) -> int:
    args = build_parser().parse_args(argv)

    if args.command == "serve":
        return _serve(args)

    with ApiClient(
        args.base_url, token=args.token, timeout=args.timeout, transport=transport
    ) as client:
        try:
            if args.command == "register":
                response = client.register(args.username, args.email, args.password)
            elif args.command == "login":
                response = client.login(args.email, args.password)
            elif args.command == "earn":
                response = client.earn(args.user_id)
            elif args.command == "spend":
                response = client.spend(args.user_id)
            elif args.command == "balance":
                response = client.balance(args.user_id)
            else:
                response = client.generate(args.platform, args.blog_url)
        except httpx.HTTPError as exc:
            logger.error(f"cli: request failed ({type(exc).__name__}: {exc})")
            print(f"error: {exc}", file=sys.stderr)
            return 1

    return _emit(response)


if __name__ == "__main__":
    raise SystemExit(main())
