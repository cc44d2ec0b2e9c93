from __future__ import annotations

import json

import httpx
import pytest

from cloudtraffic.cli import ApiClient, main


class Recorder:
    def __init__(self, status: int = 200, body: object | None = None) -> None:
        self.status = status
        self.body = body if body is not None else {"ok": True}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status, json=self.body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


def test_register_posts_credentials(capsys: pytest.CaptureFixture[str]) -> None:
    recorder = Recorder(201, {"message": "User created successfully"})

    code = main(
        ["--base-url", "http://api.test", "register", "alice", "alice@example.com", "secret123"],
        transport=recorder.transport,
    )

    assert code == 0
    request = recorder.requests[0]
    assert request.method == "POST"
    assert request.url == "http://api.test/api/auth/register"
    assert json.loads(request.content) == {
        "username": "alice",
        "email": "alice@example.com",
        "password": "secret123",
    }
    assert json.loads(capsys.readouterr().out) == {"message": "User created successfully"}


def test_earn_sends_bearer_token() -> None:
    recorder = Recorder(body={"credits": 1})

    code = main(["--token", "abc", "earn"], transport=recorder.transport)

    assert code == 0
    request = recorder.requests[0]
    assert request.url.path == "/api/traffic/earn"
    assert request.headers["Authorization"] == "Bearer abc"
    assert json.loads(request.content) == {}


def test_balance_passes_user_id_as_query() -> None:
    recorder = Recorder(body={"credits": 4})

    main(["balance", "--user-id", "user-1"], transport=recorder.transport)

    request = recorder.requests[0]
    assert request.method == "GET"
    assert request.url.params["userId"] == "user-1"


def test_generate_uses_camel_case_payload() -> None:
    recorder = Recorder(body={"success": True, "message": "Traffic sent via quora"})

    main(["generate", "quora", "https://blog.example.com"], transport=recorder.transport)

    assert json.loads(recorder.requests[0].content) == {
        "platform": "quora",
        "blogUrl": "https://blog.example.com",
    }


def test_http_error_exits_with_1(capsys: pytest.CaptureFixture[str]) -> None:
    recorder = Recorder(400, {"error": "insufficient_balance"})

    code = main(["spend", "--user-id", "user-1"], transport=recorder.transport)

    assert code == 1
    assert json.loads(capsys.readouterr().out)["error"] == "insufficient_balance"


def test_connection_failure_exits_with_1(capsys: pytest.CaptureFixture[str]) -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    code = main(["login", "a@example.com", "pw"], transport=httpx.MockTransport(refuse))

    assert code == 1
    assert "connection refused" in capsys.readouterr().err


def test_api_client_context_manager() -> None:
    recorder = Recorder(body={"token": "t"})

    with ApiClient("http://api.test/", transport=recorder.transport) as client:
        response = client.login("a@example.com", "pw")

    assert response.json() == {"token": "t"}
    assert str(recorder.requests[0].url) == "http://api.test/api/auth/login"
