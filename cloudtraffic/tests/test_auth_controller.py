from __future__ import annotations

from datetime import UTC, datetime
from typing import cast
from unittest.mock import MagicMock

import pytest
from flask import Flask

from cloudtraffic.application.use_cases.users.login_user import LoginUserUseCase
from cloudtraffic.application.use_cases.users.register_user import RegisterUserUseCase
from cloudtraffic.domain.users.entities import AccessToken, User
from cloudtraffic.domain.users.exceptions import (
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
)
from cloudtraffic.interfaces.http.controllers.auth_controller import AuthController
from cloudtraffic.shared.middleware.error_handler import configure_error_handling
from cloudtraffic.shared.middleware.rate_limit import InMemoryRateLimiter


@pytest.fixture()
def flask_app() -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)
    return app


class StubRegister:
    def __init__(self) -> None:
        self.calls: list[tuple[str, str, str]] = []

    def execute(self, username: str, email: str, password: str) -> User:
        self.calls.append((username, email, password))
        return User(
            id="user-1",
            username=username,
            email=email,
            password_hash="hash",
            created_at=datetime.now(UTC),
        )


def test_register_endpoint_returns_201(flask_app: Flask) -> None:
    register = StubRegister()
    controller = AuthController(
        register_use_case=cast(RegisterUserUseCase, register),
        login_use_case=MagicMock(),
    )
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/register",
            json={"username": "alice", "email": "Alice@Example.com", "password": "secret123"},
        )

    assert response.status_code == 201
    assert response.get_json() == {"message": "User created successfully"}
    assert register.calls == [("alice", "alice@example.com", "secret123")]


def test_register_invalid_payload_returns_400(flask_app: Flask) -> None:
    register = MagicMock()
    controller = AuthController(register_use_case=register, login_use_case=MagicMock())
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/register", json={"username": "alice", "email": "nope", "password": "short"}
        )

    assert response.status_code == 400
    payload = response.get_json()
    assert payload["error"] == "validation_error"
    assert payload["context"]["fields"] == ["email", "password"]
    types = {error["field"]: error["type"] for error in payload["context"]["errors"]}
    assert types["password"] == "password_too_short"
    register.execute.assert_not_called()


def test_register_conflict_returns_400(flask_app: Flask) -> None:
    register = MagicMock()
    register.execute.side_effect = EmailAlreadyRegisteredError()
    controller = AuthController(register_use_case=register, login_use_case=MagicMock())
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/register",
            json={"username": "alice", "email": "alice@example.com", "password": "secret123"},
        )

    assert response.status_code == 400
    assert response.get_json()["error"] == "email_taken"


def test_login_returns_token(flask_app: Flask) -> None:
    expires = datetime(2030, 1, 1, tzinfo=UTC)
    login = MagicMock()
    login.execute.return_value = AccessToken(user_id="user-1", token="jwt", expires_at=expires)
    controller = AuthController(
        register_use_case=MagicMock(),
        login_use_case=cast(LoginUserUseCase, login),
    )
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/login",
            json={"email": "alice@example.com", "password": "secret123"},
            environ_base={"REMOTE_ADDR": "10.1.1.1"},
        )

    assert response.status_code == 200
    payload = response.get_json()
    assert payload["token"] == "jwt"
    assert payload["userId"] == "user-1"
    assert payload["expiresAt"].startswith("2030-01-01")
    login.execute.assert_called_once_with("alice@example.com", "secret123", "10.1.1.1")


def test_login_invalid_credentials_returns_401(flask_app: Flask) -> None:
    login = MagicMock()
    login.execute.side_effect = InvalidCredentialsError()
    controller = AuthController(register_use_case=MagicMock(), login_use_case=login)
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/login", json={"email": "a@example.com", "password": "x"})

    assert response.status_code == 401
    assert response.get_json() == {
        "error": "invalid_credentials",
        "message": "Invalid credentials",
    }


def test_login_missing_fields_returns_400(flask_app: Flask) -> None:
    controller = AuthController(register_use_case=MagicMock(), login_use_case=MagicMock())
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/login", json={"email": "a@example.com"})

    assert response.status_code == 400
    assert response.get_json()["context"]["fields"] == ["password"]


def test_auth_routes_are_rate_limited(flask_app: Flask) -> None:
    login = MagicMock()
    login.execute.side_effect = InvalidCredentialsError()
    controller = AuthController(
        register_use_case=MagicMock(),
        login_use_case=login,
        limiter=InMemoryRateLimiter(2, 60),
    )
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        statuses = [
            client.post("/login", json={"email": "a@example.com", "password": "x"}).status_code
            for _ in range(3)
        ]

    assert statuses == [401, 401, 429]


def test_auth_limit_is_shared_across_mount_points(flask_app: Flask) -> None:
    login = MagicMock()
    login.execute.side_effect = InvalidCredentialsError()
    controller = AuthController(
        register_use_case=MagicMock(),
        login_use_case=login,
        limiter=InMemoryRateLimiter(2, 60),
    )
    blueprint = controller.as_blueprint()
    flask_app.register_blueprint(blueprint)
    flask_app.register_blueprint(blueprint, url_prefix="/api/auth", name="auth_api")
    body = {"email": "a@example.com", "password": "x"}

    with flask_app.test_client() as client:
        statuses = [
            client.post(path, json=body).status_code
            for path in ("/login", "/api/auth/login", "/api/auth/login", "/login")
        ]

    assert statuses == [401, 401, 429, 429]
