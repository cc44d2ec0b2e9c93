from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from flask import Flask

from cloudtraffic.application.services.tokens import JwtTokenIssuer
from cloudtraffic.domain.users.exceptions import InsufficientBalanceError, UserNotFoundError
from cloudtraffic.interfaces.http.controllers.credits_controller import CreditsController
from cloudtraffic.shared.middleware.error_handler import configure_error_handling

SECRET = "controller-secret"


@pytest.fixture()
def use_cases() -> dict[str, MagicMock]:
    earn, spend, balance = MagicMock(), MagicMock(), MagicMock()
    earn.execute.return_value = 1
    spend.execute.return_value = 0
    balance.execute.return_value = 7
    return {"earn": earn, "spend": spend, "balance": balance}


@pytest.fixture()
def flask_app(use_cases: dict[str, MagicMock]) -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)
    controller = CreditsController(
        earn_use_case=use_cases["earn"],
        spend_use_case=use_cases["spend"],
        balance_use_case=use_cases["balance"],
        tokens=JwtTokenIssuer(secret=SECRET),
    )
    app.register_blueprint(controller.as_blueprint(), url_prefix="/traffic")
    return app


def _bearer(user_id: str, secret: str = SECRET) -> dict[str, str]:
    token = JwtTokenIssuer(secret=secret).issue(user_id).token
    return {"Authorization": f"Bearer {token}"}


def test_earn_with_user_id(flask_app: Flask, use_cases: dict[str, MagicMock]) -> None:
    with flask_app.test_client() as client:
        response = client.post("/traffic/earn", json={"userId": "user-1"})

    assert response.status_code == 200
    assert response.get_json() == {"credits": 1}
    use_cases["earn"].execute.assert_called_once_with("user-1")


def test_earn_uses_token_subject(flask_app: Flask, use_cases: dict[str, MagicMock]) -> None:
    with flask_app.test_client() as client:
        response = client.post("/traffic/earn", json={}, headers=_bearer("user-9"))

    assert response.status_code == 200
    use_cases["earn"].execute.assert_called_once_with("user-9")


def test_token_and_user_id_must_match(flask_app: Flask, use_cases: dict[str, MagicMock]) -> None:
    with flask_app.test_client() as client:
        response = client.post(
            "/traffic/spend", json={"userId": "user-2"}, headers=_bearer("user-1")
        )

    assert response.status_code == 403
    assert response.get_json()["error"] == "user_mismatch"
    use_cases["spend"].execute.assert_not_called()


def test_invalid_token_returns_401(flask_app: Flask, use_cases: dict[str, MagicMock]) -> None:
    with flask_app.test_client() as client:
        response = client.post(
            "/traffic/earn", json={"userId": "user-1"}, headers=_bearer("user-1", "other")
        )

    assert response.status_code == 401
    assert response.get_json()["error"] == "invalid_token"
    use_cases["earn"].execute.assert_not_called()


def test_missing_user_id_returns_400(flask_app: Flask) -> None:
    with flask_app.test_client() as client:
        response = client.post("/traffic/earn", json={})

    assert response.status_code == 400
    assert response.get_json()["error"] == "missing_fields"


def test_spend_insufficient_balance(flask_app: Flask, use_cases: dict[str, MagicMock]) -> None:
    use_cases["spend"].execute.side_effect = InsufficientBalanceError(context={"balance": 0})

    with flask_app.test_client() as client:
        response = client.post("/traffic/spend", json={"userId": "user-1"})

    assert response.status_code == 400
    assert response.get_json() == {
        "error": "insufficient_balance",
        "message": "Insufficient credits",
        "context": {"balance": 0},
    }


def test_spend_unknown_user(flask_app: Flask, use_cases: dict[str, MagicMock]) -> None:
    use_cases["spend"].execute.side_effect = UserNotFoundError()

    with flask_app.test_client() as client:
        response = client.post("/traffic/spend", json={"userId": "ghost"})

    assert response.status_code == 404
    assert response.get_json()["error"] == "user_not_found"


def test_balance_reads_query_string(flask_app: Flask, use_cases: dict[str, MagicMock]) -> None:
    with flask_app.test_client() as client:
        response = client.get("/traffic/balance?userId=user-3")

    assert response.status_code == 200
    assert response.get_json() == {"credits": 7}
    use_cases["balance"].execute.assert_called_once_with("user-3")
