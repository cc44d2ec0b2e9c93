from datetime import UTC, datetime

import pytest
from cloudtraffic.domain import (
    InvariantViolation,
    Platform,
    TrafficLogEntry,
    TrafficRequest,
    User,
)


def _user(credits: int = 0) -> User:
    return User(
        id="u-1",
        username="alice",
        email="alice@example.com",
        password_hash="hash",
        created_at=datetime.now(UTC),
        credits=credits,
    )


def test_user_defaults_to_zero_credits() -> None:
    assert _user().credits == 0


def test_user_rejects_negative_credits() -> None:
    with pytest.raises(InvariantViolation):
        _user(credits=-1)


def test_user_with_credits_returns_copy() -> None:
    user = _user(credits=2)
    updated = user.with_credits(5)
    assert updated.credits == 5
    assert user.credits == 2
    assert updated.id == user.id


def test_platform_values_are_lowercase_names() -> None:
    assert Platform.values() == ("youtube", "quora", "facebook")
    assert Platform("quora") is Platform.QUORA


def test_traffic_request_requires_url() -> None:
    with pytest.raises(InvariantViolation):
        TrafficRequest(platform=Platform.YOUTUBE, blog_url="")


def test_traffic_log_entry_timestamp_is_utc() -> None:
    entry = TrafficLogEntry(platform=Platform.FACEBOOK, blog_url="https://blog.example.com")
    assert entry.timestamp.tzinfo is not None
    assert entry.id is None
