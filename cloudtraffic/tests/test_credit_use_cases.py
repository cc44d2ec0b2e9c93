from __future__ import annotations

import threading
from datetime import UTC, datetime

import pytest

from cloudtraffic.application.use_cases.credits.earn_credit import EarnCreditUseCase
from cloudtraffic.application.use_cases.credits.get_balance import GetBalanceUseCase
from cloudtraffic.application.use_cases.credits.spend_credit import SpendCreditUseCase
from cloudtraffic.domain.users.entities import User
from cloudtraffic.domain.users.exceptions import InsufficientBalanceError, UserNotFoundError
from cloudtraffic.domain.users.repositories import UserRepository


class InMemoryLedger(UserRepository):
    def __init__(self, *user_ids: str) -> None:
        self._lock = threading.Lock()
        self._users = {
            uid: User(
                id=uid,
                username=uid,
                email=f"{uid}@example.com",
                password_hash="x",
                created_at=datetime.now(UTC),
            )
            for uid in user_ids
        }

    def find_by_email(self, email: str) -> User | None:
        return next((u for u in self._users.values() if u.email == email), None)

    def find_by_id(self, user_id: str) -> User | None:
        return self._users.get(user_id)

    def add(self, user: User) -> User:
        self._users[user.id] = user
        return user

    def update_credits(self, user_id: str, delta: int) -> int:
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                raise UserNotFoundError()
            if user.credits + delta < 0:
                raise InsufficientBalanceError(context={"balance": user.credits})
            self._users[user_id] = user.with_credits(user.credits + delta)
            return user.credits + delta


@pytest.fixture()
def ledger() -> InMemoryLedger:
    return InMemoryLedger("u-1")


def test_earn_adds_one_credit(ledger: InMemoryLedger) -> None:
    earn = EarnCreditUseCase(users=ledger)

    assert earn.execute("u-1") == 1
    assert earn.execute("u-1") == 2
    assert GetBalanceUseCase(users=ledger).execute("u-1") == 2


def test_spend_never_goes_below_zero(ledger: InMemoryLedger) -> None:
    earn = EarnCreditUseCase(users=ledger)
    spend = SpendCreditUseCase(users=ledger)

    earn.execute("u-1")
    earn.execute("u-1")
    assert spend.execute("u-1") == 1
    assert spend.execute("u-1") == 0

    with pytest.raises(InsufficientBalanceError) as excinfo:
        spend.execute("u-1")

    assert excinfo.value.code == "insufficient_balance"
    assert excinfo.value.status == 400
    assert GetBalanceUseCase(users=ledger).execute("u-1") == 0


def test_earn_and_spend_sequences_net_out(ledger: InMemoryLedger) -> None:
    earn = EarnCreditUseCase(users=ledger)
    spend = SpendCreditUseCase(users=ledger)

    for op in "eesesee":
        (earn if op == "e" else spend).execute("u-1")

    assert GetBalanceUseCase(users=ledger).execute("u-1") == 3


@pytest.mark.parametrize("use_case_cls", [EarnCreditUseCase, SpendCreditUseCase])
def test_unknown_user_is_not_found(ledger: InMemoryLedger, use_case_cls: type) -> None:
    with pytest.raises(UserNotFoundError) as excinfo:
        use_case_cls(users=ledger).execute("missing")

    assert excinfo.value.status == 404


def test_balance_for_unknown_user_is_not_found(ledger: InMemoryLedger) -> None:
    with pytest.raises(UserNotFoundError):
        GetBalanceUseCase(users=ledger).execute("missing")
