from cloudtraffic.infrastructure.auth.login_attempts import LoginAttemptsTracker


class FakeClock:
    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_locks_after_max_failures() -> None:
    clock = FakeClock()
    tracker = LoginAttemptsTracker(max_attempts=5, lockout_duration=900, clock=clock)

    for _ in range(4):
        tracker.record_attempt("a@example.com", success=False, ip_address="10.0.0.1")
    assert not tracker.is_locked("a@example.com")

    tracker.record_attempt("a@example.com", success=False, ip_address="10.0.0.1")

    assert tracker.is_locked("a@example.com")
    assert tracker.get_lockout_remaining("a@example.com") == 900
    assert not tracker.is_locked("b@example.com")


def test_lockout_expires() -> None:
    clock = FakeClock()
    tracker = LoginAttemptsTracker(max_attempts=2, lockout_duration=60, clock=clock)
    tracker.record_attempt("a@example.com", success=False)
    tracker.record_attempt("a@example.com", success=False)

    clock.now += 61

    assert not tracker.is_locked("a@example.com")
    assert tracker.get_lockout_remaining("a@example.com") == 0.0


def test_failures_outside_window_are_ignored() -> None:
    clock = FakeClock()
    tracker = LoginAttemptsTracker(max_attempts=2, attempt_window=3600, clock=clock)

    tracker.record_attempt("a@example.com", success=False)
    clock.now += 3601
    tracker.record_attempt("a@example.com", success=False)

    assert tracker.get_failed_attempts_count("a@example.com") == 1
    assert not tracker.is_locked("a@example.com")


def test_success_resets_history() -> None:
    tracker = LoginAttemptsTracker(max_attempts=3, clock=FakeClock())
    tracker.record_attempt("a@example.com", success=False)
    tracker.record_attempt("a@example.com", success=False)

    tracker.record_attempt("a@example.com", success=True)

    assert tracker.get_failed_attempts_count("a@example.com") == 0


def test_clear_attempts_unlocks() -> None:
    tracker = LoginAttemptsTracker(max_attempts=1, clock=FakeClock())
    tracker.record_attempt("a@example.com", success=False)
    assert tracker.is_locked("a@example.com")

    tracker.clear_attempts("a@example.com")

    assert not tracker.is_locked("a@example.com")


def test_stale_identifiers_are_forgotten() -> None:
    clock = FakeClock()
    tracker = LoginAttemptsTracker(max_attempts=5, attempt_window=60, clock=clock)

    for i in range(200):
        tracker.record_attempt(f"junk{i}@example.com", success=False)
    assert len(tracker) == 200

    clock.now += 120
    tracker.record_attempt("fresh@example.com", success=False)

    assert len(tracker) == 1
    assert tracker.get_failed_attempts_count("fresh@example.com") == 1


def test_sweep_keeps_active_lockouts() -> None:
    clock = FakeClock()
    tracker = LoginAttemptsTracker(
        max_attempts=2, lockout_duration=600, attempt_window=60, clock=clock
    )
    tracker.record_attempt("locked@example.com", success=False)
    tracker.record_attempt("locked@example.com", success=False)
    tracker.record_attempt("idle@example.com", success=False)

    clock.now += 120
    tracker.record_attempt("fresh@example.com", success=False)

    assert len(tracker) == 2
    assert tracker.is_locked("locked@example.com")
