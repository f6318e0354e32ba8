"""
Usage limiter tests — free quota, reset signal, atomic check-and-increment.
"""

import threading

import pytest

from construction_calc.errors import QuotaExceededError
from construction_calc.usage import UsageLimiter


def test_three_calls_then_rejected():
    limiter = UsageLimiter(limit=3)
    assert [limiter.check_and_consume("x") for _ in range(3)] == [1, 2, 3]
    with pytest.raises(QuotaExceededError) as exc_info:
        limiter.check_and_consume("x")
    err = exc_info.value
    assert err.identity == "x"
    assert err.limit == 3
    assert err.redirect_to == "/subscribe.html?email=x"


def test_rejection_does_not_increment():
    limiter = UsageLimiter(limit=1)
    limiter.check_and_consume("x")
    for _ in range(3):
        with pytest.raises(QuotaExceededError):
            limiter.check_and_consume("x")
    assert limiter.usage("x") == 1


def test_reset_allows_next_call():
    limiter = UsageLimiter(limit=3)
    for _ in range(3):
        limiter.check_and_consume("x")
    limiter.reset("x")
    assert limiter.usage("x") == 0
    assert limiter.check_and_consume("x") == 1


def test_identities_are_independent():
    limiter = UsageLimiter(limit=2)
    limiter.check_and_consume("a@gmail.com")
    limiter.check_and_consume("a@gmail.com")
    assert limiter.check_and_consume("b@gmail.com") == 1
    assert limiter.remaining("a@gmail.com") == 0
    assert limiter.remaining("b@gmail.com") == 1


def test_empty_identity_counts_as_guest():
    limiter = UsageLimiter(limit=3)
    limiter.check_and_consume("")
    limiter.check_and_consume(None)
    assert limiter.usage("guest") == 2


def test_redirect_escapes_email():
    err = QuotaExceededError("jane+site@gmail.com", 3)
    assert err.redirect_to == "/subscribe.html?email=jane%2Bsite%40gmail.com"
    assert err.to_dict()["redirectTo"] == err.redirect_to


def test_concurrent_requests_cannot_exceed_limit():
    """50 threads race on one identity — exactly `limit` of them get through."""
    limiter = UsageLimiter(limit=3)
    barrier = threading.Barrier(50)
    allowed = []
    rejected = []

    def worker():
        barrier.wait()
        try:
            allowed.append(limiter.check_and_consume("x"))
        except QuotaExceededError:
            rejected.append(1)

    threads = [threading.Thread(target=worker) for _ in range(50)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(allowed) == [1, 2, 3]
    assert len(rejected) == 47
    assert limiter.usage("x") == 3
