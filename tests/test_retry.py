import pytest

from agentflow.retry import RetryPolicy


def test_retry_succeeds_on_third_attempt():
    policy = RetryPolicy(max_attempts=3, backoff=lambda _: 0)
    count = 0

    def flaky():
        nonlocal count
        count += 1
        if count < 3:
            raise RuntimeError("fail")
        return "ok"

    assert policy.run(flaky) == "ok"
    assert count == 3


def test_retry_raises_last_error_when_exhausted():
    policy = RetryPolicy(max_attempts=2, backoff=lambda _: 0)
    calls = []

    def always_fail():
        calls.append(len(calls))
        raise ValueError(f"fail {len(calls)}")

    with pytest.raises(ValueError, match="fail 2"):
        policy.run(always_fail)
    assert len(calls) == 2


def test_non_positive_attempts_means_one_try():
    policy = RetryPolicy(max_attempts=0)
    calls = []

    def fail():
        calls.append(1)
        raise RuntimeError("fail")

    with pytest.raises(RuntimeError):
        policy.run(fail)
    assert calls == [1]


def test_backoff_delays_are_slept():
    slept = []
    policy = RetryPolicy(
        max_attempts=3, backoff=lambda attempt: attempt * 0.5, sleep=slept.append
    )

    def fail():
        raise RuntimeError("fail")

    with pytest.raises(RuntimeError):
        policy.run(fail)
    assert slept == [0.5, 1.0]


def test_zero_delay_does_not_sleep():
    slept = []
    policy = RetryPolicy(max_attempts=3, backoff=lambda _: 0, sleep=slept.append)
    count = 0

    def flaky():
        nonlocal count
        count += 1
        if count < 2:
            raise RuntimeError("fail")
        return count

    assert policy.run(flaky) == 2
    assert slept == []


def test_default_policy():
    policy = RetryPolicy.default()
    assert policy.max_attempts == 3
    assert policy.backoff(1) == pytest.approx(0.05)
    assert policy.backoff(20) == pytest.approx(0.5)
    delays = [policy.backoff(n) for n in range(1, 10)]
    assert delays == sorted(delays)