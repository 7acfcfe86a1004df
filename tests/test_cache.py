import pytest

from agentflow.cache import CachedLLM


class CountingLLM:
    def __init__(self, fail=False):
        self.calls = []
        self.fail = fail

    def complete(self, prompt, **kwargs):
        self.calls.append((prompt, kwargs))
        if self.fail:
            raise RuntimeError("boom")
        return f"answer {len(self.calls)} to {prompt}"

    def stream(self, prompt, **kwargs):
        self.calls.append((prompt, kwargs))
        yield from prompt.split()


def test_second_call_is_served_from_cache():
    llm = CountingLLM()
    cached = CachedLLM(llm, 4)
    first = cached.complete("hello")
    second = cached.complete("hello")
    assert first == second
    assert len(llm.calls) == 1
    assert cached.stats().size == 1


def test_temperature_is_part_of_key():
    llm = CountingLLM()
    cached = CachedLLM(llm, 4)
    a = cached.complete("hello", temperature=0.1)
    b = cached.complete("hello", temperature=0.9)
    assert a != b
    assert len(llm.calls) == 2
    # Default temperature equals an explicit 0.7.
    cached.complete("other")
    cached.complete("other", temperature=0.7)
    assert len(llm.calls) == 3


def test_least_recently_used_is_evicted():
    llm = CountingLLM()
    cached = CachedLLM(llm, 2)
    cached.complete("a")
    cached.complete("b")
    cached.complete("a")  # refresh "a"
    cached.complete("c")  # evicts "b"
    assert cached.stats().size == 2
    calls_before = len(llm.calls)
    cached.complete("a")
    assert len(llm.calls) == calls_before
    cached.complete("b")
    assert len(llm.calls) == calls_before + 1


def test_zero_capacity_never_caches():
    llm = CountingLLM()
    cached = CachedLLM(llm, 0)
    cached.complete("x")
    cached.complete("x")
    assert len(llm.calls) == 2
    assert cached.stats().size == 0


def test_errors_are_not_cached():
    llm = CountingLLM(fail=True)
    cached = CachedLLM(llm, 4)
    with pytest.raises(RuntimeError, match="boom"):
        cached.complete("x")
    assert cached.stats().size == 0


def test_unknown_option_raises_type_error():
    cached = CachedLLM(CountingLLM(), 4)
    with pytest.raises(TypeError):
        cached.complete("x", nonsense=1)


def test_stream_passes_through_uncached():
    llm = CountingLLM()
    cached = CachedLLM(llm, 4)
    assert list(cached.stream("one two three")) == ["one", "two", "three"]
    assert list(cached.stream("one two three")) == ["one", "two", "three"]
    assert len(llm.calls) == 2
    assert cached.stats().size == 0


def test_stats_reports_capacity_and_keys():
    cached = CachedLLM(CountingLLM(), 3)
    cached.complete("a")
    cached.complete("b")
    stats = cached.stats()
    assert stats.capacity == 3
    assert stats.size == len(stats.entries)
    assert all(len(key) == 32 for key in stats.entries)
    assert all(set(key) <= set("0123456789abcdef") for key in stats.entries)