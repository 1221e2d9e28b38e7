import httpx

from orbitiq.fallback import first_success
from orbitiq.providers import ProviderError

from conftest import run


def _returning(value, calls=None, name=""):
    async def attempt():
        if calls is not None:
            calls.append(name)
        return value
    return attempt


def _raising(exc, calls=None, name=""):
    async def attempt():
        if calls is not None:
            calls.append(name)
        raise exc
    return attempt


class TestFirstSuccess:
    def test_first_value_wins_and_later_tiers_are_skipped(self):
        calls = []
        chain = run(first_success([
            ("a", _returning("A", calls, "a")),
            ("b", _returning("B", calls, "b")),
        ]))
        assert chain.ok and chain.value == "A" and chain.tier == "a"
        assert calls == ["a"]
        assert chain.errors == []

    def test_none_and_exceptions_fall_through(self):
        calls = []
        chain = run(first_success([
            ("empty", _returning(None, calls, "empty")),
            ("net", _raising(httpx.ConnectTimeout("timed out"), calls, "net")),
            ("bad", _raising(ProviderError("quota exceeded"), calls, "bad")),
            ("last", _returning(42, calls, "last")),
        ]))
        assert chain.value == 42 and chain.tier == "last"
        assert calls == ["empty", "net", "bad", "last"]
        assert chain.errors == [
            "empty: no usable data",
            "net: timed out",
            "bad: quota exceeded",
        ]

    def test_all_fail(self):
        chain = run(first_success([
            ("a", _raising(ValueError())),
            ("b", _returning(None)),
        ]))
        assert not chain.ok
        assert chain.value is None and chain.tier is None
        assert chain.errors[0] == "a: ValueError"
        assert chain.last_error == "b: no usable data"

    def test_empty_chain(self):
        chain = run(first_success([]))
        assert not chain.ok
        assert chain.last_error is None

    def test_falsy_values_count_as_success(self):
        chain = run(first_success([("zero", _returning(0)), ("one", _returning(1))]))
        assert chain.value == 0 and chain.tier == "zero"
