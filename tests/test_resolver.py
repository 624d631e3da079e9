"""Tests for resolve_all."""

import asyncio

import pytest

from wikifeeds.util.resolver import FailurePolicy, IgnoreFailures, PropagateFailures, resolve_all


async def succeed(value, delay=0.0):
    await asyncio.sleep(delay)
    return value


async def fail(message):
    raise RuntimeError(message)


def nested_awaitables():
    return {
        "string": "string",
        "fulfilled": succeed("fulfilled"),
        "rejected": fail("rejected"),
        "array": ["string", succeed("fulfilled"), fail("rejected")],
        "nested": {
            "string": "string",
            "fulfilled": succeed("fulfilled"),
            "rejected": fail("rejected"),
        },
    }


def test_ignore_failures_removes_failed_entries():
    result = asyncio.run(resolve_all(nested_awaitables(), ignore_failures=True))
    assert result == {
        "string": "string",
        "fulfilled": "fulfilled",
        "array": ["string", "fulfilled"],
        "nested": {"string": "string", "fulfilled": "fulfilled"},
    }


def test_propagate_failures_raises():
    with pytest.raises(RuntimeError, match="rejected"):
        asyncio.run(resolve_all(nested_awaitables(), ignore_failures=False))


def test_propagate_failures_cancels_siblings():
    finished = []

    async def slow():
        await asyncio.sleep(0.2)
        finished.append(True)

    async def go():
        with pytest.raises(RuntimeError, match="rejected"):
            await resolve_all({"slow": slow(), "nested": [fail("rejected")]})
        await asyncio.sleep(0.3)

    asyncio.run(go())
    assert finished == []


def test_ignore_failures_logs_warning(caplog):
    with caplog.at_level("WARNING", logger="wikifeeds.util.resolver"):
        asyncio.run(resolve_all([fail("boom")], ignore_failures=True))
    assert any("boom" in record.getMessage() for record in caplog.records)


def test_exactly_one_failure_leaves_k_minus_one():
    value = [succeed(1), {"a": succeed(2), "b": fail("x")}, [succeed(3), succeed(4)]]
    result = asyncio.run(resolve_all(value, ignore_failures=True))
    assert result == [1, {"a": 2}, [3, 4]]


def test_plain_values_unchanged():
    value = {"a": [1, (2, 3)], "b": None}
    assert asyncio.run(resolve_all(value)) == {"a": [1, (2, 3)], "b": None}


def test_tuple_shape_preserved():
    result = asyncio.run(resolve_all((succeed("a"), "b")))
    assert result == ("a", "b")


def test_awaitables_run_concurrently():
    async def go():
        loop = asyncio.get_running_loop()
        start = loop.time()
        await resolve_all([succeed(i, delay=0.1) for i in range(20)])
        return loop.time() - start

    assert asyncio.run(go()) < 1.0


def test_top_level_failure_ignored_is_none():
    assert asyncio.run(resolve_all(fail("x"), ignore_failures=True)) is None


def test_custom_policy():
    class CollectFailures(FailurePolicy):
        def __init__(self):
            self.errors = []

        def on_failure(self, error):
            self.errors.append(str(error))

    policy = CollectFailures()
    result = asyncio.run(resolve_all([fail("a"), succeed(1), fail("b")], policy=policy))
    assert result == [1]
    assert sorted(policy.errors) == ["a", "b"]


def test_policy_defaults():
    assert IgnoreFailures.return_exceptions is True
    assert PropagateFailures.return_exceptions is False
