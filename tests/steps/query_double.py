"""Step definitions for query double BDD scenarios."""

from __future__ import annotations

import asyncio
import json
import typing as t

import pytest
from pytest_bdd import given, parsers, then, when

from query_mox.controller import QueryMox
from query_mox.errors import SealedChainError

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from query_mox.proxy import InvocationProxy
    from query_mox.recorder import ExpectationRecorder


async def _await(awaitable: t.Awaitable[t.Any]) -> t.Any:
    return await awaitable


@given("a QueryMox double", target_fixture="mox")
def create_double() -> QueryMox:
    """Create a fresh double."""
    return QueryMox()


@given(
    parsers.cfparse('an expectation on table "{table}"'),
    target_fixture="recorder",
)
def expectation_on_table(mox: QueryMox, table: str) -> ExpectationRecorder:
    """Start an expectation seeded with *table*."""
    return mox.expect()(table)


@given(
    parsers.cfparse('an expectation on raw statement "{sql}"'),
    target_fixture="recorder",
)
def expectation_on_raw(mox: QueryMox, sql: str) -> ExpectationRecorder:
    """Start an expectation seeded with a raw statement."""
    return mox.expect().raw(sql)


@given(parsers.cfparse("the expectation calls \"{name}\" with '{args}'"))
def expectation_calls(recorder: ExpectationRecorder, name: str, args: str) -> None:
    """Append *name* with JSON-encoded positional *args*."""
    getattr(recorder, name)(*json.loads(args))


@given(parsers.cfparse('the expectation calls "{name}" with no arguments'))
def expectation_calls_wildcard(recorder: ExpectationRecorder, name: str) -> None:
    """Append *name* without arguments so it matches any."""
    getattr(recorder, name)()


@given(parsers.cfparse("the expectation is finalized with '{result}'"))
def finalize_expectation(recorder: ExpectationRecorder, result: str) -> None:
    """Seal the expectation with a JSON-encoded result."""
    recorder.finalize(json.loads(result))


@when(
    parsers.cfparse('the code under test queries table "{table}"'),
    target_fixture="query",
)
def query_table(mox: QueryMox, table: str) -> InvocationProxy:
    """Start an invocation on *table*."""
    return mox.mock_db()(table)


@when(
    parsers.cfparse('the code under test runs raw statement "{sql}"'),
    target_fixture="query",
)
def query_raw(mox: QueryMox, sql: str) -> InvocationProxy:
    """Start a raw invocation."""
    return mox.mock_db().raw(sql)


@when(parsers.cfparse("it calls \"{name}\" with '{args}'"))
def invocation_calls(query: InvocationProxy, name: str, args: str) -> None:
    """Call *name* on the invocation with JSON-encoded arguments."""
    getattr(query, name)(*json.loads(args))


@when(
    parsers.cfparse('the expectation is extended with "{name}"'),
    target_fixture="error",
)
def extend_expectation(
    recorder: ExpectationRecorder, name: str
) -> Exception | None:
    """Try to append *name* and capture the resulting error."""
    try:
        getattr(recorder, name)("id")
    except SealedChainError as exc:
        return exc
    return None


@then(parsers.cfparse("awaiting the query yields '{expected}'"))
def awaited_value(query: InvocationProxy, expected: str) -> None:
    """Await the invocation and compare with the JSON-encoded value."""
    assert asyncio.run(_await(query)) == json.loads(expected)


@then(parsers.cfparse("resolving the query synchronously yields '{expected}'"))
def resolved_value(query: InvocationProxy, expected: str) -> None:
    """Resolve the invocation synchronously."""
    assert query.resolve() == json.loads(expected)


@then(parsers.cfparse("the first awaited row is '{expected}'"))
def first_row(query: InvocationProxy, expected: str) -> None:
    """Await the invocation and inspect ``rows[0]``."""
    result = asyncio.run(_await(query))
    assert result["rows"][0] == json.loads(expected)


@then("a sealed chain error is raised")
def sealed_error_raised(error: Exception | None) -> None:
    """The misuse surfaced as a SealedChainError."""
    if error is None:
        pytest.fail("extending a finalized expectation did not raise")
    assert isinstance(error, SealedChainError)
