"""Matching of invocation chains against registered expectations."""

from __future__ import annotations

import typing as t

from .comparators import deep_equal
from .formatting import describe_chain, describe_operation

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .chain import Chain, Operation

TraceHook = t.Callable[[str, dict[str, t.Any]], None]


def parameters_match(expected: Operation, actual: Operation) -> bool:
    """Return ``True`` if *actual*'s parameters satisfy *expected*.

    An expected operation without parameters is a wildcard and accepts any
    arguments.
    """
    if expected.is_wildcard:
        return True
    return deep_equal(expected.args, actual.args) and deep_equal(
        expected.kwargs, actual.kwargs
    )


def explain_mismatch(candidate: Chain, invocation: Chain) -> str | None:
    """Return why *candidate* does not match *invocation*, or ``None``."""
    if not candidate.sealed:
        return "expectation was never finalized"
    if len(candidate) != len(invocation):
        return (
            f"expected {len(candidate)} operation(s), "
            f"invocation has {len(invocation)}"
        )
    for index, (expected, actual) in enumerate(
        zip(candidate, invocation, strict=True)
    ):
        if expected.name != actual.name:
            return (
                f"position {index + 1}: expected {expected.name!r}, "
                f"got {actual.name!r}"
            )
        if not parameters_match(expected, actual):
            return (
                f"position {index + 1}: expected {describe_operation(expected)}, "
                f"got {describe_operation(actual)}"
            )
    return None


def find_match(
    invocation: Chain,
    chains: t.Iterable[Chain],
    *,
    trace: TraceHook | None = None,
) -> Chain | None:
    """Return the first chain in *chains* that *invocation* satisfies.

    Chains are tried in registration order and the first match wins, even
    when a later chain would match more specifically. ``trace`` receives a
    record for every comparison when diagnostics are enabled.
    """
    for position, candidate in enumerate(chains, start=1):
        reason = explain_mismatch(candidate, invocation)
        if trace is not None:
            trace(
                "compare",
                {
                    "expectation": position,
                    "expected": describe_chain(candidate),
                    "actual": describe_chain(invocation),
                    "matched": reason is None,
                    "reason": reason,
                },
            )
        if reason is None:
            return candidate
    return None
