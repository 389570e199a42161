"""Comparator classes and deep equality used for parameter matching.

A comparator placed anywhere inside an expectation's arguments is applied to
the value found at the same position in the invocation, so
``select(Any())`` or ``where("id", IsA(int))`` loosen a single slot without
turning the whole operation into a wildcard.
"""

from __future__ import annotations

import collections.abc as cabc
import math
import re
import typing as t


class Comparator:
    """Callable returning ``True`` when a value matches."""

    def __call__(self, value: object) -> bool:
        """Return ``True`` if *value* satisfies the comparison."""
        raise NotImplementedError


class Any(Comparator):
    """Match any value."""

    def __call__(self, value: object) -> bool:
        """Return ``True`` for any input."""
        return True

    def __repr__(self) -> str:
        """Return a debug representation."""
        return "Any()"


class IsA(Comparator):
    """Match values that are instances of ``typ``."""

    def __init__(self, typ: type | tuple[type, ...]) -> None:
        self.typ = typ

    def __call__(self, value: object) -> bool:
        """Return ``True`` when ``value`` is an instance of ``typ``."""
        return isinstance(value, self.typ)

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"IsA(typ={self.typ!r})"


class Regex(Comparator):
    """Match if a string *value* matches ``pattern``."""

    def __init__(self, pattern: str) -> None:
        self._pattern = re.compile(pattern)

    def __call__(self, value: object) -> bool:
        """Return ``True`` if the regex matches *value*."""
        if not isinstance(value, str):
            return False
        return bool(self._pattern.search(value))

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"Regex(pattern={self._pattern.pattern!r})"


class Contains(Comparator):
    """Match if ``item`` is found in *value*."""

    def __init__(self, item: object) -> None:
        self.item = item

    def __call__(self, value: object) -> bool:
        """Return ``True`` if ``item`` is in *value*."""
        if not isinstance(value, cabc.Container):
            return False
        try:
            return self.item in value
        except TypeError:
            # unhashable item tested against a set or mapping
            return False

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"Contains(item={self.item!r})"


class StartsWith(Comparator):
    """Match if a string *value* begins with ``prefix``."""

    def __init__(self, prefix: str) -> None:
        self.prefix = prefix

    def __call__(self, value: object) -> bool:
        """Return ``True`` if *value* starts with ``prefix``."""
        return isinstance(value, str) and value.startswith(self.prefix)

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"StartsWith(prefix={self.prefix!r})"


class Predicate(Comparator):
    """Use a custom ``func`` to determine a match."""

    def __init__(self, func: t.Callable[[t.Any], object]) -> None:
        self.func = func

    def __call__(self, value: object) -> bool:
        """Return ``True`` if ``func(value)`` is truthy."""
        return bool(self.func(value))

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"Predicate(func={self.func!r})"


def _is_sequence(value: object) -> bool:
    return isinstance(value, cabc.Sequence) and not isinstance(
        value, str | bytes | bytearray
    )


def _is_nan(value: object) -> bool:
    return isinstance(value, float) and math.isnan(value)


def deep_equal(expected: object, actual: object) -> bool:
    """Return ``True`` if *actual* structurally equals *expected*.

    Sequences are compared element by element, in order, regardless of
    whether they are lists or tuples. Mappings are compared key by key.
    Comparators in *expected* are called with the matching *actual* value.
    Booleans never equal numbers, and ``NaN`` equals ``NaN``.
    """
    if isinstance(expected, Comparator):
        return expected(actual)
    if isinstance(expected, cabc.Mapping):
        if not isinstance(actual, cabc.Mapping) or expected.keys() != actual.keys():
            return False
        return all(deep_equal(expected[key], actual[key]) for key in expected)
    if _is_sequence(expected):
        if not _is_sequence(actual) or len(expected) != len(actual):  # type: ignore[arg-type]
            return False
        return all(
            deep_equal(exp, act)
            for exp, act in zip(expected, actual, strict=True)  # type: ignore[call-overload]
        )
    if isinstance(expected, bool) is not isinstance(actual, bool):
        return False
    if _is_nan(expected) and _is_nan(actual):
        return True
    return expected == actual


__all__ = [
    "Any",
    "Comparator",
    "Contains",
    "IsA",
    "Predicate",
    "Regex",
    "StartsWith",
    "deep_equal",
]
