"""Human readable descriptions of operations and chains."""

from __future__ import annotations

import typing as t
from textwrap import indent

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .chain import Chain, Operation


def format_args(args: t.Sequence[object], kwargs: t.Mapping[str, object]) -> str:
    """Return call-style text for *args* and *kwargs*."""
    parts = [repr(arg) for arg in args]
    parts.extend(f"{key}={value!r}" for key, value in kwargs.items())
    return ", ".join(parts)


def describe_operation(operation: Operation) -> str:
    """Return ``name(args)`` for *operation*."""
    return f"{operation.name}({format_args(operation.args, operation.kwargs)})"


def describe_chain(chain: Chain) -> str:
    """Return a dotted call chain, followed by the result when sealed."""
    if not len(chain):
        text = "(empty)"
    else:
        text = ".".join(describe_operation(op) for op in chain)
    if chain.sealed:
        text = f"{text} -> {chain.result!r}"
    return text


def numbered(entries: t.Sequence[str], *, start: int = 1) -> str:
    """Return *entries* as a numbered list, keeping continuation lines aligned."""
    if not entries:
        return "(none)"
    lines: list[str] = []
    for index, entry in enumerate(entries, start=start):
        entry_lines = entry.splitlines() or [""]
        lines.append(f"{index}. {entry_lines[0]}")
        lines.extend(f"   {extra}" for extra in entry_lines[1:])
    return "\n".join(lines)


def format_sections(title: str, sections: list[tuple[str, str]]) -> str:
    """Join *title* and non-empty labelled *sections* into one message."""
    parts = [title]
    for label, body in sections:
        if not body:
            continue
        parts.append("")
        parts.append(f"{label}:")
        parts.append(indent(body, "  "))
    return "\n".join(parts)
