"""Invocation proxies handed to the code under test."""

from __future__ import annotations

import typing as t

from .builder import ChainBuilder, ChainFactory
from .matcher import find_match
from .result import Resolvable, ResolvedResult

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .chain import Chain
    from .matcher import TraceHook
    from .store import ExpectationStore
    from .vocabulary import Vocabulary


class InvocationProxy(ChainBuilder, Resolvable):
    """Record calls made by the code under test and resolve them on demand.

    Any sequence of vocabulary calls is accepted. The recorded chain is
    matched against the store each time the proxy is resolved, either via
    :meth:`resolve` / ``value`` or by awaiting it.
    """

    def __init__(
        self,
        chain: Chain,
        vocabulary: Vocabulary,
        store: ExpectationStore,
        *,
        trace: TraceHook | None = None,
    ) -> None:
        super().__init__(chain, vocabulary)
        self._store = store
        self._trace = trace

    def _apply(
        self, name: str, args: tuple[t.Any, ...], kwargs: dict[str, t.Any]
    ) -> t.Self:
        if self._trace is not None:
            self._trace("call", {"operation": name, "args": args, "kwargs": kwargs})
        return super()._apply(name, args, kwargs)

    def result(self) -> ResolvedResult:
        """Match the recorded chain and return the outcome."""
        return ResolvedResult(find_match(self._chain, self._store, trace=self._trace))


class DoubleFactory(ChainFactory):
    """Factory returned by :meth:`QueryMox.mock_db`; stands in for the client."""

    def __init__(
        self,
        vocabulary: Vocabulary,
        store: ExpectationStore,
        *,
        trace: TraceHook | None = None,
        on_start: t.Callable[[Chain], None] | None = None,
    ) -> None:
        super().__init__(vocabulary)
        self._store = store
        self._trace = trace
        self._on_start = on_start

    def __call__(self, table: str | None = None) -> InvocationProxy:
        """Start a new invocation, optionally seeded with *table*."""
        return t.cast("InvocationProxy", super().__call__(table))

    def raw(self, sql: t.Any, *bindings: t.Any) -> InvocationProxy:
        """Start a new invocation seeded with a raw statement."""
        return t.cast("InvocationProxy", super().raw(sql, *bindings))

    def _start(self, chain: Chain) -> InvocationProxy:
        if self._on_start is not None:
            self._on_start(chain)
        if self._trace is not None:
            for operation in chain:
                self._trace(
                    "call",
                    {
                        "operation": operation.name,
                        "args": operation.args,
                        "kwargs": operation.kwargs,
                    },
                )
        return InvocationProxy(chain, self._vocabulary, self._store, trace=self._trace)
