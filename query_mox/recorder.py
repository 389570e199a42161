"""Expectation recording: build chains and register them once finalized."""

from __future__ import annotations

import typing as t

from .builder import ChainBuilder, ChainFactory

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .chain import Chain
    from .store import ExpectationStore
    from .vocabulary import Vocabulary


class ExpectationRecorder(ChainBuilder):
    """Builder for a single expectation chain.

    Example::

        mox.expect()("users").select(["id"]).where("id", 1).finalize([{"id": 1}])
    """

    def __init__(
        self, chain: Chain, vocabulary: Vocabulary, store: ExpectationStore
    ) -> None:
        super().__init__(chain, vocabulary)
        self._store = store

    def finalize(self, result: t.Any) -> None:
        """Seal the chain with *result* and register it as an expectation.

        Raises
        ------
        SealedChainError
            If the chain has already been finalized.
        EmptyChainError
            If no operation was recorded.
        """
        self._chain.seal(result)
        self._store.add(self._chain)

    def returns(self, result: t.Any) -> None:
        """Alias for :meth:`finalize`."""
        self.finalize(result)


class ExpectationFactory(ChainFactory):
    """Factory returned by :meth:`QueryMox.expect`."""

    def __init__(self, vocabulary: Vocabulary, store: ExpectationStore) -> None:
        super().__init__(vocabulary)
        self._store = store

    def __call__(self, table: str | None = None) -> ExpectationRecorder:
        """Start a new expectation, optionally seeded with *table*."""
        return t.cast("ExpectationRecorder", super().__call__(table))

    def raw(self, sql: t.Any, *bindings: t.Any) -> ExpectationRecorder:
        """Start a new expectation seeded with a raw statement."""
        return t.cast("ExpectationRecorder", super().raw(sql, *bindings))

    def _start(self, chain: Chain) -> ExpectationRecorder:
        return ExpectationRecorder(chain, self._vocabulary, self._store)
