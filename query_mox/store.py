"""Ordered storage for sealed expectation chains."""

from __future__ import annotations

import typing as t

from .errors import LifecycleError

if t.TYPE_CHECKING:
    from .chain import Chain


class ExpectationStore:
    """Sealed expectation chains in registration order.

    Each :class:`~query_mox.controller.QueryMox` owns exactly one store.
    Registration order decides which chain wins when several match.
    """

    def __init__(self) -> None:
        self._chains: list[Chain] = []

    def add(self, chain: Chain) -> None:
        """Register a sealed *chain*."""
        if not chain.sealed:
            msg = "Only sealed chains can be registered as expectations"
            raise LifecycleError(msg)
        self._chains.append(chain)

    def clear(self) -> None:
        """Forget every registered chain."""
        self._chains.clear()

    def __iter__(self) -> t.Iterator[Chain]:
        return iter(tuple(self._chains))

    def __len__(self) -> int:
        return len(self._chains)

    def __bool__(self) -> bool:
        return bool(self._chains)
