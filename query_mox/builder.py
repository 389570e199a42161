"""Fluent chain builders shared by expectations and invocations."""

from __future__ import annotations

import abc
import typing as t

from .chain import Chain, Operation
from .formatting import describe_chain
from .vocabulary import RAW_SEED, TABLE_SEED

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .vocabulary import Vocabulary


class ChainBuilder:
    """Append one :class:`Operation` per vocabulary call and return ``self``.

    Attribute lookup is resolved against the builder's vocabulary, so
    ``builder.whereIn("id", [1, 2])`` and ``builder.where_in("id", [1, 2])``
    both append ``Operation("wherein", ("id", [1, 2]))``.
    """

    def __init__(self, chain: Chain, vocabulary: Vocabulary) -> None:
        self._chain = chain
        self._vocabulary = vocabulary

    @property
    def chain(self) -> Chain:
        """Return the chain this builder appends to."""
        return self._chain

    def _apply(
        self, name: str, args: tuple[t.Any, ...], kwargs: dict[str, t.Any]
    ) -> t.Self:
        self._chain.append(Operation(name, args, kwargs))
        return self

    def __getattr__(self, attribute: str) -> t.Callable[..., t.Self]:
        if attribute.startswith("_"):
            raise AttributeError(attribute)
        name = self._vocabulary.lookup(attribute)
        if name is None:
            msg = f"{type(self).__name__!r} has no operation {attribute!r}"
            raise AttributeError(msg)

        def operation(*args: t.Any, **kwargs: t.Any) -> t.Self:
            return self._apply(name, args, kwargs)

        operation.__name__ = attribute
        return operation

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | set(self._vocabulary.operations))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({describe_chain(self._chain)})"


class ChainFactory(abc.ABC):
    """Callable starting a fresh chain per call.

    ``factory()`` starts an empty chain, ``factory("users")`` seeds it with a
    ``table`` operation and ``factory.raw(sql, *bindings)`` seeds it with a
    ``raw`` operation.
    """

    def __init__(self, vocabulary: Vocabulary) -> None:
        self._vocabulary = vocabulary

    def __call__(self, table: str | None = None) -> ChainBuilder:
        """Start a chain, optionally seeded with *table*."""
        seed = None if table is None else Operation(TABLE_SEED, (table,))
        return self._start(Chain(seed))

    def raw(self, sql: t.Any, *bindings: t.Any) -> ChainBuilder:
        """Start a chain seeded with a raw statement."""
        return self._start(Chain(Operation(RAW_SEED, (sql, *bindings))))

    @abc.abstractmethod
    def _start(self, chain: Chain) -> ChainBuilder:
        """Wrap *chain* in the builder this factory hands out."""
