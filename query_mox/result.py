"""Resolution outcome shared by the synchronous and awaitable access paths."""

from __future__ import annotations

import abc
import dataclasses as dc
import typing as t

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .chain import Chain


@dc.dataclass(frozen=True, slots=True)
class ResolvedResult:
    """Outcome of matching one invocation against an expectation store."""

    chain: Chain | None

    @property
    def matched(self) -> bool:
        """Return ``True`` when an expectation matched."""
        return self.chain is not None

    @property
    def value(self) -> t.Any:
        """Return the matched result, or an empty list when nothing matched."""
        if self.chain is None:
            return []
        return self.chain.result


class Resolvable(abc.ABC):
    """Mixin exposing :meth:`result` through ``value``, ``resolve`` and ``await``.

    Subclasses implement :meth:`result`; every access path goes through it so
    the synchronous and awaited values cannot diverge.
    """

    __slots__ = ()

    @abc.abstractmethod
    def result(self) -> ResolvedResult:
        """Run the matcher and return its outcome."""

    def resolve(self) -> t.Any:
        """Return the resolved value synchronously."""
        return self.result().value

    @property
    def value(self) -> t.Any:
        """Alias for :meth:`resolve`."""
        return self.resolve()

    async def _resolve_async(self) -> t.Any:
        return self.resolve()

    def __await__(self) -> t.Generator[t.Any, None, t.Any]:
        return self._resolve_async().__await__()
