"""Operations and the chains that order them."""

from __future__ import annotations

import dataclasses as dc
import typing as t

from .errors import EmptyChainError, LifecycleError, SealedChainError


@dc.dataclass(slots=True)
class Operation:
    """A single named call in a chain together with its arguments.

    ``result`` is only meaningful on the terminal operation of a sealed
    chain, where ``has_result`` is ``True``.
    """

    name: str
    args: tuple[t.Any, ...] = ()
    kwargs: dict[str, t.Any] = dc.field(default_factory=dict)
    result: t.Any = None
    has_result: bool = False

    @property
    def is_wildcard(self) -> bool:
        """Return ``True`` when this operation accepts any parameters.

        That is the case when nothing was recorded, or when the only argument
        is an empty list or tuple, as in ``select([])``.
        """
        if self.kwargs:
            return False
        if not self.args:
            return True
        return (
            len(self.args) == 1
            and isinstance(self.args[0], list | tuple)
            and not self.args[0]
        )


class Chain:
    """Ordered sequence of :class:`Operation` objects.

    A chain starts out *building* and becomes *sealed* once :meth:`seal`
    attaches a result to its last operation. Sealed chains are immutable.
    """

    __slots__ = ("_operations", "_sealed")

    def __init__(self, seed: Operation | None = None) -> None:
        self._operations: list[Operation] = [] if seed is None else [seed]
        self._sealed = False

    @property
    def operations(self) -> tuple[Operation, ...]:
        """Return the recorded operations in call order."""
        return tuple(self._operations)

    @property
    def sealed(self) -> bool:
        """Return ``True`` once a result has been attached."""
        return self._sealed

    @property
    def result(self) -> t.Any:
        """Return the terminal result of a sealed chain."""
        if not self._sealed:
            msg = "Chain has not been sealed; it carries no result"
            raise LifecycleError(msg)
        return self._operations[-1].result

    def __len__(self) -> int:
        return len(self._operations)

    def __iter__(self) -> t.Iterator[Operation]:
        return iter(self._operations)

    def __getitem__(self, index: int) -> Operation:
        return self._operations[index]

    def __repr__(self) -> str:
        state = "sealed" if self._sealed else "building"
        names = ", ".join(op.name for op in self._operations)
        return f"Chain([{names}], {state})"

    def append(self, operation: Operation) -> None:
        """Append *operation*; sealed chains reject further operations."""
        if self._sealed:
            msg = (
                f"Cannot append {operation.name!r}: chain is already sealed; "
                "start a new expectation instead"
            )
            raise SealedChainError(msg)
        self._operations.append(operation)

    def seal(self, result: t.Any) -> None:
        """Attach *result* to the last operation and freeze the chain."""
        if self._sealed:
            msg = "Chain has already been finalized"
            raise SealedChainError(msg)
        if not self._operations:
            msg = "Cannot finalize an empty chain; record at least one operation"
            raise EmptyChainError(msg)
        last = self._operations[-1]
        last.result = result
        last.has_result = True
        self._sealed = True
