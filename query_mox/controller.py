"""QueryMox controller: owns the expectations and manufactures doubles."""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as t
from collections import deque

from .config import MoxConfig, resolve_config
from .formatting import describe_chain, format_sections, numbered
from .matcher import explain_mismatch
from .proxy import DoubleFactory, InvocationProxy
from .recorder import ExpectationFactory
from .store import ExpectationStore
from .vocabulary import KNEX

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .chain import Chain
    from .matcher import TraceHook
    from .vocabulary import Vocabulary

logger = logging.getLogger(__name__)


@dc.dataclass(frozen=True, slots=True)
class TraceRecord:
    """One diagnostic event: an invocation call or a matcher comparison."""

    event: str
    details: dict[str, t.Any]


class QueryMox:
    """Test double for a chain-built query client.

    Example::

        mox = QueryMox()
        mox.expect()("users").select(["id"]).where("id", 1).finalize([{"id": 1}])

        db = mox.mock_db()
        assert await db("users").select(["id"]).where("id", 1) == [{"id": 1}]
    """

    def __init__(
        self,
        config: MoxConfig | t.Mapping[str, t.Any] | None = None,
        *,
        diagnostic_logging: bool | None = None,
        max_journal_entries: int | None = None,
        vocabulary: Vocabulary | None = None,
    ) -> None:
        """Create a new double.

        Parameters
        ----------
        config:
            A :class:`MoxConfig` or a mapping of its fields. When omitted the
            ``QUERY_MOX_DIAGNOSTIC_LOGGING`` environment variable is consulted.
        diagnostic_logging:
            Overrides ``config.diagnostic_logging`` when given.
        max_journal_entries:
            Maximum number of invocation chains kept in :attr:`journal`.
            ``None`` keeps them all.
        vocabulary:
            Operation names accepted by the builders. Defaults to the Knex
            query builder verbs.
        """
        if max_journal_entries is not None and max_journal_entries <= 0:
            msg = "max_journal_entries must be positive"
            raise ValueError(msg)

        self._config = resolve_config(config, diagnostic_logging=diagnostic_logging)
        self._vocabulary = KNEX if vocabulary is None else vocabulary
        self._store = ExpectationStore()
        self.journal: deque[Chain] = deque(maxlen=max_journal_entries)
        self.trace: list[TraceRecord] = []

    @property
    def config(self) -> MoxConfig:
        """Return the effective configuration."""
        return self._config

    @property
    def expectations(self) -> tuple[Chain, ...]:
        """Return the registered expectation chains in registration order."""
        return tuple(self._store)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def expect(self) -> ExpectationFactory:
        """Return a factory for recording expectation chains.

        ``expect()()`` starts an unseeded chain, ``expect()("users")`` seeds it
        with the table name and ``expect().raw(sql)`` seeds it with a raw
        statement. Finish each chain with ``finalize(result)``. Operations
        recorded without arguments accept any arguments.
        """
        return ExpectationFactory(self._vocabulary, self._store)

    def mock_db(self) -> DoubleFactory:
        """Return the stand-in client to pass to the code under test."""
        return DoubleFactory(
            self._vocabulary,
            self._store,
            trace=self._trace_hook(),
            on_start=self.journal.append,
        )

    def explain(self, invocation: InvocationProxy | Chain) -> str:
        """Describe how *invocation* compares with every expectation."""
        chain = _as_chain(invocation)
        entries: list[str] = []
        winner: int | None = None
        for index, candidate in enumerate(self._store, start=1):
            reason = explain_mismatch(candidate, chain)
            if reason is None and winner is None:
                winner = index
            entries.append(f"{describe_chain(candidate)}\n{reason or 'match'}")
        title = (
            "No expectation matched."
            if winner is None
            else f"Expectation {winner} matched."
        )
        return format_sections(
            title,
            [
                ("Invocation", describe_chain(chain)),
                ("Expectations", numbered(entries)),
            ],
        )

    def reset(self) -> None:
        """Discard expectations, journal entries and trace records."""
        self._store.clear()
        self.journal.clear()
        self.trace.clear()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _trace_hook(self) -> TraceHook | None:
        if not self._config.diagnostic_logging:
            return None
        return self._record_trace

    def _record_trace(self, event: str, details: dict[str, t.Any]) -> None:
        """Log *details* and keep them on :attr:`trace`."""
        if event == "call":
            logger.info(
                "%s input args=%r kwargs=%r",
                details["operation"],
                details["args"],
                details["kwargs"],
            )
        else:
            logger.info(
                "find result: expectation %d %s VS %s -> %s",
                details["expectation"],
                details["expected"],
                details["actual"],
                "match" if details["matched"] else details["reason"],
            )
        self.trace.append(TraceRecord(event, details))


def _as_chain(invocation: InvocationProxy | Chain) -> Chain:
    if isinstance(invocation, InvocationProxy):
        return invocation.chain
    return invocation
