"""Test doubles for fluent, chain-built query clients.

Register the call chains the code under test is expected to build, hand it
the double from :meth:`QueryMox.mock_db`, and every chain it builds resolves
to the registered result (or ``[]``) whether it is awaited or resolved
synchronously.
"""

from __future__ import annotations

from .chain import Chain, Operation
from .comparators import Any, Comparator, Contains, IsA, Predicate, Regex, StartsWith
from .config import DIAGNOSTIC_LOGGING_ENV, MoxConfig
from .controller import QueryMox, TraceRecord
from .errors import (
    ConfigError,
    EmptyChainError,
    LifecycleError,
    QueryMoxError,
    SealedChainError,
)
from .matcher import explain_mismatch, find_match
from .proxy import DoubleFactory, InvocationProxy
from .recorder import ExpectationFactory, ExpectationRecorder
from .result import ResolvedResult
from .store import ExpectationStore
from .vocabulary import KNEX, RAW_SEED, TABLE_SEED, Vocabulary

__all__ = [
    "DIAGNOSTIC_LOGGING_ENV",
    "KNEX",
    "RAW_SEED",
    "TABLE_SEED",
    "Any",
    "Chain",
    "Comparator",
    "ConfigError",
    "Contains",
    "DoubleFactory",
    "EmptyChainError",
    "ExpectationFactory",
    "ExpectationRecorder",
    "ExpectationStore",
    "InvocationProxy",
    "IsA",
    "LifecycleError",
    "MoxConfig",
    "Operation",
    "Predicate",
    "QueryMox",
    "QueryMoxError",
    "Regex",
    "ResolvedResult",
    "SealedChainError",
    "StartsWith",
    "TraceRecord",
    "Vocabulary",
    "explain_mismatch",
    "find_match",
]
