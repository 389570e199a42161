"""Exception hierarchy for query-mox."""

from __future__ import annotations


class QueryMoxError(Exception):
    """Base class for all query-mox errors."""


class LifecycleError(QueryMoxError):
    """Raised when a chain or store is used outside its lifecycle."""


class SealedChainError(LifecycleError):
    """Raised when a sealed expectation chain is extended or sealed again."""


class EmptyChainError(LifecycleError):
    """Raised when an expectation chain is finalized without any operations."""


class ConfigError(QueryMoxError, ValueError):
    """Raised for unknown or malformed configuration values."""


__all__ = [
    "ConfigError",
    "EmptyChainError",
    "LifecycleError",
    "QueryMoxError",
    "SealedChainError",
]
