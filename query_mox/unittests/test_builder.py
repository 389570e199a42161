"""Unit tests for the shared builder and factory base classes."""

from __future__ import annotations

import pytest

from query_mox.builder import ChainFactory
from query_mox.result import Resolvable
from query_mox.vocabulary import KNEX


def test_factory_without_start_cannot_be_created() -> None:
    """Factories must say which builder wraps a new chain."""

    class Incomplete(ChainFactory):
        pass

    with pytest.raises(TypeError, match="_start"):
        Incomplete(KNEX)


def test_resolvable_without_result_cannot_be_created() -> None:
    """Resolvables must provide the single result-producing method."""

    class Incomplete(Resolvable):
        pass

    with pytest.raises(TypeError, match="result"):
        Incomplete()
