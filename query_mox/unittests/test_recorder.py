"""Unit tests for expectation recording."""

from __future__ import annotations

import pytest

from query_mox.controller import QueryMox
from query_mox.errors import EmptyChainError, SealedChainError
from query_mox.recorder import ExpectationRecorder
from query_mox.vocabulary import RAW_SEED


def test_factory_without_table_starts_empty_chain() -> None:
    """expect()() starts a chain with no seed."""
    recorder = QueryMox().expect()()
    assert isinstance(recorder, ExpectationRecorder)
    assert len(recorder.chain) == 0


def test_factory_with_table_seeds_chain() -> None:
    """expect()("users") seeds a table operation carrying the name."""
    recorder = QueryMox().expect()("users")
    (seed,) = recorder.chain
    assert seed.name == "table"
    assert seed.args == ("users",)


def test_raw_factory_seeds_raw_operation() -> None:
    """expect().raw() seeds a raw-statement operation with text and bindings."""
    recorder = QueryMox().expect().raw("select * from users where id = ?", 1)
    (seed,) = recorder.chain
    assert seed.name == RAW_SEED
    assert seed.name != "raw"
    assert seed.args == ("select * from users where id = ?", 1)


def test_fluent_calls_append_operations_and_return_recorder() -> None:
    """Each vocabulary call appends one operation and chains fluently."""
    recorder = QueryMox().expect()("users")
    returned = recorder.select(["id"]).where_in("id", [1, 2]).orderBy("id")

    assert returned is recorder
    assert [op.name for op in recorder.chain] == [
        "table",
        "select",
        "wherein",
        "orderby",
    ]
    assert recorder.chain[2].args == ("id", [1, 2])


def test_finalize_registers_sealed_chain() -> None:
    """finalize() seals the chain and adds it to the owning store."""
    mox = QueryMox()
    recorder = mox.expect()("users").select()
    assert mox.expectations == ()

    recorder.finalize([{"id": 1}])

    assert mox.expectations == (recorder.chain,)
    assert recorder.chain.sealed
    assert recorder.chain.result == [{"id": 1}]


def test_returns_is_an_alias_for_finalize() -> None:
    """returns() behaves exactly like finalize()."""
    mox = QueryMox()
    mox.expect()("users").returns("ok")
    assert mox.expectations[0].result == "ok"


def test_append_after_finalize_fails_fast() -> None:
    """A finalized recorder cannot be extended."""
    recorder = QueryMox().expect()("users")
    recorder.finalize([])
    with pytest.raises(SealedChainError):
        recorder.select("id")


def test_finalize_twice_fails_fast() -> None:
    """Each expectation is finalized exactly once."""
    mox = QueryMox()
    recorder = mox.expect()("users")
    recorder.finalize("first")
    with pytest.raises(SealedChainError):
        recorder.finalize("second")
    assert len(mox.expectations) == 1


def test_finalize_empty_chain_fails() -> None:
    """An expectation needs at least one operation."""
    mox = QueryMox()
    with pytest.raises(EmptyChainError):
        mox.expect()().finalize([])
    assert mox.expectations == ()


def test_unknown_operation_raises_attribute_error() -> None:
    """Only vocabulary names are accepted."""
    recorder = QueryMox().expect()()
    with pytest.raises(AttributeError, match="no operation 'frobnicate'"):
        recorder.frobnicate()
    assert not hasattr(recorder, "_hidden")


def test_dir_lists_vocabulary() -> None:
    """dir() advertises vocabulary operations for completion."""
    names = dir(QueryMox().expect()())
    assert "whereIn" in names
    assert "where_in" in names
    assert "finalize" in names
