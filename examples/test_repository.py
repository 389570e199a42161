"""Example tests driving repository code through a query_mox double."""

from __future__ import annotations

import asyncio
import typing as t

from query_mox import Any, IsA

pytest_plugins = ("query_mox.pytest_plugin",)

if t.TYPE_CHECKING:  # pragma: no cover - typing only
    from query_mox import QueryMox


class UserRepository:
    """Code under test: talks to a Knex-style ``db`` client."""

    def __init__(self, db: t.Any) -> None:
        self.db = db

    async def find(self, user_id: int) -> dict[str, t.Any] | None:
        rows = await self.db("users").select(["id", "name"]).where("id", user_id)
        return rows[0] if rows else None

    async def rename(self, user_id: int, name: str) -> int:
        return await self.db("users").where("id", user_id).update({"name": name})

    async def count_active(self) -> int:
        result = await self.db.raw(
            "select count(*) as n from users where active = ?", True
        )
        return result["rows"][0]["n"]


def test_find_returns_first_row(query_mox: QueryMox) -> None:
    """Exact expectations resolve when the repository awaits the query."""
    query_mox.expect()("users").select(["id", "name"]).where("id", 7).finalize(
        [{"id": 7, "name": "Ada"}]
    )

    repo = UserRepository(query_mox.mock_db())

    assert asyncio.run(repo.find(7)) == {"id": 7, "name": "Ada"}
    assert asyncio.run(repo.find(8)) is None


def test_rename_accepts_any_payload(query_mox: QueryMox) -> None:
    """Comparators and wildcards loosen individual arguments."""
    query_mox.expect()("users").where("id", IsA(int)).update().finalize(1)

    repo = UserRepository(query_mox.mock_db())

    assert asyncio.run(repo.rename(3, "Grace")) == 1


def test_raw_query_with_bindings(query_mox: QueryMox) -> None:
    """Raw statements match on their text and bindings."""
    query_mox.expect().raw(
        "select count(*) as n from users where active = ?", Any()
    ).finalize({"rows": [{"n": 2}]})

    repo = UserRepository(query_mox.mock_db())

    assert asyncio.run(repo.count_active()) == 2
    assert len(query_mox.journal) == 1
