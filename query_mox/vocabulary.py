"""Operation vocabulary for chain-built query doubles.

The verbs mirror the Knex query builder. Each verb is recorded under a
lowercase identifier, and the builders accept it under three attribute
spellings: the Knex camelCase name (``whereIn``), its snake_case form
(``where_in``) and, for Python keywords, a trailing-underscore form
(``as_``).
"""

from __future__ import annotations

import dataclasses as dc
import keyword
import re
import types
import typing as t

# Seed operations created by ``factory("table")`` and ``factory.raw(text)``.
# The raw seed is not a valid identifier, so no vocabulary verb can produce it.
TABLE_SEED: t.Final[str] = "table"
RAW_SEED: t.Final[str] = "raw-statement"

KNEX_VERBS: t.Final[tuple[str, ...]] = (
    "column",
    "columns",
    "comment",
    "hintComment",
    "from",
    "fromRaw",
    "into",
    "table",
    "join",
    "joinRaw",
    "innerJoin",
    "leftJoin",
    "leftOuterJoin",
    "rightJoin",
    "rightOuterJoin",
    "outerJoin",
    "fullOuterJoin",
    "crossJoin",
    "using",
    "select",
    "distinct",
    "distinctOn",
    "jsonExtract",
    "jsonInsert",
    "jsonRemove",
    "jsonSet",
    "as",
    "where",
    "andWhere",
    "orWhere",
    "whereNot",
    "andWhereNot",
    "orWhereNot",
    "whereIn",
    "whereNotIn",
    "orWhereIn",
    "orWhereNotIn",
    "whereNull",
    "whereNotNull",
    "orWhereNotNull",
    "whereRaw",
    "andWhereRaw",
    "orWhereRaw",
    "whereWrapped",
    "havingWrapped",
    "whereJsonObject",
    "orWhereJsonObject",
    "andWhereJsonObject",
    "whereNotJsonObject",
    "orWhereNotJsonObject",
    "andWhereNotJsonObject",
    "whereJsonPath",
    "orWhereJsonPath",
    "andWhereJsonPath",
    "whereJsonSupersetOf",
    "orWhereJsonSupersetOf",
    "andWhereJsonSupersetOf",
    "whereJsonNotSupersetOf",
    "orWhereJsonNotSupersetOf",
    "andWhereJsonNotSupersetOf",
    "whereJsonSubsetOf",
    "orWhereJsonSubsetOf",
    "andWhereJsonSubsetOf",
    "whereJsonNotSubsetOf",
    "orWhereJsonNotSubsetOf",
    "andWhereJsonNotSubsetOf",
    "whereLike",
    "andWhereLike",
    "orWhereLike",
    "whereILike",
    "andWhereILike",
    "orWhereILike",
    "whereBetween",
    "andWhereBetween",
    "orWhereBetween",
    "whereNotBetween",
    "andWhereNotBetween",
    "orWhereNotBetween",
    "whereExists",
    "orWhereExists",
    "whereNotExists",
    "orWhereNotExists",
    "groupBy",
    "groupByRaw",
    "orderBy",
    "orderByRaw",
    "partitionBy",
    "union",
    "unionAll",
    "intersect",
    "except",
    "having",
    "andHaving",
    "orHaving",
    "havingRaw",
    "orHavingRaw",
    "havingIn",
    "havingNotIn",
    "andHavingNotIn",
    "orHavingNotIn",
    "havingBetween",
    "orHavingBetween",
    "havingNotBetween",
    "orHavingNotBetween",
    "havingNull",
    "havingNotNull",
    "clearSelect",
    "clearWhere",
    "clearGroup",
    "clearOrder",
    "clearHaving",
    "clearCounters",
    "clear",
    "offset",
    "limit",
    "count",
    "countDistinct",
    "min",
    "max",
    "sumDistinct",
    "avg",
    "avgDistinct",
    "insert",
    "upsert",
    "update",
    "updateFrom",
    "modify",
    "returning",
    "onConflict",
    "increment",
    "decrement",
    "del",
    "delete",
    "truncate",
    "rank",
    "denseRank",
    "rowNumber",
    "first",
    "pluck",
    "with",
    "withMaterialized",
    "withNotMaterialized",
    "withRaw",
    "withRecursive",
    "withSchema",
    "withWrapped",
    "raw",
    "rows",
    "query",
)

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z])(?=[A-Z])")


def snake_case(verb: str) -> str:
    """Return the snake_case spelling of a camelCase *verb*."""
    return _CAMEL_BOUNDARY.sub("_", verb).lower()


def identifier(verb: str) -> str:
    """Return the identifier recorded for *verb* (``whereIn`` -> ``wherein``)."""
    return verb.lower()


def _spellings(verb: str) -> set[str]:
    names = {verb, snake_case(verb)}
    names.update(f"{name}_" for name in list(names) if keyword.iskeyword(name))
    return names


@dc.dataclass(frozen=True, slots=True)
class Vocabulary:
    """Closed mapping of builder attribute names to operation identifiers."""

    operations: t.Mapping[str, str]

    @classmethod
    def from_verbs(cls, verbs: t.Iterable[str]) -> Vocabulary:
        """Build a vocabulary accepting every spelling of each verb in *verbs*."""
        operations: dict[str, str] = {}
        for verb in verbs:
            if not verb.isidentifier() or verb.startswith("_"):
                msg = f"invalid operation verb: {verb!r}"
                raise ValueError(msg)
            for name in _spellings(verb):
                operations[name] = identifier(verb)
        return cls(operations=types.MappingProxyType(operations))

    def lookup(self, attribute: str) -> str | None:
        """Return the identifier for *attribute*, or ``None`` if unsupported."""
        return self.operations.get(attribute)

    def __contains__(self, attribute: object) -> bool:
        return attribute in self.operations

    @property
    def identifiers(self) -> frozenset[str]:
        """Return every operation identifier in this vocabulary."""
        return frozenset(self.operations.values())


KNEX: t.Final[Vocabulary] = Vocabulary.from_verbs(KNEX_VERBS)

__all__ = [
    "KNEX",
    "KNEX_VERBS",
    "RAW_SEED",
    "TABLE_SEED",
    "Vocabulary",
    "identifier",
    "snake_case",
]
