"""Pytest plugin providing the ``query_mox`` fixture."""

from __future__ import annotations

import typing as t

import pytest

from .config import parse_flag
from .controller import QueryMox
from .formatting import describe_chain, numbered


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register command-line and ini options for the plugin."""
    group = parser.getgroup("query_mox")
    group.addoption(
        "--query-mox-diagnostic-logging",
        action="store_true",
        dest="query_mox_diagnostic_logging",
        default=None,
        help=(
            "Log every call made on query_mox doubles and every expectation "
            "comparison. Overrides the pytest.ini setting."
        ),
    )
    group.addoption(
        "--no-query-mox-diagnostic-logging",
        action="store_false",
        dest="query_mox_diagnostic_logging",
        default=None,
        help="Disable query_mox diagnostics. Overrides the pytest.ini setting.",
    )
    parser.addini(
        "query_mox_diagnostic_logging",
        "Enable diagnostic logging for the query_mox fixture.",
        type="string",
        default="",
    )


def pytest_configure(config: pytest.Config) -> None:
    """Register plugin-specific markers."""
    config.addinivalue_line(
        "markers",
        (
            "query_mox(diagnostic_logging: bool = False): override diagnostic "
            "logging for the query_mox fixture in a single test."
        ),
    )


class _QueryMoxItem(t.Protocol):
    """pytest item carrying the active query_mox double."""

    _query_mox_instance: QueryMox | None


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(
    item: pytest.Item, call: pytest.CallInfo[t.Any]
) -> t.Generator[None, None, None]:
    """Attach recorded invocations to the report of a failing test."""
    del call
    outcome = yield
    rep = outcome.get_result()
    if rep.when == "call" and rep.failed:
        _append_diagnostics(item, rep)


def _append_diagnostics(item: pytest.Item, report: pytest.TestReport) -> None:
    """Add journal and trace sections for the item's double, if any."""
    mox: QueryMox | None = getattr(item, "_query_mox_instance", None)
    if mox is None:
        return
    if mox.journal:
        report.sections.append(
            (
                "query_mox invocations",
                numbered([describe_chain(chain) for chain in mox.journal]),
            )
        )
    if mox.trace:
        report.sections.append(
            (
                "query_mox trace",
                numbered([f"{rec.event}: {rec.details!r}" for rec in mox.trace]),
            )
        )


def _diagnostic_logging_enabled(request: pytest.FixtureRequest) -> bool | None:
    """Return the requested diagnostic setting, or ``None`` to defer to env."""
    # Priority order: marker > CLI option > INI setting > environment

    marker = request.node.get_closest_marker("query_mox")
    if marker is not None and "diagnostic_logging" in marker.kwargs:
        return bool(marker.kwargs["diagnostic_logging"])

    config = request.config
    cli_value = config.getoption("query_mox_diagnostic_logging")
    if cli_value is not None:
        return bool(cli_value)

    ini_value = config.getini("query_mox_diagnostic_logging")
    if ini_value:
        return parse_flag(ini_value, source="query_mox_diagnostic_logging")
    return None


@pytest.fixture
def query_mox(request: pytest.FixtureRequest) -> t.Generator[QueryMox, None, None]:
    """Provide a fresh :class:`QueryMox` for each test."""
    mox = QueryMox(diagnostic_logging=_diagnostic_logging_enabled(request))
    typed_item = t.cast("_QueryMoxItem", request.node)
    typed_item._query_mox_instance = mox
    try:
        yield mox
    finally:
        if getattr(typed_item, "_query_mox_instance", None) is mox:
            delattr(typed_item, "_query_mox_instance")
