"""Global test configuration and shared fixtures."""

from __future__ import annotations

import pytest

from query_mox.config import DIAGNOSTIC_LOGGING_ENV

pytest_plugins = ("query_mox.pytest_plugin", "pytester")


@pytest.fixture(autouse=True)
def isolate_diagnostic_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's diagnostic setting from leaking into the suite."""
    monkeypatch.delenv(DIAGNOSTIC_LOGGING_ENV, raising=False)
