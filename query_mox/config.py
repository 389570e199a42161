"""Configuration for :class:`~query_mox.controller.QueryMox`."""

from __future__ import annotations

import dataclasses as dc
import os
import typing as t

from .errors import ConfigError

# Set to ``1``/``true``/``yes``/``on`` to enable diagnostics for every double
# created without an explicit ``diagnostic_logging`` value.
DIAGNOSTIC_LOGGING_ENV: t.Final[str] = "QUERY_MOX_DIAGNOSTIC_LOGGING"

_TRUTHY: t.Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})
_FALSY: t.Final[frozenset[str]] = frozenset({"0", "false", "no", "off", ""})


def parse_flag(raw: str, *, source: str) -> bool:
    """Interpret *raw* as an on/off flag read from *source*."""
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    msg = f"{source} must be a boolean flag, got {raw!r}"
    raise ConfigError(msg)


@dc.dataclass(frozen=True, slots=True)
class MoxConfig:
    """Options recognised by a query double.

    Attributes
    ----------
    diagnostic_logging:
        Log every invocation call and every matcher comparison, and keep the
        records on :attr:`QueryMox.trace`.
    """

    diagnostic_logging: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.diagnostic_logging, bool):
            msg = (
                "diagnostic_logging must be a bool, "
                f"got {type(self.diagnostic_logging).__name__}"
            )
            raise ConfigError(msg)

    @classmethod
    def from_mapping(cls, mapping: t.Mapping[str, t.Any]) -> MoxConfig:
        """Build a config from *mapping*, rejecting unknown keys."""
        known = {field.name for field in dc.fields(cls)}
        unknown = sorted(set(mapping) - known)
        if unknown:
            msg = f"Unknown query_mox config keys: {unknown}"
            raise ConfigError(msg)
        return cls(**mapping)

    @classmethod
    def from_env(cls, environ: t.Mapping[str, str] | None = None) -> MoxConfig:
        """Build a config from ``QUERY_MOX_*`` environment variables."""
        env = os.environ if environ is None else environ
        raw = env.get(DIAGNOSTIC_LOGGING_ENV)
        if raw is None:
            return cls()
        return cls(
            diagnostic_logging=parse_flag(raw, source=DIAGNOSTIC_LOGGING_ENV)
        )


def resolve_config(
    config: MoxConfig | t.Mapping[str, t.Any] | None,
    *,
    diagnostic_logging: bool | None = None,
) -> MoxConfig:
    """Combine *config* and keyword overrides into a :class:`MoxConfig`.

    Explicit keywords win over *config*; when neither is given the
    environment decides.
    """
    if config is None:
        base = MoxConfig.from_env()
    elif isinstance(config, MoxConfig):
        base = config
    else:
        base = MoxConfig.from_mapping(config)
    if diagnostic_logging is not None:
        base = dc.replace(base, diagnostic_logging=diagnostic_logging)
    return base
