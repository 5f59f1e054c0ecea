"""Error type shared by the grammar, rewriter and renderers."""

from __future__ import annotations


class ConfigError(ValueError):
    pass


def _require(cond: bool, msg: str) -> None:
    if not cond:
        raise ConfigError(msg)
