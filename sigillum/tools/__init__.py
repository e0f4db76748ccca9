"""Namespace for pluggable sigillum tools."""

from __future__ import annotations

from .common.pipeline import registry


def load_builtin_plugins() -> None:
    from .signer import sign  # noqa: F401  # register sign and verify tools
    from .keys import keys  # noqa: F401


__all__ = ["registry", "load_builtin_plugins"]
