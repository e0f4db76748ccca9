"""Key pair management for :mod:`sigillum`."""

from __future__ import annotations

from .store import KEY_SIZE, KeyStore, generate_keypair, load_private_key, load_public_key

__all__ = [
    "KEY_SIZE",
    "KeyStore",
    "generate_keypair",
    "load_private_key",
    "load_public_key",
]
