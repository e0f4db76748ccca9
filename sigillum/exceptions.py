"""Custom exception types for :mod:`sigillum`."""

from __future__ import annotations


class SigillumError(Exception):
    """Base exception for all sigillum related errors."""


class DocumentLoadError(SigillumError):
    """Raised when PDF bytes cannot be loaded into an object graph."""


class DocumentStructureError(SigillumError):
    """Raised when an object of the document graph cannot be dereferenced.

    A watermark pass that fails with this error has already mutated the
    document in place; callers must discard the document.
    """


class KeyStoreError(SigillumError):
    """Raised when the key pair cannot be created, read or parsed."""


class MissingKeyError(KeyStoreError):
    """Raised when no key pair has been stored yet."""


class SigningError(SigillumError):
    """Raised when signing a PDF fails."""


class ToolRegistryError(SigillumError):
    """Raised for unknown or duplicate tool names."""


__all__ = [
    "SigillumError",
    "DocumentLoadError",
    "DocumentStructureError",
    "KeyStoreError",
    "MissingKeyError",
    "SigningError",
    "ToolRegistryError",
]
