"""Signing and verification flows exposed by :mod:`sigillum`."""

from __future__ import annotations

from .signer import (
    SIGNED_MESSAGE,
    TIMESTAMP_FORMAT,
    UNSIGNED_MESSAGE,
    compute_signature_hash,
    current_timestamp,
    sign_file,
    sign_pdf,
    verify_file,
    verify_pdf,
)

__all__ = [
    "SIGNED_MESSAGE",
    "TIMESTAMP_FORMAT",
    "UNSIGNED_MESSAGE",
    "compute_signature_hash",
    "current_timestamp",
    "sign_file",
    "sign_pdf",
    "verify_file",
    "verify_pdf",
]
