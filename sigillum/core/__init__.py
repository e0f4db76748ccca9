"""Shared building blocks for sigillum."""

from __future__ import annotations

from .document import ObjectId, PdfDocument
from .model import FieldValue, KeyPair, SignatureInfo, SignResult, VerificationResult

__all__ = [
    "ObjectId",
    "PdfDocument",
    "FieldValue",
    "KeyPair",
    "SignatureInfo",
    "SignResult",
    "VerificationResult",
]
