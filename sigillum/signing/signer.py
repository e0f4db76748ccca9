"""Sign and verify helpers for the :mod:`sigillum` toolkit.

Signing stamps a visible watermark carrying a SHA-256 display hash. The
stored private key is parsed to make sure one exists, but it is never used
to produce a cryptographic signature, and verification only reads the
watermark text back. Anyone can forge or strip such a watermark.
"""

from __future__ import annotations

import hashlib
import logging
from datetime import datetime, timezone
from pathlib import Path

from ..core.document import PdfDocument
from ..core.model import SignatureInfo, SignResult, VerificationResult
from ..core.utils import ensure_parent_dir
from ..exceptions import SigningError
from ..keys.store import KeyStore, load_private_key
from ..watermark.encoder import add_watermark
from ..watermark.extractor import extract_signature_info
from ..watermark.text import build_watermark_text

LOGGER = logging.getLogger("sigillum.signing")

PathLike = str | Path

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S UTC"
SIGNED_MESSAGE = "PDF has a digital signature"
UNSIGNED_MESSAGE = "PDF does not contain a digital signature"


def compute_signature_hash(pdf_data: bytes, signer: str, timestamp: str, extra: str) -> str:
    """Return ``SHA256: <hex>`` over the document bytes and the signature fields."""

    hasher = hashlib.sha256()
    hasher.update(pdf_data)
    hasher.update(signer.encode("utf-8"))
    hasher.update(timestamp.encode("utf-8"))
    hasher.update(extra.encode("utf-8"))
    return f"SHA256: {hasher.hexdigest()}"


def current_timestamp(now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)


def sign_pdf(
    pdf_data: bytes,
    signer: str,
    extra: str = "",
    *,
    key_store: KeyStore | None = None,
    timestamp: str | None = None,
) -> SignResult:
    """Watermark *pdf_data* for *signer* and return the signed bytes."""

    if not signer:
        raise SigningError("A signer name is required")

    key_store = key_store or KeyStore()
    keypair = key_store.load()
    load_private_key(keypair.private_key)

    timestamp = timestamp or current_timestamp()
    digest = compute_signature_hash(pdf_data, signer, timestamp, extra)
    watermark = build_watermark_text(signer, timestamp, extra, digest)

    document = PdfDocument.load(pdf_data)
    add_watermark(document, watermark)
    signed = document.to_bytes()

    LOGGER.info("Signed PDF for %s (%d -> %d bytes)", signer, len(pdf_data), len(signed))
    return SignResult(
        signed_pdf=signed,
        info=SignatureInfo.create(signer, timestamp, extra, digest),
    )


def verify_pdf(pdf_data: bytes) -> VerificationResult:
    """Report whether *pdf_data* carries a watermark and what it says."""

    LOGGER.info("Verifying PDF, size: %d bytes", len(pdf_data))
    info = extract_signature_info(pdf_data)
    if info is None:
        return VerificationResult(is_signed=False, info=None, message=UNSIGNED_MESSAGE)
    return VerificationResult(is_signed=True, info=info, message=SIGNED_MESSAGE)


def _read_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except FileNotFoundError as exc:
        raise SigningError(f"PDF not found: {path}") from exc
    except OSError as exc:
        raise SigningError(f"Failed to read PDF {path}: {exc}") from exc


def sign_file(
    input: PathLike,
    output: PathLike,
    signer: str,
    extra: str = "",
    *,
    key_store: KeyStore | None = None,
) -> SignResult:
    """Sign the PDF at *input* and write the result to *output*."""

    input_path = Path(input).expanduser().resolve()
    output_path = Path(output).expanduser().resolve()

    result = sign_pdf(_read_bytes(input_path), signer, extra, key_store=key_store)

    try:
        ensure_parent_dir(output_path).write_bytes(result.signed_pdf)
    except OSError as exc:
        raise SigningError(f"Failed to save PDF to {output_path}: {exc}") from exc
    return result


def verify_file(path: PathLike) -> VerificationResult:
    return verify_pdf(_read_bytes(Path(path).expanduser().resolve()))


__all__ = [
    "TIMESTAMP_FORMAT",
    "SIGNED_MESSAGE",
    "UNSIGNED_MESSAGE",
    "compute_signature_hash",
    "current_timestamp",
    "sign_pdf",
    "verify_pdf",
    "sign_file",
    "verify_file",
]
