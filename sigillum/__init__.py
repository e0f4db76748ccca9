"""Visible signature watermarks for PDF documents."""

from __future__ import annotations

from pathlib import Path

from . import keys, signing, watermark
from .core.document import PdfDocument
from .core.model import (
    FieldValue,
    KeyPair,
    SignatureInfo,
    SignResult,
    VerificationResult,
)
from .exceptions import (
    DocumentLoadError,
    DocumentStructureError,
    KeyStoreError,
    MissingKeyError,
    SigillumError,
    SigningError,
    ToolRegistryError,
)
from .keys import KeyStore, generate_keypair
from .signing import compute_signature_hash, sign_file, sign_pdf, verify_file, verify_pdf
from .tools import load_builtin_plugins
from .tools.common.interfaces import ToolContext
from .tools.common.pipeline import ToolRegistry, register_tool, registry
from .watermark import add_watermark, build_watermark_text, extract_signature_info

__version__ = "0.1.0"

load_builtin_plugins()

__all__ = [
    "keys",
    "signing",
    "watermark",
    "PdfDocument",
    "FieldValue",
    "KeyPair",
    "SignatureInfo",
    "SignResult",
    "VerificationResult",
    "SigillumError",
    "DocumentLoadError",
    "DocumentStructureError",
    "KeyStoreError",
    "MissingKeyError",
    "SigningError",
    "ToolRegistryError",
    "KeyStore",
    "generate_keypair",
    "compute_signature_hash",
    "sign_pdf",
    "verify_pdf",
    "sign_file",
    "verify_file",
    "add_watermark",
    "build_watermark_text",
    "extract_signature_info",
    "ToolContext",
    "ToolRegistry",
    "registry",
    "register_tool",
    "sign_document",
    "verify_document",
]


def sign_document(
    input: str | Path,
    output: str | Path,
    name: str,
    *,
    extra: str = "",
    key_path: str | Path | None = None,
) -> SignResult:
    """Convenience wrapper around the sign plugin."""

    context = ToolContext(
        input_path=input,
        output_path=output,
        key_path=key_path,
        config={"name": name, "extra": extra},
    )
    tool = registry.create("sign", context)
    return tool.run()


def verify_document(input: str | Path) -> VerificationResult:
    """Convenience wrapper around the verify plugin."""

    context = ToolContext(input_path=input)
    tool = registry.create("verify", context)
    return tool.run()
