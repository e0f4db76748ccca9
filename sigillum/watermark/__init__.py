"""Watermark encoder and extractor for the :mod:`sigillum` toolkit."""

from __future__ import annotations

from .encoder import add_watermark, build_content_stream, page_size, watermark_page
from .extractor import (
    classify_lines,
    clean_line,
    extract_signature_info,
    parse_signature_lines,
    scan_physical_lines,
    scan_text_operators,
)
from .text import HASH_PREFIX, SIGNATURE_MARKER, build_watermark_text

__all__ = [
    "HASH_PREFIX",
    "SIGNATURE_MARKER",
    "add_watermark",
    "build_content_stream",
    "build_watermark_text",
    "classify_lines",
    "clean_line",
    "extract_signature_info",
    "page_size",
    "parse_signature_lines",
    "scan_physical_lines",
    "scan_text_operators",
    "watermark_page",
]
