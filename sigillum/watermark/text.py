"""Watermark text grammar shared by the encoder and the extractor.

A watermark is a block of lines::

    Digitally signed by <signer>
    <timestamp>
    <extra>                      (only when extra is non-empty)
    Hash:<digest>

The hash line is always last and always carries the ``Hash:`` prefix, which
is what tells a three line block from a four line one.
"""

from __future__ import annotations

SIGNATURE_MARKER = "Digitally signed by "
HASH_PREFIX = "Hash:"

FONT_RESOURCE = "FWM"
FONT_SIZE = 8
MARGIN_LEFT = 10.0
MARGIN_TOP = 15.0
LINE_HEIGHT = 10.0
LAST_LINE_JUMP = LINE_HEIGHT * 50
DEFAULT_PAGE_WIDTH = 612.0
DEFAULT_PAGE_HEIGHT = 792.0


def build_watermark_text(signer: str, timestamp: str, extra: str, digest: str) -> str:
    """Compose the multi-line watermark for one signature."""

    lines = [f"{SIGNATURE_MARKER}{signer}", timestamp]
    if extra:
        lines.append(extra)
    lines.append(f"{HASH_PREFIX}{digest}")
    return "\n".join(lines)


__all__ = [
    "SIGNATURE_MARKER",
    "HASH_PREFIX",
    "FONT_RESOURCE",
    "FONT_SIZE",
    "MARGIN_LEFT",
    "MARGIN_TOP",
    "LINE_HEIGHT",
    "LAST_LINE_JUMP",
    "DEFAULT_PAGE_WIDTH",
    "DEFAULT_PAGE_HEIGHT",
    "build_watermark_text",
]
