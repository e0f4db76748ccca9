"""Recover watermark fields from raw PDF bytes.

The watermark text sits verbatim inside an uncompressed content stream, so
the extractor works on a lossy text decoding of the whole file instead of a
structured parse. Recovery runs in two phases over the text following the
first ``Digitally signed by`` marker:

1. :func:`scan_text_operators` walks ``(...) Tj`` show operators with a
   cursor, hopping over ``0 ... Td (`` positioning prefixes.
2. When that yields fewer than two lines, :func:`scan_physical_lines` reads
   the following physical lines and strips operator noise from them.

Whatever the phase, every line goes through :func:`clean_line` before
:func:`classify_lines` maps the line count onto the descriptor fields.
Unrecoverable fields become sentinels; nothing in here raises on bad input.
"""

from __future__ import annotations

import logging
from typing import Sequence

from ..core.model import HASH_NOT_FOUND, NO_EXTRA, FieldValue, SignatureInfo
from .text import HASH_PREFIX, SIGNATURE_MARKER

LOGGER = logging.getLogger("sigillum.watermark")

MAX_LINES = 4
STREAM_END = "endstream"

_SHOW_END = ") Tj"
_POSITION_PREFIX = "0 "
_POSITION_END = " Td ("
_FALLBACK_NOISE = (") Tj", "0 -10 Td (")
_LINE_NOISE = (") Tj", "0 -10 Td (", "0 500 Td (", "BT", "ET")


def clean_line(line: str) -> str:
    """Strip content stream operator noise from *line*.

    Removal repeats until the line is stable, which keeps the function
    idempotent even when removing one token joins the halves of another.
    """

    previous = None
    while previous != line:
        previous = line
        for token in _LINE_NOISE:
            line = line.replace(token, "")
    return line.strip()


def clean_lines(lines: Sequence[str]) -> list[str]:
    cleaned = (clean_line(line) for line in lines)
    return [line for line in cleaned if line]


def scan_text_operators(text: str) -> list[str]:
    """Collect up to ``MAX_LINES`` bodies of ``(...) Tj`` operators in *text*."""

    lines: list[str] = []
    cursor = 0
    while len(lines) < MAX_LINES:
        position = text.find(_POSITION_PREFIX, cursor)
        if position != -1:
            position_end = text.find(_POSITION_END, position)
            if position_end == -1:
                break
            cursor = position_end + len(_POSITION_END)

        open_paren = text.find("(", cursor)
        if open_paren == -1:
            break
        close = text.find(_SHOW_END, open_paren)
        if close == -1:
            break

        body = text[open_paren + 1 : close].strip()
        if body:
            lines.append(body)
        cursor = close + len(_SHOW_END)
    return lines


def scan_physical_lines(text: str) -> list[str]:
    """Read the signer up to the first line break, then up to four lines."""

    newline = text.find("\n")
    if newline == -1:
        return []

    lines: list[str] = []
    signer = text[:newline].strip()
    if signer and signer != _SHOW_END:
        lines.append(signer)

    following = text[newline + 1 :].split("\n")
    if following and following[-1] == "":
        following.pop()
    for raw in following[:MAX_LINES]:
        for token in _FALLBACK_NOISE:
            raw = raw.replace(token, "")
        raw = raw.strip()
        if raw:
            lines.append(raw)
    return lines


def _watermark_window(text: str) -> str | None:
    start = text.find(SIGNATURE_MARKER)
    if start == -1:
        return None
    window = text[start + len(SIGNATURE_MARKER) :]
    end = window.find(STREAM_END)
    return window if end == -1 else window[:end]


def parse_signature_lines(text: str) -> list[str] | None:
    """Return the cleaned watermark lines found in *text*, if any."""

    window = _watermark_window(text)
    if window is None:
        return None

    lines = scan_text_operators(window)
    if len(lines) < 2:
        LOGGER.debug("Operator scan found %d lines, reading physical lines", len(lines))
        lines = scan_physical_lines(window)

    cleaned = clean_lines(lines)
    return cleaned or None


def _strip_hash_prefix(line: str) -> str:
    while line.startswith(HASH_PREFIX):
        line = line[len(HASH_PREFIX) :]
    return line.strip()


def classify_lines(lines: Sequence[str]) -> SignatureInfo | None:
    """Map cleaned watermark lines onto a :class:`SignatureInfo`."""

    if len(lines) < 2:
        return None

    signer, timestamp = lines[0], lines[1]
    extra = FieldValue.sentinel(NO_EXTRA)
    digest = FieldValue.sentinel(HASH_NOT_FOUND)

    if len(lines) >= 3:
        third = lines[2]
        if third.startswith(HASH_PREFIX):
            digest = FieldValue(_strip_hash_prefix(third))
        else:
            extra = FieldValue(third)
            if len(lines) >= 4:
                fourth = lines[3]
                digest = FieldValue(
                    _strip_hash_prefix(fourth),
                    recovered=fourth.startswith(HASH_PREFIX),
                )

    return SignatureInfo(signer=signer, timestamp=timestamp, extra=extra, digest=digest)


def extract_signature_info(data: bytes) -> SignatureInfo | None:
    """Return the watermark descriptor embedded in *data*, or ``None``."""

    text = data.decode("utf-8", errors="replace")
    lines = parse_signature_lines(text)
    if lines is None:
        LOGGER.debug("No watermark marker or no usable lines in %d bytes", len(data))
        return None

    info = classify_lines(lines)
    if info is None:
        LOGGER.debug("Watermark yielded only %d usable line(s)", len(lines))
    return info


__all__ = [
    "MAX_LINES",
    "clean_line",
    "clean_lines",
    "scan_text_operators",
    "scan_physical_lines",
    "parse_signature_lines",
    "classify_lines",
    "extract_signature_info",
]
