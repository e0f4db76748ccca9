"""Embed the signature watermark into every page of a document."""

from __future__ import annotations

import logging

from pypdf.generic import (
    ArrayObject,
    DecodedStreamObject,
    DictionaryObject,
    IndirectObject,
    NameObject,
    NullObject,
    StreamObject,
)

from ..core.document import ObjectId, PdfDocument
from .text import (
    DEFAULT_PAGE_HEIGHT,
    DEFAULT_PAGE_WIDTH,
    FONT_RESOURCE,
    FONT_SIZE,
    LAST_LINE_JUMP,
    LINE_HEIGHT,
    MARGIN_LEFT,
    MARGIN_TOP,
)

LOGGER = logging.getLogger("sigillum.watermark")


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.4f}".rstrip("0").rstrip(".")


def _as_number(value: object) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def page_size(document: PdfDocument, page_id: ObjectId) -> tuple[float, float]:
    """Return ``(width, height)`` from the page's effective ``/MediaBox``.

    Missing, short or non-numeric boxes fall back to US Letter.
    """

    media_box = document.inherited_attribute(page_id, "/MediaBox")
    if not isinstance(media_box, ArrayObject) or len(media_box) < 4:
        LOGGER.debug("Page %d %d R has no usable /MediaBox, assuming Letter", *page_id)
        return DEFAULT_PAGE_WIDTH, DEFAULT_PAGE_HEIGHT

    width = _as_number(document.resolve(media_box[2]))
    height = _as_number(document.resolve(media_box[3]))
    return (
        DEFAULT_PAGE_WIDTH if width is None else width,
        DEFAULT_PAGE_HEIGHT if height is None else height,
    )


def build_content_stream(text: str, height: float) -> bytes:
    """Return the content stream program that draws *text* near the top edge.

    The first line is placed absolutely, following lines step down by
    ``LINE_HEIGHT`` and the final line jumps up by ``LAST_LINE_JUMP``.
    """

    lines = text.split("\n")
    y = height - MARGIN_TOP
    operators = [
        "q",
        "BT",
        f"/{FONT_RESOURCE} {FONT_SIZE} Tf",
        f"{_format_number(MARGIN_LEFT)} {_format_number(y)} Td ({lines[0]}) Tj",
    ]
    last = len(lines) - 1
    for index, line in enumerate(lines[1:], start=1):
        step = LAST_LINE_JUMP if index == last else -LINE_HEIGHT
        operators.append(f"0 {_format_number(step)} Td ({line}) Tj")
    operators.extend(["ET", "Q"])
    return "\n".join(operators).encode("utf-8")


def _font_dictionary() -> DictionaryObject:
    return DictionaryObject(
        {
            NameObject("/Type"): NameObject("/Font"),
            NameObject("/Subtype"): NameObject("/Type1"),
            NameObject("/BaseFont"): NameObject("/Helvetica"),
            NameObject("/Name"): NameObject(f"/{FONT_RESOURCE}"),
        }
    )


def _copy_dictionary(source: DictionaryObject) -> DictionaryObject:
    copy = DictionaryObject()
    for key in list(source.keys()):
        copy[NameObject(key)] = source.raw_get(key)
    return copy


def _append_contents(document: PdfDocument, page: DictionaryObject, stream_ref: IndirectObject) -> None:
    existing = page.raw_get("/Contents") if "/Contents" in page else None
    resolved = document.resolve(existing)

    if isinstance(resolved, ArrayObject):
        contents = ArrayObject(list(resolved))
        contents.append(stream_ref)
    elif existing is None or isinstance(resolved, NullObject):
        contents = ArrayObject([stream_ref])
    else:
        if isinstance(existing, StreamObject):
            existing = document.reference(document.add_object(existing))
        contents = ArrayObject([existing, stream_ref])

    page[NameObject("/Contents")] = contents


def _attach_font(
    document: PdfDocument,
    page_id: ObjectId,
    page: DictionaryObject,
    font_ref: IndirectObject,
) -> None:
    resources = document.entry(page, "/Resources")
    if not isinstance(resources, DictionaryObject):
        inherited = document.inherited_attribute(page_id, "/Resources")
        resources = (
            _copy_dictionary(inherited)
            if isinstance(inherited, DictionaryObject)
            else DictionaryObject()
        )
        page[NameObject("/Resources")] = resources

    fonts = document.entry(resources, "/Font")
    fonts = _copy_dictionary(fonts) if isinstance(fonts, DictionaryObject) else DictionaryObject()
    fonts[NameObject(f"/{FONT_RESOURCE}")] = font_ref
    resources[NameObject("/Font")] = fonts


def watermark_page(
    document: PdfDocument,
    page_id: ObjectId,
    text: str,
    font_ref: IndirectObject,
) -> ObjectId | None:
    """Draw *text* on one page and return the id of the new content stream.

    Returns ``None`` when the page id resolves to something other than a
    dictionary; the page is then left untouched.
    """

    page = document.get_object(page_id)
    if not isinstance(page, DictionaryObject):
        LOGGER.warning("Object %d %d R is not a page dictionary, skipping", *page_id)
        return None

    _width, height = page_size(document, page_id)

    stream = DecodedStreamObject()
    stream.set_data(build_content_stream(text, height))
    stream_id = document.add_object(stream)

    page = document.get_object(page_id)
    _append_contents(document, page, document.reference(stream_id))
    _attach_font(document, page_id, page, font_ref)
    LOGGER.debug("Watermarked page %d %d R with stream %d %d R", *page_id, *stream_id)
    return stream_id


def add_watermark(document: PdfDocument, text: str) -> PdfDocument:
    """Embed *text* on every page of *document* and return it.

    The document is mutated in place. ``DocumentStructureError`` aborts the
    pass when a page cannot be dereferenced; pages already processed keep
    their watermark, so the document must be discarded in that case.
    """

    page_ids = document.page_ids()
    font_ref = document.reference(document.add_object(_font_dictionary()))

    for page_id in page_ids:
        watermark_page(document, page_id, text, font_ref)

    LOGGER.info("Watermarked %d pages", len(page_ids))
    return document


__all__ = [
    "add_watermark",
    "watermark_page",
    "build_content_stream",
    "page_size",
]
