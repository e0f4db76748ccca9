from __future__ import annotations

from io import BytesIO

import pytest
from pypdf import PdfReader, PdfWriter
from pypdf.generic import ArrayObject, DictionaryObject, NameObject, NumberObject

from sigillum.core.document import PdfDocument
from sigillum.exceptions import DocumentLoadError, DocumentStructureError


def _writer_with_pages(count: int) -> PdfWriter:
    writer = PdfWriter()
    for _ in range(count):
        writer.add_blank_page(width=200, height=300)
    return writer


def test_load_reads_pages_in_order(multipage_pdf_bytes: bytes) -> None:
    document = PdfDocument.load(multipage_pdf_bytes)

    ids = document.page_ids()
    assert len(ids) == 3
    assert len(set(ids)) == 3
    for page_id in ids:
        assert document.get_object(page_id)["/Type"] == "/Page"


def test_load_rejects_garbage() -> None:
    with pytest.raises(DocumentLoadError):
        PdfDocument.load(b"this is not a pdf")


def test_load_rejects_password_protected_file(pdf_bytes: bytes) -> None:
    writer = PdfWriter(clone_from=PdfReader(BytesIO(pdf_bytes)))
    writer.encrypt("secret")
    buffer = BytesIO()
    writer.write(buffer)

    with pytest.raises(DocumentLoadError):
        PdfDocument.load(buffer.getvalue())


def test_round_trip_keeps_page_count(multipage_pdf_bytes: bytes) -> None:
    document = PdfDocument.load(multipage_pdf_bytes)
    reloaded = PdfDocument.load(document.to_bytes())
    assert len(reloaded.page_ids()) == 3


def test_add_object_grows_the_table() -> None:
    document = PdfDocument.from_writer(_writer_with_pages(1))
    before = document.object_count

    obj_id = document.add_object(DictionaryObject({NameObject("/Kind"): NameObject("/Test")}))

    assert document.object_count == before + 1
    assert document.get_object(obj_id)["/Kind"] == "/Test"
    assert document.resolve(document.reference(obj_id)) is document.get_object(obj_id)


@pytest.mark.parametrize("obj_id", [(0, 0), (-3, 0), (9999, 0)])
def test_get_object_rejects_unknown_ids(obj_id: tuple[int, int]) -> None:
    document = PdfDocument.from_writer(_writer_with_pages(1))
    with pytest.raises(DocumentStructureError):
        document.get_object(obj_id)


def test_entry_returns_none_for_missing_key() -> None:
    document = PdfDocument.from_writer(_writer_with_pages(1))
    page = document.get_object(document.page_ids()[0])
    assert document.entry(page, "/Nope") is None


def test_inherited_attribute_prefers_page_value() -> None:
    document = PdfDocument.from_writer(_writer_with_pages(1))
    page_id = document.page_ids()[0]

    media_box = document.inherited_attribute(page_id, "/MediaBox")
    assert [float(value) for value in media_box] == [0, 0, 200, 300]


def test_inherited_attribute_walks_to_parent() -> None:
    writer = _writer_with_pages(1)
    document = PdfDocument.from_writer(writer)
    page_id = document.page_ids()[0]
    page = document.get_object(page_id)
    del page["/MediaBox"]

    parent = document.get_object((page.raw_get("/Parent").idnum, 0))
    parent[NameObject("/MediaBox")] = ArrayObject(
        [NumberObject(0), NumberObject(0), NumberObject(400), NumberObject(500)]
    )

    media_box = document.inherited_attribute(page_id, "/MediaBox")
    assert [int(value) for value in media_box] == [0, 0, 400, 500]


def test_inherited_attribute_returns_none_when_absent() -> None:
    document = PdfDocument.from_writer(_writer_with_pages(1))
    assert document.inherited_attribute(document.page_ids()[0], "/Rotate") is None


def test_inherited_attribute_stops_on_cycle() -> None:
    document = PdfDocument.from_writer(_writer_with_pages(1))
    page_id = document.page_ids()[0]
    page = document.get_object(page_id)
    page[NameObject("/Parent")] = document.reference(page_id)

    assert document.inherited_attribute(page_id, "/Missing") is None
