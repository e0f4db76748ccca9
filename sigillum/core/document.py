"""Arena view over the object table of a PDF document.

:class:`PdfDocument` owns a :class:`pypdf.PdfWriter` holding a clone of the
loaded file and exposes the object graph through explicit id based
operations. Callers resolve pages and resources through
:meth:`PdfDocument.get_object` on every access instead of keeping live
aliases to objects across a mutation.
"""

from __future__ import annotations

import io
import logging
from typing import Any

from pypdf import PdfReader, PdfWriter
from pypdf.errors import PdfReadError
from pypdf.generic import DictionaryObject, IndirectObject, PdfObject

from ..exceptions import DocumentLoadError, DocumentStructureError

LOGGER = logging.getLogger("sigillum.document")

ObjectId = tuple[int, int]

_MAX_TREE_DEPTH = 64


class PdfDocument:
    """Mutable PDF object graph indexed by ``(idnum, generation)`` ids."""

    def __init__(self, writer: PdfWriter) -> None:
        self._writer = writer

    # -- Loading and serialisation ---------------------------------------------

    @classmethod
    def load(cls, data: bytes) -> "PdfDocument":
        """Parse *data* and return a document ready for editing.

        Encrypted files are accepted when they open with an empty user
        password. ``DocumentLoadError`` is raised for anything pypdf cannot
        read.
        """

        try:
            reader = PdfReader(io.BytesIO(data))
        except PdfReadError as exc:
            raise DocumentLoadError(f"Corrupted or invalid PDF: {exc}") from exc
        except Exception as exc:  # pragma: no cover - dependency exceptions vary
            raise DocumentLoadError(f"Unexpected error reading PDF: {exc}") from exc

        if reader.is_encrypted:
            LOGGER.debug("Attempting to decrypt encrypted PDF with an empty password")
            try:
                status = reader.decrypt("")
            except Exception as exc:  # pragma: no cover - decrypt errors vary
                raise DocumentLoadError("Unable to decrypt encrypted PDF") from exc
            if status == 0:
                raise DocumentLoadError("PDF is encrypted and requires a password")

        writer = PdfWriter()
        try:
            writer.clone_reader_document_root(reader)
        except Exception as exc:
            raise DocumentLoadError(f"Unable to read document structure: {exc}") from exc

        document = cls(writer)
        LOGGER.debug("Loaded PDF with %d objects", document.object_count)
        return document

    @classmethod
    def from_writer(cls, writer: PdfWriter) -> "PdfDocument":
        return cls(writer)

    def to_bytes(self) -> bytes:
        """Serialise the object graph back to PDF bytes."""

        buffer = io.BytesIO()
        try:
            self._writer.write(buffer)
        except Exception as exc:  # pragma: no cover - pypdf exceptions vary
            raise DocumentStructureError(f"Failed to serialise PDF: {exc}") from exc
        return buffer.getvalue()

    # -- Object table ------------------------------------------------------------

    @property
    def writer(self) -> PdfWriter:
        return self._writer

    @property
    def object_count(self) -> int:
        return len(self._writer._objects)

    def page_ids(self) -> list[ObjectId]:
        """Return the object ids of every page in document order."""

        try:
            pages = list(self._writer.pages)
        except Exception as exc:
            raise DocumentStructureError(f"Unable to walk the page tree: {exc}") from exc

        ids: list[ObjectId] = []
        for index, page in enumerate(pages):
            ref = page.indirect_reference
            if ref is None:
                raise DocumentStructureError(f"Page {index} is not an indirect object")
            ids.append((ref.idnum, ref.generation))
        return ids

    def get_object(self, obj_id: ObjectId) -> PdfObject:
        idnum, generation = obj_id
        if idnum < 1:
            raise DocumentStructureError(f"Invalid object id {idnum} {generation} R")
        try:
            obj = self._writer.get_object(idnum)
        except Exception as exc:
            raise DocumentStructureError(
                f"Object {idnum} {generation} R cannot be dereferenced"
            ) from exc
        if obj is None:
            raise DocumentStructureError(f"Object {idnum} {generation} R has been freed")
        return obj

    def add_object(self, obj: PdfObject) -> ObjectId:
        ref = self._writer._add_object(obj)
        LOGGER.debug("Added object %d %d R (%s)", ref.idnum, ref.generation, type(obj).__name__)
        return (ref.idnum, ref.generation)

    def reference(self, obj_id: ObjectId) -> IndirectObject:
        idnum, generation = obj_id
        return IndirectObject(idnum, generation, self._writer)

    def resolve(self, value: Any) -> Any:
        """Follow *value* through the object table when it is a reference."""

        if isinstance(value, IndirectObject):
            return self.get_object((value.idnum, value.generation))
        return value

    def entry(self, mapping: DictionaryObject, key: str) -> Any:
        """Return the resolved value stored under *key*, or ``None``."""

        if key not in mapping:
            return None
        return self.resolve(mapping.raw_get(key))

    def inherited_attribute(self, page_id: ObjectId, key: str) -> Any:
        """Look *key* up on the page, then on its ``/Pages`` ancestors."""

        node: Any = self.get_object(page_id)
        seen = {page_id}
        while isinstance(node, DictionaryObject) and len(seen) <= _MAX_TREE_DEPTH:
            if key in node:
                return self.resolve(node.raw_get(key))
            parent = node.raw_get("/Parent") if "/Parent" in node else None
            if not isinstance(parent, IndirectObject):
                return None
            parent_id = (parent.idnum, parent.generation)
            if parent_id in seen:
                LOGGER.warning("Cycle in page tree at %d %d R", *parent_id)
                return None
            seen.add(parent_id)
            try:
                node = self.get_object(parent_id)
            except DocumentStructureError:
                LOGGER.debug("Dangling /Parent %d %d R while looking up %s", *parent_id, key)
                return None
        return None


__all__ = ["ObjectId", "PdfDocument"]
