from __future__ import annotations

from io import BytesIO
from pathlib import Path
import sys

import pytest
from pypdf import PdfWriter

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from sigillum.core.model import KeyPair  # noqa: E402
from sigillum.keys import KeyStore, generate_keypair  # noqa: E402


def _blank_pdf_bytes(pages: int, width: float = 612, height: float = 792) -> bytes:
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=width, height=height)
    writer.add_metadata({"/Producer": "sigillum-tests", "/Title": "Sample"})
    buffer = BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture()
def pdf_bytes() -> bytes:
    return _blank_pdf_bytes(1)


@pytest.fixture()
def multipage_pdf_bytes() -> bytes:
    return _blank_pdf_bytes(3)


@pytest.fixture()
def sample_pdf(tmp_path: Path) -> Path:
    pdf_path = tmp_path / "sample.pdf"
    pdf_path.write_bytes(_blank_pdf_bytes(2))
    return pdf_path


@pytest.fixture(scope="session")
def keypair() -> KeyPair:
    return generate_keypair()


@pytest.fixture()
def key_path(tmp_path: Path) -> Path:
    return tmp_path / "keys" / "keypair.json"


@pytest.fixture()
def key_store(key_path: Path, keypair: KeyPair) -> KeyStore:
    store = KeyStore(key_path)
    store.save(keypair)
    return store
