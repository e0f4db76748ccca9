from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from apps.backend.app import main as backend_main
from apps.backend.app.main import app, get_key_store
from sigillum.core.model import KeyPair
from sigillum.keys import KeyStore
from sigillum.signing import verify_pdf


client = TestClient(app)


@pytest.fixture()
def store_override(key_path: Path) -> Iterator[KeyStore]:
    store = KeyStore(key_path)
    app.dependency_overrides[get_key_store] = lambda: store
    try:
        yield store
    finally:
        app.dependency_overrides.clear()


def test_health() -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_key_lifecycle(store_override: KeyStore, keypair: KeyPair) -> None:
    assert client.get("/keys/status").json() == {"has_key": False}
    assert client.get("/keys/public").status_code == 404

    imported = client.post(
        "/keys/import",
        json={"private_key": keypair.private_key, "public_key": keypair.public_key},
    )
    assert imported.status_code == 200
    assert imported.json() == {"public_key": keypair.public_key}

    assert client.get("/keys/status").json() == {"has_key": True}
    assert client.get("/keys/public").json()["public_key"] == keypair.public_key
    assert client.get("/keys/export").json()["private_key"] == keypair.private_key


def test_import_runs_in_threadpool(
    store_override: KeyStore, keypair: KeyPair, monkeypatch: pytest.MonkeyPatch
) -> None:
    offloaded: list[str] = []

    async def _record(func, *args, **kwargs):
        offloaded.append(func.__name__)
        return func(*args, **kwargs)

    monkeypatch.setattr(backend_main, "run_in_threadpool", _record)

    response = client.post(
        "/keys/import",
        json={"private_key": keypair.private_key, "public_key": keypair.public_key},
    )

    assert response.status_code == 200
    assert offloaded == ["import_keys"]
    assert store_override.load() == keypair


def test_import_rejects_invalid_key(store_override: KeyStore, keypair: KeyPair) -> None:
    response = client.post(
        "/keys/import",
        json={"private_key": "garbage", "public_key": keypair.public_key},
    )
    assert response.status_code == 400


def test_sign_endpoint_returns_signed_pdf(
    store_override: KeyStore, keypair: KeyPair, sample_pdf: Path
) -> None:
    store_override.save(keypair)
    files = {"file": ("sample.pdf", sample_pdf.read_bytes(), "application/pdf")}

    response = client.post("/sign", data={"name": "Alice", "extra": "dept:legal"}, files=files)

    assert response.status_code == 200
    assert response.headers.get("content-type") == "application/pdf"
    assert "signed_sample.pdf" in response.headers.get("content-disposition", "")
    assert response.headers.get("x-sigillum-signature", "").startswith("SHA256: ")
    assert response.headers.get("x-sigillum-timestamp", "").endswith(" UTC")

    report = verify_pdf(response.content)
    assert report.is_signed
    assert report.info.signer == "Alice"
    assert report.info.digest.text == response.headers["x-sigillum-signature"]


def test_sign_endpoint_without_key(store_override: KeyStore, sample_pdf: Path) -> None:
    files = {"file": ("sample.pdf", sample_pdf.read_bytes(), "application/pdf")}
    response = client.post("/sign", data={"name": "Alice"}, files=files)
    assert response.status_code == 404


def test_sign_endpoint_rejects_invalid_pdf(store_override: KeyStore, keypair: KeyPair) -> None:
    store_override.save(keypair)
    files = {"file": ("broken.pdf", b"not a pdf", "application/pdf")}
    response = client.post("/sign", data={"name": "Alice"}, files=files)
    assert response.status_code == 400


def test_verify_endpoint(sample_pdf: Path) -> None:
    files = {"file": ("sample.pdf", sample_pdf.read_bytes(), "application/pdf")}
    response = client.post("/verify", files=files)

    assert response.status_code == 200
    assert response.json() == {
        "is_signed": False,
        "signature_info": None,
        "message": "PDF does not contain a digital signature",
    }


def test_verify_endpoint_rejects_empty_upload() -> None:
    files = {"file": ("empty.pdf", b"", "application/pdf")}
    response = client.post("/verify", files=files)
    assert response.status_code == 400
