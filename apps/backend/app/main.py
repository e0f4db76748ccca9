"""FastAPI application exposing sigillum signing and verification."""

from __future__ import annotations

from pathlib import Path

from fastapi import Depends, FastAPI, File, Form, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from sigillum import __version__
from sigillum.exceptions import DocumentLoadError, KeyStoreError, MissingKeyError, SigningError
from sigillum.keys import KeyStore
from sigillum.signing import sign_pdf, verify_pdf

app = FastAPI(title="Sigillum API", version=__version__)


class KeyImportRequest(BaseModel):
    """PEM encoded key pair supplied by a client."""

    private_key: str
    public_key: str


class PublicKeyResponse(BaseModel):
    public_key: str


class PrivateKeyResponse(BaseModel):
    private_key: str


class KeyStatusResponse(BaseModel):
    has_key: bool


def get_key_store() -> KeyStore:
    """Dependency returning the key store of the default data directory."""

    return KeyStore()


def _key_error(exc: KeyStoreError) -> HTTPException:
    status_code = 404 if isinstance(exc, MissingKeyError) else 400
    return HTTPException(status_code=status_code, detail=str(exc))


def _safe_filename(filename: str | None, default: str) -> str:
    """Return a filesystem-safe filename derived from user input."""

    if not filename:
        return default

    candidate = Path(filename).name
    return candidate or default


async def _read_upload(upload: UploadFile) -> bytes:
    contents = await upload.read()
    if not contents:
        raise HTTPException(status_code=400, detail=f"File '{upload.filename}' is empty.")
    return contents


@app.get("/health", response_class=JSONResponse)
async def health() -> dict[str, str]:
    """Lightweight health endpoint for uptime checks."""
    return {"status": "ok"}


@app.get("/keys/status", response_model=KeyStatusResponse)
async def key_status(store: KeyStore = Depends(get_key_store)) -> KeyStatusResponse:
    return KeyStatusResponse(has_key=store.exists())


@app.post("/keys/generate", response_model=PublicKeyResponse)
async def generate_key(store: KeyStore = Depends(get_key_store)) -> PublicKeyResponse:
    """Generate a fresh key pair, replacing any stored one."""

    try:
        keypair = await run_in_threadpool(store.generate)
    except KeyStoreError as exc:
        raise _key_error(exc) from exc
    return PublicKeyResponse(public_key=keypair.public_key)


@app.post("/keys/import", response_model=PublicKeyResponse)
async def import_key(
    payload: KeyImportRequest,
    store: KeyStore = Depends(get_key_store),
) -> PublicKeyResponse:
    try:
        keypair = await run_in_threadpool(
            store.import_keys, payload.private_key, payload.public_key
        )
    except KeyStoreError as exc:
        raise _key_error(exc) from exc
    return PublicKeyResponse(public_key=keypair.public_key)


@app.get("/keys/public", response_model=PublicKeyResponse)
async def get_public_key(store: KeyStore = Depends(get_key_store)) -> PublicKeyResponse:
    try:
        return PublicKeyResponse(public_key=store.public_key())
    except KeyStoreError as exc:
        raise _key_error(exc) from exc


@app.get("/keys/export", response_model=PrivateKeyResponse)
async def export_key(store: KeyStore = Depends(get_key_store)) -> PrivateKeyResponse:
    try:
        return PrivateKeyResponse(private_key=store.export_private_key())
    except KeyStoreError as exc:
        raise _key_error(exc) from exc


@app.post(
    "/sign",
    response_class=Response,
    summary="Stamp a PDF with a signature watermark",
    response_description="The signed PDF.",
)
async def sign_endpoint(
    file: UploadFile = File(..., description="PDF to sign."),
    name: str = Form(..., description="Signer name."),
    extra: str = Form("", description="Optional note printed under the timestamp."),
    store: KeyStore = Depends(get_key_store),
) -> Response:
    """Sign an uploaded PDF and return the watermarked document.

    The timestamp and display hash are echoed in ``X-Sigillum-*`` headers.
    """

    contents = await _read_upload(file)

    try:
        result = await run_in_threadpool(sign_pdf, contents, name, extra, key_store=store)
    except KeyStoreError as exc:
        raise _key_error(exc) from exc
    except (DocumentLoadError, SigningError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    filename = _safe_filename(file.filename, "document.pdf")
    headers = {
        "Content-Disposition": f'attachment; filename="signed_{filename}"',
        "X-Sigillum-Timestamp": result.info.timestamp,
        "X-Sigillum-Signature": result.info.digest.text,
    }
    return Response(content=result.signed_pdf, media_type="application/pdf", headers=headers)


@app.post("/verify", response_class=JSONResponse)
async def verify_endpoint(
    file: UploadFile = File(..., description="PDF to inspect."),
) -> dict[str, object]:
    """Report whether the uploaded PDF carries a signature watermark."""

    contents = await _read_upload(file)
    result = await run_in_threadpool(verify_pdf, contents)
    return result.to_dict()


__all__ = ["app", "get_key_store"]
