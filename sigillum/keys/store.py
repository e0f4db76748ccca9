"""RSA key pair generation and JSON persistence."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from ..core.config import load_settings
from ..core.model import KeyPair
from ..core.utils import ensure_parent_dir
from ..exceptions import KeyStoreError, MissingKeyError

LOGGER = logging.getLogger("sigillum.keys")

KEY_SIZE = 2048
PUBLIC_EXPONENT = 65537


def generate_keypair(key_size: int = KEY_SIZE) -> KeyPair:
    """Generate a fresh RSA key pair encoded as PEM text."""

    private_key = rsa.generate_private_key(public_exponent=PUBLIC_EXPONENT, key_size=key_size)
    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    public_pem = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return KeyPair(public_key=public_pem.decode("ascii"), private_key=private_pem.decode("ascii"))


def load_private_key(pem: str) -> rsa.RSAPrivateKey:
    try:
        key = serialization.load_pem_private_key(pem.encode("utf-8"), password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise KeyStoreError(f"Invalid private key: {exc}") from exc
    if not isinstance(key, rsa.RSAPrivateKey):
        raise KeyStoreError("Invalid private key: not an RSA key")
    return key


def load_public_key(pem: str) -> rsa.RSAPublicKey:
    try:
        key = serialization.load_pem_public_key(pem.encode("utf-8"))
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise KeyStoreError(f"Invalid public key: {exc}") from exc
    if not isinstance(key, rsa.RSAPublicKey):
        raise KeyStoreError("Invalid public key: not an RSA key")
    return key


class KeyStore:
    """Stores a single key pair as ``{"public_key": ..., "private_key": ...}``."""

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path).expanduser() if path is not None else load_settings().key_path

    def exists(self) -> bool:
        return self.path.is_file()

    def save(self, keypair: KeyPair) -> Path:
        payload = {"public_key": keypair.public_key, "private_key": keypair.private_key}
        try:
            ensure_parent_dir(self.path)
            self.path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError as exc:
            raise KeyStoreError(f"Unable to write key file {self.path}: {exc}") from exc
        LOGGER.debug("Stored key pair at %s", self.path)
        return self.path

    def load(self) -> KeyPair:
        if not self.exists():
            raise MissingKeyError("No keypair found. Please run keygen first.")
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise KeyStoreError(f"Unable to read key file {self.path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise KeyStoreError(f"Key file {self.path} is not valid JSON") from exc

        if not isinstance(payload, dict):
            raise KeyStoreError("Invalid key file")
        public_key = payload.get("public_key")
        private_key = payload.get("private_key")
        if not isinstance(public_key, str) or not isinstance(private_key, str):
            raise KeyStoreError("Invalid key file")
        return KeyPair(public_key=public_key, private_key=private_key)

    def generate(self, key_size: int = KEY_SIZE) -> KeyPair:
        """Create a new key pair, replacing any stored one."""

        keypair = generate_keypair(key_size)
        self.save(keypair)
        LOGGER.info("Keypair generated and saved")
        return keypair

    def import_keys(self, private_key_pem: str, public_key_pem: str) -> KeyPair:
        """Validate and store a key pair supplied as PEM text."""

        load_private_key(private_key_pem)
        load_public_key(public_key_pem)
        keypair = KeyPair(public_key=public_key_pem, private_key=private_key_pem)
        self.save(keypair)
        LOGGER.info("Keypair imported and saved")
        return keypair

    def export_private_key(self) -> str:
        return self.load().private_key

    def public_key(self) -> str:
        return self.load().public_key


__all__ = [
    "KEY_SIZE",
    "KeyStore",
    "generate_keypair",
    "load_private_key",
    "load_public_key",
]
