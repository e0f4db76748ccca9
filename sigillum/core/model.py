"""Shared domain models used across sigillum."""

from __future__ import annotations

from dataclasses import dataclass

NO_EXTRA = "(none)"
HASH_NOT_FOUND = "SHA256: (hash not found)"


@dataclass(frozen=True, slots=True)
class FieldValue:
    """A recovered watermark field, or the sentinel standing in for it."""

    text: str
    recovered: bool = True

    @classmethod
    def sentinel(cls, text: str) -> "FieldValue":
        return cls(text=text, recovered=False)

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True, slots=True)
class SignatureInfo:
    """Signer, timestamp, extra note and display hash of a watermark."""

    signer: str
    timestamp: str
    extra: FieldValue
    digest: FieldValue

    @classmethod
    def create(cls, signer: str, timestamp: str, extra: str, digest: str) -> "SignatureInfo":
        """Build the descriptor of a freshly signed document."""

        extra_field = FieldValue(extra) if extra else FieldValue.sentinel(NO_EXTRA)
        return cls(signer=signer, timestamp=timestamp, extra=extra_field, digest=FieldValue(digest))

    def as_tuple(self) -> tuple[str, str, str, str]:
        return (self.signer, self.timestamp, self.extra.text, self.digest.text)

    def to_dict(self) -> dict[str, str]:
        return {
            "signer": self.signer,
            "timestamp": self.timestamp,
            "extra": self.extra.text,
            "signature": self.digest.text,
        }


@dataclass(frozen=True, slots=True)
class KeyPair:
    """PEM encoded RSA key pair as persisted by the key store."""

    public_key: str
    private_key: str


@dataclass(slots=True)
class SignResult:
    """Outcome of signing a document."""

    signed_pdf: bytes
    info: SignatureInfo


@dataclass(slots=True)
class VerificationResult:
    """Outcome of inspecting a document for a watermark."""

    is_signed: bool
    info: SignatureInfo | None
    message: str

    def to_dict(self) -> dict[str, object]:
        return {
            "is_signed": self.is_signed,
            "signature_info": self.info.to_dict() if self.info else None,
            "message": self.message,
        }


__all__ = [
    "NO_EXTRA",
    "HASH_NOT_FOUND",
    "FieldValue",
    "SignatureInfo",
    "KeyPair",
    "SignResult",
    "VerificationResult",
]
