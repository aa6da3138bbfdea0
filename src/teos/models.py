"""Models for TEOS envelopes and their storage descriptors.

An envelope is a tagged union of ``PskTEOS`` and ``MlsTEOS``. Both share the
``BaseTEOS`` fields (the signed part) and add a mode-specific envelope block.
Python attributes are snake_case; the wire form produced by ``to_dict`` uses
the camelCase keys of the format.
"""

from dataclasses import dataclass, fields
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Optional, Union

from .types import (
    TEOS_TYPE,
    TEOS_DTO_TYPE,
    NONCE_SIZE,
    TAG_SIZE,
    SIGNATURE_SIZE,
    SUPPORTED_ALGORITHMS,
    MAX_TIMESTAMP_MS,
    FormatError,
)


class Mode(str, Enum):
    """Key-establishment mode of an envelope."""
    PSK = "psk"
    MLS = "mls"


@dataclass(frozen=True)
class AADPayload:
    """Caller-supplied part of the additional authenticated data."""
    context_id: str
    epoch_id: int
    sender_client_id: str
    message_sequence: int
    scope_id: Optional[str] = None


@dataclass(frozen=True)
class AAD:
    """Additional authenticated data bound into the envelope signature."""
    identifier: str
    timestamp: int  # milliseconds since the Unix epoch
    context_id: str
    epoch_id: int
    sender_client_id: str
    message_sequence: int
    scope_id: Optional[str] = None

    @classmethod
    def from_payload(cls, identifier: str, timestamp: int, payload: AADPayload) -> "AAD":
        """Creates AAD from a caller payload plus the per-object fields."""
        return cls(
            identifier=identifier,
            timestamp=timestamp,
            context_id=payload.context_id,
            epoch_id=payload.epoch_id,
            sender_client_id=payload.sender_client_id,
            message_sequence=payload.message_sequence,
            scope_id=payload.scope_id,
        )

    def to_dict(self) -> dict:
        data = {
            "identifier": self.identifier,
            "timestamp": self.timestamp,
            "contextId": self.context_id,
            "epochId": self.epoch_id,
            "senderClientId": self.sender_client_id,
            "messageSequence": self.message_sequence,
        }
        if self.scope_id is not None:
            data["scopeId"] = self.scope_id
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "AAD":
        data = _require_map(data, "aad")
        timestamp = _require(data, "timestamp", int, "aad")
        if not 0 <= timestamp <= MAX_TIMESTAMP_MS:
            raise FormatError(f"aad.timestamp out of range: {timestamp}")

        return cls(
            identifier=_require(data, "identifier", str, "aad"),
            timestamp=timestamp,
            context_id=_require(data, "contextId", str, "aad"),
            epoch_id=_require(data, "epochId", int, "aad"),
            sender_client_id=_require(data, "senderClientId", str, "aad"),
            message_sequence=_require(data, "messageSequence", int, "aad"),
            scope_id=_optional(data, "scopeId", str, "aad"),
        )


@dataclass(frozen=True)
class BaseTEOS:
    """Mode-independent envelope core; exactly the fields covered by the signature."""

    type: ClassVar[str] = TEOS_TYPE

    version: str
    algorithm: str
    aad: AAD
    nonce: bytes  # 12 bytes
    tag: bytes  # 16 bytes, detached AEAD tag
    ciphertext: bytes  # variable

    def base_fields(self) -> dict:
        """Returns the base fields as keyword arguments for a variant constructor."""
        return {f.name: getattr(self, f.name) for f in fields(BaseTEOS)}

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "version": self.version,
            "algorithm": self.algorithm,
            "aad": self.aad.to_dict(),
            "nonce": self.nonce,
            "tag": self.tag,
            "ciphertext": self.ciphertext,
        }

    @staticmethod
    def fields_from_dict(data: dict) -> dict:
        """Parses and validates the base fields of a wire dict."""
        algorithm = _require(data, "algorithm", str)
        if algorithm not in SUPPORTED_ALGORITHMS:
            raise FormatError(f"Unsupported algorithm: {algorithm}")

        nonce = _require(data, "nonce", bytes)
        if len(nonce) != NONCE_SIZE:
            raise FormatError(f"Nonce must be {NONCE_SIZE} bytes, got {len(nonce)}")

        tag = _require(data, "tag", bytes)
        if len(tag) != TAG_SIZE:
            raise FormatError(f"Tag must be {TAG_SIZE} bytes, got {len(tag)}")

        return {
            "version": _require(data, "version", str),
            "algorithm": algorithm,
            "aad": AAD.from_dict(data.get("aad")),
            "nonce": nonce,
            "tag": tag,
            "ciphertext": _require(data, "ciphertext", bytes),
        }


@dataclass(frozen=True)
class EnvelopeAuth:
    """Authentication block of an envelope."""
    signature: bytes  # 64-byte Ed25519 signature over the base hash

    def to_dict(self) -> dict:
        return {"signature": self.signature}

    @classmethod
    def from_dict(cls, data: Any) -> "EnvelopeAuth":
        data = _require_map(data, "envelope.auth")
        signature = _require(data, "signature", bytes, "envelope.auth")
        if len(signature) != SIGNATURE_SIZE:
            raise FormatError(
                f"Signature must be {SIGNATURE_SIZE} bytes, got {len(signature)}"
            )
        return cls(signature=signature)


@dataclass(frozen=True)
class PSKEnvelope:
    """Envelope metadata for pre-shared-key mode."""
    suite: str
    auth: EnvelopeAuth
    psk_generation: int
    expires_at: Optional[int] = None  # milliseconds since the Unix epoch

    def to_dict(self) -> dict:
        data = {
            "suite": self.suite,
            "auth": self.auth.to_dict(),
            "pskGeneration": self.psk_generation,
        }
        if self.expires_at is not None:
            data["expiresAt"] = self.expires_at
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "PSKEnvelope":
        data = _require_map(data, "envelope")
        return cls(
            suite=_require(data, "suite", str, "envelope"),
            auth=EnvelopeAuth.from_dict(data.get("auth")),
            psk_generation=_require(data, "pskGeneration", int, "envelope"),
            expires_at=_optional(data, "expiresAt", int, "envelope"),
        )


@dataclass(frozen=True)
class MLSEnvelope:
    """Envelope metadata for MLS-group mode."""
    suite: str
    auth: EnvelopeAuth

    def to_dict(self) -> dict:
        return {"suite": self.suite, "auth": self.auth.to_dict()}

    @classmethod
    def from_dict(cls, data: Any) -> "MLSEnvelope":
        data = _require_map(data, "envelope")
        return cls(
            suite=_require(data, "suite", str, "envelope"),
            auth=EnvelopeAuth.from_dict(data.get("auth")),
        )


@dataclass(frozen=True)
class PskTEOS(BaseTEOS):
    """TEOS envelope whose key is derived from a pre-shared key."""

    mode: ClassVar[Mode] = Mode.PSK

    envelope: PSKEnvelope

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["mode"] = self.mode.value
        data["envelope"] = self.envelope.to_dict()
        return data


@dataclass(frozen=True)
class MlsTEOS(BaseTEOS):
    """TEOS envelope whose key is an MLS-epoch exported secret."""

    mode: ClassVar[Mode] = Mode.MLS

    envelope: MLSEnvelope

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["mode"] = self.mode.value
        data["envelope"] = self.envelope.to_dict()
        return data


TEOS = Union[PskTEOS, MlsTEOS]


def teos_from_dict(data: Any) -> TEOS:
    """Builds an envelope from its wire dict.

    The discriminant is checked before any other field is read.

    Raises:
        FormatError: If the discriminant or any field is invalid.
    """
    if not isinstance(data, dict) or data.get("type") != TEOS_TYPE:
        raise FormatError("Invalid TEOS format")

    mode = _require(data, "mode", str)
    base = BaseTEOS.fields_from_dict(data)

    if mode == Mode.PSK.value:
        return PskTEOS(**base, envelope=PSKEnvelope.from_dict(data.get("envelope")))
    if mode == Mode.MLS.value:
        return MlsTEOS(**base, envelope=MLSEnvelope.from_dict(data.get("envelope")))

    raise FormatError(f"Unknown mode: {mode}")


@dataclass(frozen=True)
class TEOSDto:
    """Lightweight descriptor of a serialized envelope for index/storage layers."""
    id: str
    mode: Mode
    ciphersuite: str
    blob: bytes
    timestamp: datetime
    type: str = TEOS_DTO_TYPE

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "id": self.id,
            "mode": self.mode.value,
            "ciphersuite": self.ciphersuite,
            "blob": self.blob,
            "timestamp": self.timestamp,
        }


def _require_map(value: Any, where: str) -> dict:
    if not isinstance(value, dict):
        raise FormatError(f"Missing or invalid {where}")
    return value


def _require(data: dict, key: str, kind: type, where: str = "teos") -> Any:
    value = data.get(key)
    # bool is an int subclass but never a valid integer field
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise FormatError(f"Missing or invalid {where}.{key}")
    return value


def _optional(data: dict, key: str, kind: type, where: str) -> Any:
    if data.get(key) is None:
        return None
    return _require(data, key, kind, where)
