"""Serialization of TEOS envelopes and their payloads."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

import msgpack

from .models import TEOS, TEOSDto, teos_from_dict
from .types import TEOS_TYPE, FormatError

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def encode_payload(value: Any) -> bytes:
    """
    Encode an application value with MessagePack.

    Args:
        value: Value to encode

    Returns:
        Encoded bytes, ready to be passed as envelope plaintext
    """
    return msgpack.packb(value, use_bin_type=True)


def decode_payload(data: bytes) -> Any:
    """
    Decode MessagePack payload bytes.

    Raises:
        FormatError: If the bytes are not a single MessagePack value
    """
    try:
        return msgpack.unpackb(data, raw=False, strict_map_key=False)
    except (ValueError, TypeError, msgpack.UnpackException) as e:
        raise FormatError(f"Invalid payload encoding: {e}") from e


def serialize_teos(teos: TEOS) -> bytes:
    """
    Encode an envelope to bytes.

    Args:
        teos: PskTEOS or MlsTEOS

    Returns:
        MessagePack map with the camelCase wire keys
    """
    return msgpack.packb(teos.to_dict(), use_bin_type=True)


def deserialize_teos(data: bytes) -> TEOS:
    """
    Decode bytes into an envelope.

    The discriminant is checked before any other field is interpreted, so
    unrelated MessagePack blobs are rejected outright.

    Args:
        data: Serialized envelope

    Returns:
        Decoded PskTEOS or MlsTEOS

    Raises:
        FormatError: If the data is not a valid TEOS envelope
    """
    try:
        decoded = msgpack.unpackb(data, raw=False)
    except (ValueError, TypeError, msgpack.UnpackException) as e:
        raise FormatError(f"Invalid TEOS format: {e}") from e

    if not isinstance(decoded, dict) or decoded.get("type") != TEOS_TYPE:
        logger.warning("Rejected payload without %s discriminant", TEOS_TYPE)
        raise FormatError("Invalid TEOS format")

    return teos_from_dict(decoded)


def is_teos_message(data: bytes) -> bool:
    """
    Check if data looks like a serialized TEOS envelope.

    Only the discriminant is inspected.

    Args:
        data: Bytes to check

    Returns:
        True if data decodes to a map with the TEOS discriminant
    """
    try:
        decoded = msgpack.unpackb(data, raw=False)
    except (ValueError, TypeError, msgpack.UnpackException):
        return False

    return isinstance(decoded, dict) and decoded.get("type") == TEOS_TYPE


def get_teos_dto(teos: TEOS) -> TEOSDto:
    """
    Project an envelope onto its storage descriptor.

    Args:
        teos: PskTEOS or MlsTEOS

    Returns:
        TEOSDto holding the serialized envelope as ``blob``

    Raises:
        FormatError: If the AAD timestamp cannot be represented as a datetime
    """
    try:
        timestamp = _EPOCH + timedelta(milliseconds=teos.aad.timestamp)
    except OverflowError as e:
        raise FormatError(f"aad.timestamp out of range: {teos.aad.timestamp}") from e

    return TEOSDto(
        id=teos.aad.identifier,
        mode=teos.mode,
        ciphersuite=teos.envelope.suite,
        blob=serialize_teos(teos),
        timestamp=timestamp,
    )
