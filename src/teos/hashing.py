"""
Canonical hashing of the signed part of a TEOS envelope.

The signature covers exactly the base fields (type, version, algorithm, aad,
nonce, tag, ciphertext). They are encoded as MessagePack with every map's keys
sorted, so the digest does not depend on how the envelope was built.
"""

import hashlib
from typing import Any

import msgpack

from .models import BaseTEOS
from .types import TEOS_TYPE


def canonical_encode(value: Any) -> bytes:
    """
    Encode a value as canonical MessagePack.

    Maps are emitted with keys in sorted order at every nesting level and
    None-valued map entries are dropped. Byte strings use the bin family.

    Args:
        value: Nested structure of dicts, lists, str, bytes, int, bool

    Returns:
        Canonical encoding
    """
    return msgpack.packb(_canonicalize(value), use_bin_type=True)


def _canonicalize(value: Any) -> Any:
    if isinstance(value, dict):
        return {
            key: _canonicalize(value[key])
            for key in sorted(value, key=lambda k: k.encode("utf-8"))
            if value[key] is not None
        }
    if isinstance(value, (list, tuple)):
        return [_canonicalize(item) for item in value]
    return value


def generate_base_teos_hash(teos: BaseTEOS) -> bytes:
    """
    Compute the SHA-256 hash that an envelope signature covers.

    Works for a bare BaseTEOS or either envelope variant; mode and envelope
    metadata are never part of the hash.

    Args:
        teos: Envelope or base record

    Returns:
        32-byte SHA-256 digest
    """
    signable = {
        "type": TEOS_TYPE,
        "version": teos.version,
        "algorithm": teos.algorithm,
        "aad": teos.aad.to_dict(),
        "nonce": teos.nonce,
        "tag": teos.tag,
        "ciphertext": teos.ciphertext,
    }
    return hashlib.sha256(canonical_encode(signable)).digest()
