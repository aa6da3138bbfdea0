"""
Base envelope construction, verification and opening.

The base record carries the AEAD output of one encryption, split into
ciphertext and a detached 16-byte tag, together with its nonce and AAD.
Mode adapters in ``teos.psk`` and ``teos.mls`` sign and wrap it.
"""

import logging
import os
import time

from cryptography.hazmat.primitives.ciphers.aead import AESGCM, ChaCha20Poly1305

from .hashing import generate_base_teos_hash
from .models import AAD, AADPayload, BaseTEOS
from .signature import VerifyingKey, verify_hash
from .types import (
    TEOS_VERSION,
    NONCE_SIZE,
    TAG_SIZE,
    ALGORITHM_AES_GCM,
    ALGORITHM_CHACHA20_POLY1305,
    FormatError,
)

logger = logging.getLogger(__name__)

_CIPHERS = {
    ALGORITHM_AES_GCM: AESGCM,
    ALGORITHM_CHACHA20_POLY1305: ChaCha20Poly1305,
}


def generate_nonce() -> bytes:
    """Generate a random 12-byte AEAD nonce."""
    return os.urandom(NONCE_SIZE)


def process_ciphertext(payload: bytes) -> tuple[bytes, bytes]:
    """
    Split combined AEAD output into ciphertext and tag.

    Args:
        payload: ciphertext || 16-byte tag

    Returns:
        Tuple of (ciphertext, tag)

    Raises:
        FormatError: If the payload is shorter than a tag
    """
    if len(payload) < TAG_SIZE:
        raise FormatError(
            f"AEAD output too short: {len(payload)} bytes (minimum {TAG_SIZE})"
        )

    payload = bytes(payload)
    return payload[:-TAG_SIZE], payload[-TAG_SIZE:]


def _now_millis() -> int:
    return int(time.time() * 1000)


def create_base_psk_teos(
    identifier: str,
    aad: AADPayload,
    key: bytes,
    data: bytes,
) -> BaseTEOS:
    """
    Encrypt plaintext with AES-GCM and build the base record.

    Args:
        identifier: Envelope identifier
        aad: Caller AAD payload
        key: AES key for this envelope
        data: Plaintext bytes

    Returns:
        Unsigned base record
    """
    nonce = generate_nonce()
    payload = AESGCM(key).encrypt(nonce, bytes(data), None)
    ciphertext, tag = process_ciphertext(payload)

    return BaseTEOS(
        version=TEOS_VERSION,
        algorithm=ALGORITHM_AES_GCM,
        aad=AAD.from_payload(identifier, _now_millis(), aad),
        nonce=nonce,
        tag=tag,
        ciphertext=ciphertext,
    )


def create_base_mls_teos(
    identifier: str,
    aad: AADPayload,
    data: bytes,
    nonce: bytes,
) -> BaseTEOS:
    """
    Build the base record around ciphertext produced by the MLS layer.

    Args:
        identifier: Envelope identifier
        aad: Caller AAD payload
        data: ChaCha20-Poly1305 output (ciphertext || tag)
        nonce: The 12-byte nonce used to produce ``data``

    Returns:
        Unsigned base record
    """
    if len(nonce) != NONCE_SIZE:
        raise FormatError(f"Nonce must be {NONCE_SIZE} bytes, got {len(nonce)}")

    ciphertext, tag = process_ciphertext(data)

    return BaseTEOS(
        version=TEOS_VERSION,
        algorithm=ALGORITHM_CHACHA20_POLY1305,
        aad=AAD.from_payload(identifier, _now_millis(), aad),
        nonce=bytes(nonce),
        tag=tag,
        ciphertext=ciphertext,
    )


def verify_teos(teos, author_public_key: VerifyingKey) -> bool:
    """
    Check an envelope's signature against its recomputed base hash.

    Args:
        teos: PskTEOS or MlsTEOS
        author_public_key: Sender's Ed25519 public key

    Returns:
        True if the signature is valid, False otherwise
    """
    digest = generate_base_teos_hash(teos)
    valid = verify_hash(digest, author_public_key, teos.envelope.auth.signature)
    if not valid:
        logger.warning(
            "Signature check failed for %s envelope %s",
            teos.mode.value,
            teos.aad.identifier,
        )
    return valid


def open_base_teos(teos: BaseTEOS, key: bytes) -> bytes:
    """
    Decrypt the ciphertext of a base record.

    Signature verification is the caller's job and must happen first.
    AEAD errors from the provider propagate unchanged.

    Args:
        teos: Envelope or base record
        key: AEAD key matching ``teos.algorithm``

    Returns:
        Plaintext bytes

    Raises:
        FormatError: If the algorithm is not supported
        cryptography.exceptions.InvalidTag: If the AEAD check fails
    """
    cipher_cls = _CIPHERS.get(teos.algorithm)
    if cipher_cls is None:
        raise FormatError(f"Unsupported algorithm: {teos.algorithm}")

    cipher = cipher_cls(key)
    return cipher.decrypt(teos.nonce, teos.ciphertext + teos.tag, None)
