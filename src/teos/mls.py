"""MLS mode: wrap and open envelopes keyed by an MLS-epoch exported secret.

The MLS layer owns the key schedule and produces the ChaCha20-Poly1305
ciphertext; this module binds it to AAD and signs it.
"""

import logging
from typing import Any, Union

from .base import create_base_mls_teos, open_base_teos, verify_teos
from .codec import decode_payload, deserialize_teos
from .hashing import generate_base_teos_hash
from .models import TEOS, AADPayload, EnvelopeAuth, MLSEnvelope, MlsTEOS
from .signature import SigningKey, VerifyingKey, sign_hash
from .types import MLS_SUITE, AuthenticationError

logger = logging.getLogger(__name__)


def create_mls_teos(
    identifier: str,
    aad: AADPayload,
    signer_private_key: SigningKey,
    data: bytes,
    nonce: bytes,
) -> MlsTEOS:
    """Sign externally produced ciphertext as an MLS envelope.

    Args:
        identifier: Envelope identifier chosen by the caller.
        aad: Caller AAD payload.
        signer_private_key: Sender's Ed25519 private key.
        data: ChaCha20-Poly1305 output (ciphertext || tag).
        nonce: The 12-byte nonce used to produce ``data``.

    Returns:
        Signed MlsTEOS.
    """
    base = create_base_mls_teos(identifier, aad, data, nonce)
    signature = sign_hash(generate_base_teos_hash(base), signer_private_key)

    envelope = MLSEnvelope(suite=MLS_SUITE, auth=EnvelopeAuth(signature=signature))

    logger.debug(
        "Created mls envelope %s (group=%s epoch=%d)",
        identifier,
        aad.context_id,
        aad.epoch_id,
    )
    return MlsTEOS(**base.base_fields(), envelope=envelope)


def extract_teos(
    payload: Union[TEOS, bytes],
    key: bytes,
    signer_public_key: VerifyingKey,
) -> Any:
    """Verify and decrypt an envelope with a caller-supplied key.

    Used for MLS envelopes, whose key is the exported epoch secret. A PSK
    envelope can be opened here too when the caller already holds its
    derived key.

    Args:
        payload: Envelope or its serialized bytes.
        key: AEAD key matching the envelope's algorithm.
        signer_public_key: Sender's Ed25519 public key.

    Returns:
        The decoded payload.

    Raises:
        FormatError: If serialized bytes are not a TEOS envelope.
        AuthenticationError: If the signature is invalid.
        cryptography.exceptions.InvalidTag: If AEAD decryption fails.
    """
    if isinstance(payload, (bytes, bytearray, memoryview)):
        payload = deserialize_teos(bytes(payload))

    if not verify_teos(payload, signer_public_key):
        raise AuthenticationError("Invalid TEOS signature")

    plaintext = open_base_teos(payload, key)

    logger.debug("Extracted %s envelope %s", payload.mode.value, payload.aad.identifier)
    return decode_payload(plaintext)
