"""Pre-shared-key mode: create and open PSK envelopes."""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Optional, Union

from .base import create_base_psk_teos, open_base_teos, verify_teos
from .codec import decode_payload, deserialize_teos
from .hashing import generate_base_teos_hash
from .models import AADPayload, EnvelopeAuth, Mode, PSKEnvelope, PskTEOS
from .psk_schedule import PskKeyContext, derive_psk_key, psk_context_for
from .signature import SigningKey, VerifyingKey, sign_hash
from .types import (
    DEFAULT_PSK_GENERATION,
    PSK_SUITE,
    AuthenticationError,
    FormatError,
)

logger = logging.getLogger(__name__)


def create_psk_teos(
    aad: AADPayload,
    psk_bytes: bytes,
    signer_private_key: SigningKey,
    data: bytes,
    psk_generation: int = DEFAULT_PSK_GENERATION,
    expires_at: Optional[int] = None,
) -> PskTEOS:
    """Encrypt and sign a payload in PSK mode.

    A fresh identifier is generated and fed into the key derivation, so each
    envelope is encrypted under its own key.

    Args:
        aad: Caller AAD payload; ``context_id`` names the group.
        psk_bytes: The group's pre-shared secret.
        signer_private_key: Sender's Ed25519 private key.
        data: Encoded payload bytes (see ``encode_payload``).
        psk_generation: Current PSK generation of the group.
        expires_at: Optional expiry in milliseconds since the Unix epoch.

    Returns:
        Signed PskTEOS.
    """
    identifier = str(uuid.uuid4())
    key = derive_psk_key(
        PskKeyContext(
            identifier=identifier,
            group_id=aad.context_id,
            epoch_id=aad.epoch_id,
            psk_generation=psk_generation,
            sender_client_id=aad.sender_client_id,
            message_sequence=aad.message_sequence,
        ),
        psk_bytes,
    )

    base = create_base_psk_teos(identifier, aad, key, data)
    signature = sign_hash(generate_base_teos_hash(base), signer_private_key)

    envelope = PSKEnvelope(
        suite=PSK_SUITE,
        auth=EnvelopeAuth(signature=signature),
        psk_generation=psk_generation,
        expires_at=expires_at,
    )

    logger.debug(
        "Created psk envelope %s (group=%s epoch=%d generation=%d, %d bytes)",
        identifier,
        aad.context_id,
        aad.epoch_id,
        psk_generation,
        len(base.ciphertext),
    )
    return PskTEOS(**base.base_fields(), envelope=envelope)


def extract_psk_teos(
    teos: Union[PskTEOS, bytes],
    psk_bytes: bytes,
    signer_public_key: VerifyingKey,
) -> Any:
    """Verify and decrypt a PSK envelope.

    The signature is checked before the key is derived or any decryption is
    attempted.

    Args:
        teos: PskTEOS or its serialized bytes.
        psk_bytes: The group's pre-shared secret.
        signer_public_key: Sender's Ed25519 public key.

    Returns:
        The decoded payload.

    Raises:
        FormatError: If the envelope is malformed or not in PSK mode.
        AuthenticationError: If the signature is invalid.
        cryptography.exceptions.InvalidTag: If AEAD decryption fails.
    """
    if isinstance(teos, (bytes, bytearray, memoryview)):
        teos = deserialize_teos(bytes(teos))

    if not isinstance(teos, PskTEOS):
        mode = getattr(teos, "mode", None)
        got = mode.value if isinstance(mode, Mode) else type(teos).__name__
        raise FormatError(f"Expected a psk envelope, got {got}")

    if not verify_teos(teos, signer_public_key):
        raise AuthenticationError("Invalid TEOS signature")

    key = derive_psk_key(psk_context_for(teos), psk_bytes)
    plaintext = open_base_teos(teos, key)

    logger.debug("Extracted psk envelope %s", teos.aad.identifier)
    return decode_payload(plaintext)


def is_teos_expired(teos: PskTEOS, now: Optional[datetime] = None) -> bool:
    """Whether a PSK envelope has passed its ``expires_at``.

    ``expires_at`` is not covered by the signature; treat it as advisory.
    """
    if teos.envelope.expires_at is None:
        return False

    now = now or datetime.now(timezone.utc)
    return int(now.timestamp() * 1000) >= teos.envelope.expires_at
