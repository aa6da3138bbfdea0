"""PSK key schedule for TEOS.

Every PSK-mode envelope is encrypted under its own AES-256 key:
    - Salt binds the key to (group, epoch, generation)
    - Info binds the key to (identifier, sender, sequence)

Sender and receiver run the same derivation, so the key is never transmitted.
"""

import hashlib
from dataclasses import dataclass

from cryptography.hazmat.primitives.kdf.hkdf import HKDF
from cryptography.hazmat.primitives.hashes import SHA256

from .models import PskTEOS
from .types import PSK_KEY_SIZE, PSK_KEY_INFO_PREFIX, KeyDerivationError


@dataclass(frozen=True)
class PskKeyContext:
    """Message-binding inputs of the PSK key derivation."""
    identifier: str
    group_id: str
    epoch_id: int
    psk_generation: int
    sender_client_id: str
    message_sequence: int


def derive_psk_salt(group_id: str, epoch_id: int, psk_generation: int) -> bytes:
    """Derive the HKDF salt for a group epoch and PSK generation.

    Args:
        group_id: The group (context) identifier.
        epoch_id: The group epoch.
        psk_generation: The PSK generation counter.

    Returns:
        32-byte SHA-256 of "<groupId>|<epochId>|<pskGeneration>".
    """
    salt_input = f"{group_id}|{epoch_id}|{psk_generation}".encode("utf-8")
    return hashlib.sha256(salt_input).digest()


def derive_psk_info(identifier: str, sender_client_id: str, message_sequence: int) -> bytes:
    """Derive the HKDF info string for a single message.

    Args:
        identifier: The envelope identifier.
        sender_client_id: The sending client.
        message_sequence: The sender's message sequence number.

    Returns:
        UTF-8 bytes of "torln-teos-v1:key|<identifier>|<senderClientId>|<messageSequence>".
    """
    info = f"{PSK_KEY_INFO_PREFIX}|{identifier}|{sender_client_id}|{message_sequence}"
    return info.encode("utf-8")


def derive_psk_key(context: PskKeyContext, psk_bytes: bytes) -> bytes:
    """Derive the AES-256 key for one envelope from the pre-shared key.

    Args:
        context: The message-binding context.
        psk_bytes: The long-lived pre-shared secret.

    Returns:
        32-byte AES-256-GCM key.

    Raises:
        KeyDerivationError: If the pre-shared secret is empty.
    """
    if not psk_bytes:
        raise KeyDerivationError("Pre-shared key must not be empty")

    hkdf = HKDF(
        algorithm=SHA256(),
        length=PSK_KEY_SIZE,
        salt=derive_psk_salt(context.group_id, context.epoch_id, context.psk_generation),
        info=derive_psk_info(
            context.identifier, context.sender_client_id, context.message_sequence
        ),
    )
    return hkdf.derive(bytes(psk_bytes))


def psk_context_for(teos: PskTEOS) -> PskKeyContext:
    """Build the key context from an envelope's own AAD and generation."""
    return PskKeyContext(
        identifier=teos.aad.identifier,
        group_id=teos.aad.context_id,
        epoch_id=teos.aad.epoch_id,
        psk_generation=teos.envelope.psk_generation,
        sender_client_id=teos.aad.sender_client_id,
        message_sequence=teos.aad.message_sequence,
    )
