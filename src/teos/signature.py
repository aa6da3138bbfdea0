"""
Ed25519 signatures over TEOS base hashes.

The sender signs the 32-byte base hash of an envelope; receivers verify it
with the sender's public key, which is distributed out of band.
"""

import hashlib
from typing import Union

from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)
from cryptography.exceptions import InvalidSignature

from .types import SIGNATURE_SIZE, PUBLIC_KEY_SIZE, PRIVATE_KEY_SIZE, InvalidKeyError


SigningKey = Union[Ed25519PrivateKey, bytes]
VerifyingKey = Union[Ed25519PublicKey, bytes]


def load_signing_key(key: SigningKey) -> Ed25519PrivateKey:
    """
    Accept an Ed25519 private key object or its raw 32-byte encoding.

    Raises:
        InvalidKeyError: If the raw key has the wrong length
    """
    if isinstance(key, Ed25519PrivateKey):
        return key

    if len(key) != PRIVATE_KEY_SIZE:
        raise InvalidKeyError(
            f"Signing key must be {PRIVATE_KEY_SIZE} bytes, got {len(key)}"
        )

    return Ed25519PrivateKey.from_private_bytes(key)


def load_verifying_key(key: VerifyingKey) -> Ed25519PublicKey:
    """
    Accept an Ed25519 public key object or its raw 32-byte encoding.

    Raises:
        InvalidKeyError: If the raw key is malformed
    """
    if isinstance(key, Ed25519PublicKey):
        return key

    if len(key) != PUBLIC_KEY_SIZE:
        raise InvalidKeyError(
            f"Ed25519 public key must be {PUBLIC_KEY_SIZE} bytes, got {len(key)}"
        )

    try:
        return Ed25519PublicKey.from_public_bytes(key)
    except ValueError as e:
        raise InvalidKeyError(f"Invalid Ed25519 public key: {e}") from e


def sign_hash(digest: bytes, signing_key: SigningKey) -> bytes:
    """
    Sign a base hash.

    Args:
        digest: The 32-byte base hash
        signing_key: Sender's Ed25519 private key (object or raw bytes)

    Returns:
        The Ed25519 signature (64 bytes)
    """
    return load_signing_key(signing_key).sign(digest)


def verify_hash(digest: bytes, verifying_key: VerifyingKey, signature: bytes) -> bool:
    """
    Verify a signature over a base hash.

    A signature of the wrong length is reported as invalid rather than
    raised, so tampering always surfaces the same way.

    Args:
        digest: The 32-byte base hash
        verifying_key: Sender's Ed25519 public key (object or raw bytes)
        signature: The signature to check

    Returns:
        True if the signature is valid, False otherwise
    """
    if len(signature) != SIGNATURE_SIZE:
        return False

    try:
        load_verifying_key(verifying_key).verify(signature, digest)
        return True
    except InvalidSignature:
        return False


def get_public_key(private_key: SigningKey) -> bytes:
    """Returns the raw 32-byte Ed25519 public key for a private key."""
    return load_signing_key(private_key).public_key().public_bytes_raw()


def fingerprint(public_key: VerifyingKey) -> str:
    """
    Generate a human-readable fingerprint for a signer public key.

    Args:
        public_key: Ed25519 public key (object or raw bytes)

    Returns:
        A fingerprint string like "A7B3C9D1 E5F28A4B"
    """
    raw = load_verifying_key(public_key).public_bytes_raw()
    hash_bytes = hashlib.sha256(raw).digest()

    hex_bytes = [f"{b:02X}" for b in hash_bytes[:8]]
    groups = [hex_bytes[i] + hex_bytes[i + 1] for i in range(0, 8, 2)]

    return " ".join(groups)
