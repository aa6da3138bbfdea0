"""Tests for signature module."""

import hashlib

import pytest
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from teos.signature import (
    sign_hash,
    verify_hash,
    load_signing_key,
    load_verifying_key,
    get_public_key,
    fingerprint,
)
from teos.types import SIGNATURE_SIZE, PRIVATE_KEY_SIZE, InvalidKeyError
from .test_vectors import SENDER_SEED_HEX, OTHER_SEED_HEX


DIGEST = hashlib.sha256(b"base fields").digest()


class TestSignAndVerify:
    """Tests for sign and verify roundtrip."""

    def test_sign_and_verify_roundtrip(self):
        """Test that signed hashes can be verified."""
        signing_key = Ed25519PrivateKey.generate()

        signature = sign_hash(DIGEST, signing_key)
        assert len(signature) == SIGNATURE_SIZE

        assert verify_hash(DIGEST, signing_key.public_key(), signature) is True

    def test_sign_and_verify_bytes(self):
        """Test sign and verify using raw key bytes."""
        seed = bytes.fromhex(SENDER_SEED_HEX)
        public_key = get_public_key(seed)

        signature = sign_hash(DIGEST, seed)

        assert verify_hash(DIGEST, public_key, signature) is True

    def test_signature_is_deterministic(self):
        """Ed25519 signatures are deterministic for the same key and hash."""
        seed = bytes.fromhex(SENDER_SEED_HEX)
        assert sign_hash(DIGEST, seed) == sign_hash(DIGEST, seed)

    def test_verify_wrong_key_fails(self):
        """Test that verification fails with wrong key."""
        signature = sign_hash(DIGEST, bytes.fromhex(SENDER_SEED_HEX))
        other_public = get_public_key(bytes.fromhex(OTHER_SEED_HEX))

        assert verify_hash(DIGEST, other_public, signature) is False

    def test_verify_wrong_hash_fails(self):
        """Test that verification fails for a different hash."""
        seed = bytes.fromhex(SENDER_SEED_HEX)
        signature = sign_hash(DIGEST, seed)
        wrong = hashlib.sha256(b"other fields").digest()

        assert verify_hash(wrong, get_public_key(seed), signature) is False

    def test_verify_truncated_signature_is_invalid(self):
        """A signature of the wrong length is reported invalid, not raised."""
        seed = bytes.fromhex(SENDER_SEED_HEX)
        signature = sign_hash(DIGEST, seed)

        assert verify_hash(DIGEST, get_public_key(seed), signature[:-1]) is False


class TestKeyLoading:
    """Tests for raw key helpers."""

    def test_load_signing_key_passthrough(self):
        key = Ed25519PrivateKey.generate()
        assert load_signing_key(key) is key

    def test_load_signing_key_wrong_length(self):
        with pytest.raises(InvalidKeyError, match="32 bytes"):
            load_signing_key(bytes(31))

    def test_load_signing_key_from_seed(self):
        seed = bytes.fromhex(SENDER_SEED_HEX)
        assert len(seed) == PRIVATE_KEY_SIZE
        assert load_signing_key(seed).private_bytes_raw() == seed

    def test_load_verifying_key_wrong_length(self):
        with pytest.raises(InvalidKeyError, match="32 bytes"):
            load_verifying_key(bytes(33))

    def test_get_public_key_matches_object(self):
        key = Ed25519PrivateKey.generate()
        assert get_public_key(key) == key.public_key().public_bytes_raw()


class TestFingerprint:
    """Tests for fingerprint generation."""

    def test_fingerprint_format(self):
        """Test fingerprint has correct format."""
        public_key = get_public_key(bytes.fromhex(SENDER_SEED_HEX))
        fp = fingerprint(public_key)

        groups = fp.split(" ")
        assert len(groups) == 4
        assert all(len(g) == 4 for g in groups)
        assert fp == fp.upper()

    def test_fingerprint_accepts_key_object(self):
        key = Ed25519PrivateKey.generate()
        assert fingerprint(key.public_key()) == fingerprint(get_public_key(key))

    def test_different_keys_different_fingerprints(self):
        fp1 = fingerprint(get_public_key(bytes.fromhex(SENDER_SEED_HEX)))
        fp2 = fingerprint(get_public_key(bytes.fromhex(OTHER_SEED_HEX)))
        assert fp1 != fp2
