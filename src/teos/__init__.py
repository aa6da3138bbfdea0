"""
TEOS - Torln Encrypted Object Specification

Python implementation of signed, authenticated-encrypted TEOS envelopes in
pre-shared-key (HKDF + AES-256-GCM) and MLS (ChaCha20-Poly1305) modes.
"""

from .types import (
    TEOS_TYPE,
    TEOS_DTO_TYPE,
    TEOS_VERSION,
    NONCE_SIZE,
    TAG_SIZE,
    SIGNATURE_SIZE,
    PSK_KEY_SIZE,
    ALGORITHM_AES_GCM,
    ALGORITHM_CHACHA20_POLY1305,
    PSK_SUITE,
    MLS_SUITE,
    DEFAULT_PSK_GENERATION,
    TEOSError,
    FormatError,
    AuthenticationError,
    KeyDerivationError,
    InvalidKeyError,
)
from .models import (
    Mode,
    AADPayload,
    AAD,
    BaseTEOS,
    EnvelopeAuth,
    PSKEnvelope,
    MLSEnvelope,
    PskTEOS,
    MlsTEOS,
    TEOS,
    TEOSDto,
)
from .hashing import canonical_encode, generate_base_teos_hash
from .signature import (
    sign_hash,
    verify_hash,
    load_signing_key,
    load_verifying_key,
    get_public_key,
    fingerprint,
)
from .base import (
    generate_nonce,
    process_ciphertext,
    create_base_psk_teos,
    create_base_mls_teos,
    verify_teos,
    open_base_teos,
)
from .psk_schedule import (
    PskKeyContext,
    derive_psk_salt,
    derive_psk_info,
    derive_psk_key,
    psk_context_for,
)
from .psk import create_psk_teos, extract_psk_teos, is_teos_expired
from .mls import create_mls_teos, extract_teos
from .codec import (
    encode_payload,
    decode_payload,
    serialize_teos,
    deserialize_teos,
    is_teos_message,
    get_teos_dto,
)

__version__ = "0.1.0"

__all__ = [
    # Constants
    "TEOS_TYPE",
    "TEOS_DTO_TYPE",
    "TEOS_VERSION",
    "NONCE_SIZE",
    "TAG_SIZE",
    "SIGNATURE_SIZE",
    "PSK_KEY_SIZE",
    "ALGORITHM_AES_GCM",
    "ALGORITHM_CHACHA20_POLY1305",
    "PSK_SUITE",
    "MLS_SUITE",
    "DEFAULT_PSK_GENERATION",
    # Errors
    "TEOSError",
    "FormatError",
    "AuthenticationError",
    "KeyDerivationError",
    "InvalidKeyError",
    # Models
    "Mode",
    "AADPayload",
    "AAD",
    "BaseTEOS",
    "EnvelopeAuth",
    "PSKEnvelope",
    "MLSEnvelope",
    "PskTEOS",
    "MlsTEOS",
    "TEOS",
    "TEOSDto",
    # Hashing
    "canonical_encode",
    "generate_base_teos_hash",
    # Signature
    "sign_hash",
    "verify_hash",
    "load_signing_key",
    "load_verifying_key",
    "get_public_key",
    "fingerprint",
    # Base
    "generate_nonce",
    "process_ciphertext",
    "create_base_psk_teos",
    "create_base_mls_teos",
    "verify_teos",
    "open_base_teos",
    # PSK key schedule
    "PskKeyContext",
    "derive_psk_salt",
    "derive_psk_info",
    "derive_psk_key",
    "psk_context_for",
    # PSK mode
    "create_psk_teos",
    "extract_psk_teos",
    "is_teos_expired",
    # MLS mode
    "create_mls_teos",
    "extract_teos",
    # Codec
    "encode_payload",
    "decode_payload",
    "serialize_teos",
    "deserialize_teos",
    "is_teos_message",
    "get_teos_dto",
]
