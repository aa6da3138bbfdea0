"""Protocol constants and exception types for TEOS."""


# Format family
TEOS_TYPE = "torln.teos.v1"
TEOS_DTO_TYPE = "torln.teos.dto.v1"
TEOS_VERSION = "1.0.0"

# Field sizes
NONCE_SIZE = 12
TAG_SIZE = 16
SIGNATURE_SIZE = 64
PUBLIC_KEY_SIZE = 32
PRIVATE_KEY_SIZE = 32  # Ed25519 seed
PSK_KEY_SIZE = 32  # AES-256

# Latest AAD timestamp a datetime can hold (9999-12-31T23:59:59.999Z), in ms
MAX_TIMESTAMP_MS = 253402300799999

# AEAD algorithm names stamped into the base record
ALGORITHM_AES_GCM = "AES-GCM"
ALGORITHM_CHACHA20_POLY1305 = "ChaCha20-Poly1305"
SUPPORTED_ALGORITHMS = (ALGORITHM_AES_GCM, ALGORITHM_CHACHA20_POLY1305)

# Ciphersuite labels
PSK_SUITE = "PSK+AES-256-GCM"
MLS_SUITE = "MLS_128_DHKEMX25519_CHACHA20POLY1305_SHA256_Ed25519"

# PSK key schedule
DEFAULT_PSK_GENERATION = 1
PSK_KEY_INFO_PREFIX = "torln-teos-v1:key"


# Exception types
class TEOSError(Exception):
    """Base exception for TEOS errors."""
    pass


class FormatError(TEOSError):
    """Unknown discriminant or malformed envelope fields."""
    pass


class AuthenticationError(TEOSError):
    """Envelope signature verification failed."""
    pass


class KeyDerivationError(TEOSError):
    """PSK key derivation failed."""
    pass


class InvalidKeyError(TEOSError):
    """Invalid signing or verifying key material."""
    pass
