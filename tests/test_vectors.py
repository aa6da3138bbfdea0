"""Shared test inputs for TEOS tests."""

from teos.models import AADPayload

# Ed25519 signing seeds (32-byte hex strings)
SENDER_SEED_HEX = "0000000000000000000000000000000000000000000000000000000000000001"
OTHER_SEED_HEX = "0000000000000000000000000000000000000000000000000000000000000002"

# Test PSK: 0xAA repeated 32 times
TEST_PSK = bytes([0xAA] * 32)

DEFAULT_AAD = AADPayload(
    context_id="group-123",
    epoch_id=42,
    sender_client_id="client-7",
    message_sequence=3,
)

SCOPED_AAD = AADPayload(
    context_id="group-123",
    epoch_id=42,
    sender_client_id="client-7",
    message_sequence=3,
    scope_id="channel-general",
)

PSK_PAYLOAD = {"message": "hello world", "count": 5, "nested": {"active": True}}
MLS_PAYLOAD = {"status": "ok", "items": [1, 2, 3]}

# Payloads covering codec edge cases
TEST_PAYLOADS = {
    "empty_map": {},
    "empty_string": "",
    "unicode": "\u4f60\u597d - Caf\u00e9",
    "bytes": b"\x00\x01\x02\xff",
    "list": [1, "two", 3.5, None, False],
    "large_int": 2**62,
    "long_text": "The quick brown fox jumps over the lazy dog. " * 50,
    "int_keys": {1: "one", 2: "two"},
    "nested_int_keys": {"outer": {7: [1, 2], 8: {9: True}}, -1: b"\x00"},
}
