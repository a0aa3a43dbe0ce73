"""
Keyed checksum segment.

Two 31-multiplier rolling hashes seeded from the high and low halves of a
64-bit token, XOR-folded after every byte and combined at the end. It catches
corruption and casual tampering; it is not a MAC.

Identifiers signed under the older single-seed scheme do not verify here.
"""

import hmac

from sleekid.alphabet import BASE

CHECKSUM_SCHEME = "dual-seed"
MIN_CHECKSUM_LENGTH = 1
MAX_CHECKSUM_LENGTH = 3

_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF


def _mix(hash_value, byte):
    hash_value = ((hash_value << 5) - hash_value + byte) & _MASK32
    return hash_value ^ (hash_value >> 16)


def checksum_value(data, token):
    """32-bit combined hash of data under token."""
    token &= _MASK64
    high = token >> 32
    low = token & _MASK32
    for byte in data:
        high = _mix(high, byte)
        low = _mix(low, byte)
    return high ^ low


def compute_checksum(data, length, token, alphabet):
    """`length` base62 symbols, least significant digit first."""
    combined = checksum_value(data, token)
    digits = bytearray()
    for _ in range(length):
        combined, remainder = divmod(combined, BASE)
        digits.append(alphabet.digit_at(remainder))
    return bytes(digits)


def verify_checksum(data, tag, token, alphabet):
    """Constant-time comparison of tag against the checksum of data."""
    expected = compute_checksum(data, len(tag), token, alphabet)
    return hmac.compare_digest(expected, bytes(tag))
