"""
Sortable timestamp segment.

Seconds since BASE_UNIX_EPOCH, written as fixed-width base62, most significant
digit first and left-padded with the alphabet's zero symbol. Under an alphabet
whose positions follow byte order, plain string comparison of two segments
matches chronological order.
"""

from datetime import datetime, timezone

from sleekid.alphabet import BASE, NOT_FOUND

# 2024-01-01 00:00:00 UTC
BASE_UNIX_EPOCH = 1704067200
MIN_TIMESTAMP_LENGTH = 4
MAX_TIMESTAMP_LENGTH = 6


def unix_seconds(instant):
    """Whole Unix seconds for a datetime (naive is taken as UTC) or a number."""
    if isinstance(instant, datetime):
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        return int(instant.timestamp() // 1)
    return int(instant // 1)


def encode_timestamp(instant, length, alphabet):
    """
    Encode instant into exactly `length` symbols.

    Values needing more than `length` digits keep only the low digits;
    instants at or before the epoch encode as all zero symbols.
    """
    value = unix_seconds(instant) - BASE_UNIX_EPOCH
    if value <= 0:
        return bytes([alphabet.zero]) * length
    return alphabet.encode(value, width=length)


def decode_timestamp(window, alphabet):
    """Decode a timestamp segment, or None if it holds a foreign symbol."""
    total = 0
    for symbol in window:
        index = alphabet.index_of(symbol)
        if index == NOT_FOUND:
            return None
        total = total * BASE + index
    return datetime.fromtimestamp(total + BASE_UNIX_EPOCH, tz=timezone.utc)


def timestamp_capacity(length):
    """Last instant representable by a segment of `length` symbols."""
    return datetime.fromtimestamp(BASE_UNIX_EPOCH + BASE ** length - 1, tz=timezone.utc)
