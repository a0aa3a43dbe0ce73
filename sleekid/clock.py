"""Wall-clock helpers shared by logging, errors and the HTTP layer."""

import time
from datetime import datetime, timezone


def now_micros():
    """Current time in microseconds since Unix epoch."""
    return int(time.time() * 1_000_000)


def utc_now():
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def format_timestamp(epoch_us=None):
    """Format microseconds since Unix epoch as ISO 8601 with microseconds."""
    if epoch_us is None:
        epoch_us = now_micros()

    dt = datetime.fromtimestamp(epoch_us / 1_000_000, tz=timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.%f") + "Z"


def format_instant(instant):
    """Second-precision ISO 8601 for a decoded identifier time, None passes through."""
    if instant is None:
        return None
    return instant.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
