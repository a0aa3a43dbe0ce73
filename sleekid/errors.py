"""Errors with tracking IDs."""

import itertools

from sleekid.alphabet import ASCII, BASE
from sleekid.clock import format_timestamp, now_micros

_sequence = itertools.count()


def tracking_id():
    """
    Sortable base62 id from the microsecond clock plus a per-process counter.

    Needs no random source. The two-symbol counter keeps ids raised in the
    same microsecond apart.
    """
    clock = ASCII.encode(now_micros()).decode("ascii")
    suffix = ASCII.encode(next(_sequence) % BASE ** 2, width=2).decode("ascii")
    return f"err_{clock}{suffix}"


class BaseSleekIdError(Exception):
    """Base error with a sortable tracking ID and timestamp."""

    def __init__(self, message, context=None, cause=None):
        super().__init__(message)
        self.error_id = tracking_id()
        self.timestamp = format_timestamp()
        self.context = context or {}
        self.cause = cause

    def __str__(self):
        return f"[{self.error_id}] {super().__str__()}"


class InvalidConfigurationError(BaseSleekIdError, ValueError):
    """Generator settings or a per-call override out of bounds."""

    def __init__(self, message, field=None, value=None, **kwargs):
        context = kwargs.pop("context", {})
        if field:
            context["field"] = field
            context["value"] = value
        super().__init__(message, context=context, **kwargs)
        self.field = field


class RandomSourceError(BaseSleekIdError):
    """Secure random bytes could not be read."""

    def __init__(self, message, requested=None, **kwargs):
        context = kwargs.pop("context", {})
        if requested is not None:
            context["requested"] = requested
        super().__init__(message, context=context, **kwargs)
        self.requested = requested


class GeneratorNotInitializedError(BaseSleekIdError, RuntimeError):
    """Module-level helpers used before sleekid.setup()."""
