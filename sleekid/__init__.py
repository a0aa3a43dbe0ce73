"""
Sortable, tamper-evident prefixed identifiers.

    import sleekid
    sleekid.setup(sleekid.GeneratorConfig(checksum_token=12345, random_digits_length=12))
    user_id = sleekid.new("usr")
    sleekid.validate_with_prefix("usr", user_id)

The module-level helpers share one Generator installed by setup(); calling
them first raises GeneratorNotInitializedError. Components that need their
own settings construct a Generator directly.
"""

import threading

from sleekid.alphabet import Alphabet, TimestampOrder
from sleekid.config import DEFAULT_CHECKSUM_TOKEN, GeneratorConfig
from sleekid.errors import (
    BaseSleekIdError,
    GeneratorNotInitializedError,
    InvalidConfigurationError,
    RandomSourceError,
)
from sleekid.generator import Generator, SleekId

__all__ = [
    "Alphabet",
    "BaseSleekIdError",
    "DEFAULT_CHECKSUM_TOKEN",
    "Generator",
    "GeneratorConfig",
    "GeneratorNotInitializedError",
    "InvalidConfigurationError",
    "RandomSourceError",
    "SleekId",
    "TimestampOrder",
    "get_generator",
    "new",
    "prefix",
    "reset",
    "setup",
    "timestamp",
    "validate",
    "validate_with_prefix",
]

_generator = None
_generator_lock = threading.Lock()


def setup(config=None, **settings):
    """Install the shared generator from a GeneratorConfig or its keyword settings."""
    global _generator
    generator = Generator(config or GeneratorConfig(**settings))
    with _generator_lock:
        _generator = generator
    return generator


def reset():
    """Remove the shared generator."""
    global _generator
    with _generator_lock:
        _generator = None


def get_generator():
    generator = _generator
    if generator is None:
        raise GeneratorNotInitializedError("must be initialized by sleekid.setup()")
    return generator


def new(prefix, random_digits_length=None):
    return get_generator().new(prefix, random_digits_length)


def prefix(sleek_id):
    return get_generator().prefix(sleek_id)


def timestamp(sleek_id):
    return get_generator().timestamp(sleek_id)


def validate(sleek_id):
    return get_generator().validate(sleek_id)


def validate_with_prefix(prefix, sleek_id):
    return get_generator().validate_with_prefix(prefix, sleek_id)
