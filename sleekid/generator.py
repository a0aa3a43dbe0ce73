"""
Identifier assembly and inspection.

An id is `prefix + delimiter + timestamp + random + checksum`, with the checksum
taken over everything before it. Nothing else is stored: every field is
recovered by re-parsing under the same GeneratorConfig.
"""

import os

from sleekid.alphabet import BASE
from sleekid.checksum import compute_checksum, verify_checksum
from sleekid.clock import utc_now
from sleekid.config import GeneratorConfig
from sleekid.errors import InvalidConfigurationError, RandomSourceError
from sleekid.log import get_logger
from sleekid.timestamp import decode_timestamp, encode_timestamp


class SleekId(bytes):
    """Immutable identifier bytes; str() gives the text form."""

    __slots__ = ()

    def __str__(self):
        return self.decode("utf-8", errors="replace")

    def __repr__(self):
        return f"SleekId({str(self)!r})"


def _as_bytes(value):
    """Bytes view of an id candidate, None for anything that cannot be one."""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        return value.encode("utf-8")
    return None


class Generator:
    """
    Produces and validates ids for one GeneratorConfig.

    Holds no mutable state, so one instance may be shared freely between
    threads. `random_source(n)` must return n secure random bytes and
    `clock()` an aware datetime; both exist so tests can pin them.
    """

    def __init__(self, config=None, random_source=None, clock=None):
        self.config = config or GeneratorConfig()
        self._random_source = random_source or os.urandom
        self._clock = clock or utc_now

        logger = get_logger(component="sleekid")
        logger.info("Generator ready", **self.config.to_dict())
        if self.config.uses_default_token:
            logger.warn("Default checksum token in use; ids can be forged by anyone with this library")

    def new(self, prefix, random_digits_length=None):
        """
        New id for prefix.

        random_digits_length overrides the configured random segment length for
        this call. Raises InvalidConfigurationError if it is below 1 or the
        prefix contains the delimiter, and RandomSourceError if secure random
        bytes cannot be read.
        """
        config = self.config
        length = config.random_digits_length if random_digits_length is None else random_digits_length
        if length < 1:
            raise InvalidConfigurationError(
                "random_digits_length must be at least 1", field="random_digits_length", value=length
            )

        prefix = _as_bytes(prefix)
        if prefix is None:
            raise TypeError("prefix must be str or bytes")
        if config.delimiter in prefix:
            raise InvalidConfigurationError("prefix must not contain the delimiter", field="prefix", value=prefix)

        alphabet = config.alphabet
        timestamp = encode_timestamp(self._clock(), config.timestamp_length, alphabet)
        random_part = bytes(alphabet.digit_at(b % BASE) for b in self._read_random(length))

        body = prefix + config.delimiter + timestamp + random_part
        return SleekId(body + compute_checksum(body, config.checksum_length, config.checksum_token, alphabet))

    def _read_random(self, length):
        try:
            data = self._random_source(length)
        except (OSError, NotImplementedError) as exc:
            error = RandomSourceError("failed to read secure random bytes", requested=length, cause=exc)
            get_logger(component="sleekid").error("Random source failure", error=error)
            raise error from exc
        if data is None or len(data) < length:
            error = RandomSourceError("random source returned too few bytes", requested=length)
            get_logger(component="sleekid").error("Random source failure", error=error)
            raise error
        return data[:length]

    def prefix(self, sleek_id):
        """Text before the first delimiter, or "" when there is none."""
        data = _as_bytes(sleek_id)
        if data is None:
            return ""
        index = data.find(self.config.delimiter)
        if index < 0:
            return ""
        return data[:index].decode("utf-8", errors="replace")

    def timestamp(self, sleek_id):
        """
        Creation time (UTC, whole seconds) encoded after the prefix.

        Best effort: None when there is no delimiter, the segment is cut
        short, or it holds a symbol outside the alphabet. Run validate() first
        to know the id is genuine.
        """
        data = _as_bytes(sleek_id)
        if data is None:
            return None
        index = data.find(self.config.delimiter)
        if index < 0:
            return None
        start = index + 1
        window = data[start:start + self.config.timestamp_length]
        if len(window) < self.config.timestamp_length:
            return None
        return decode_timestamp(window, self.config.alphabet)

    def validate(self, sleek_id):
        """True when the trailing checksum matches the rest of the id."""
        config = self.config
        data = _as_bytes(sleek_id)
        if data is None or len(data) < config.checksum_length + config.timestamp_length:
            return False
        body, tag = data[:-config.checksum_length], data[-config.checksum_length:]
        return verify_checksum(body, tag, config.checksum_token, config.alphabet)

    def validate_with_prefix(self, prefix, sleek_id):
        """validate(), additionally requiring the id to start with prefix + delimiter."""
        data = _as_bytes(sleek_id)
        expected = _as_bytes(prefix)
        if data is None or expected is None or not data.startswith(expected + self.config.delimiter):
            return False
        return self.validate(data)
