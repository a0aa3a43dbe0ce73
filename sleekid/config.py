"""Immutable generator settings."""

from sleekid.alphabet import TimestampOrder, alphabet_for
from sleekid.checksum import MAX_CHECKSUM_LENGTH, MIN_CHECKSUM_LENGTH
from sleekid.errors import InvalidConfigurationError
from sleekid.timestamp import BASE_UNIX_EPOCH, MAX_TIMESTAMP_LENGTH, MIN_TIMESTAMP_LENGTH

# Override in production and keep it secret: anyone holding it can mint valid ids.
DEFAULT_CHECKSUM_TOKEN = 0x736C65656B696421
DEFAULT_DELIMITER = b"_"
DEFAULT_CHECKSUM_LENGTH = 2
DEFAULT_RANDOM_DIGITS_LENGTH = 12
DEFAULT_TIMESTAMP_LENGTH = 5


class GeneratorConfig:
    """
    Settings shared by every id a generator produces or validates.

    Zero or None falls back to the default. A timestamp length outside
    4..6 fails here rather than being clamped, as do negative lengths, a
    checksum length above 3 and a delimiter that is not a single byte.
    """

    __slots__ = (
        "delimiter",
        "checksum_token",
        "checksum_length",
        "random_digits_length",
        "timestamp_length",
        "timestamp_order",
        "epoch",
    )

    def __init__(self, delimiter=None, checksum_token=None, checksum_length=None,
                 random_digits_length=None, timestamp_length=None, timestamp_order=None):
        delimiter = _resolve_delimiter(delimiter)
        checksum_token = _int_setting("checksum_token", checksum_token, redact=True) or DEFAULT_CHECKSUM_TOKEN
        checksum_length = _int_setting("checksum_length", checksum_length) or DEFAULT_CHECKSUM_LENGTH
        random_digits_length = _int_setting("random_digits_length", random_digits_length) or DEFAULT_RANDOM_DIGITS_LENGTH
        timestamp_length = _int_setting("timestamp_length", timestamp_length) or DEFAULT_TIMESTAMP_LENGTH

        if not 0 <= checksum_token <= 0xFFFFFFFFFFFFFFFF:
            raise InvalidConfigurationError(
                "checksum_token must fit in 64 unsigned bits", field="checksum_token", value="<redacted>"
            )
        if not MIN_CHECKSUM_LENGTH <= checksum_length <= MAX_CHECKSUM_LENGTH:
            raise InvalidConfigurationError(
                f"checksum_length must be {MIN_CHECKSUM_LENGTH}..{MAX_CHECKSUM_LENGTH}",
                field="checksum_length",
                value=checksum_length,
            )
        if random_digits_length < 1:
            raise InvalidConfigurationError(
                "random_digits_length must be at least 1", field="random_digits_length", value=random_digits_length
            )
        if not MIN_TIMESTAMP_LENGTH <= timestamp_length <= MAX_TIMESTAMP_LENGTH:
            raise InvalidConfigurationError(
                f"timestamp_length must be {MIN_TIMESTAMP_LENGTH}..{MAX_TIMESTAMP_LENGTH}",
                field="timestamp_length",
                value=timestamp_length,
            )
        try:
            timestamp_order = TimestampOrder(timestamp_order or TimestampOrder.ALPHABETICAL)
        except ValueError as exc:
            raise InvalidConfigurationError(
                "timestamp_order must be 'alphabetical' or 'ascii'", field="timestamp_order", value=timestamp_order
            ) from exc

        setattr_ = object.__setattr__
        setattr_(self, "delimiter", delimiter)
        setattr_(self, "checksum_token", checksum_token)
        setattr_(self, "checksum_length", checksum_length)
        setattr_(self, "random_digits_length", random_digits_length)
        setattr_(self, "timestamp_length", timestamp_length)
        setattr_(self, "timestamp_order", timestamp_order)
        setattr_(self, "epoch", BASE_UNIX_EPOCH)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def alphabet(self):
        return alphabet_for(self.timestamp_order)

    @property
    def uses_default_token(self):
        return self.checksum_token == DEFAULT_CHECKSUM_TOKEN

    def id_length(self, prefix_length, random_digits_length=None):
        """Length of an id for a prefix of the given byte length."""
        random_digits_length = random_digits_length or self.random_digits_length
        return prefix_length + 1 + self.timestamp_length + random_digits_length + self.checksum_length

    def replace(self, **changes):
        """Copy with some settings changed."""
        values = {name: getattr(self, name) for name in self.__slots__ if name != "epoch"}
        values.update(changes)
        return GeneratorConfig(**values)

    def to_dict(self):
        """Public view of the settings; the token is never included."""
        return {
            "delimiter": self.delimiter.decode("latin-1"),
            "checksum_length": self.checksum_length,
            "random_digits_length": self.random_digits_length,
            "timestamp_length": self.timestamp_length,
            "timestamp_order": self.timestamp_order.value,
            "epoch": self.epoch,
        }

    def __eq__(self, other):
        if not isinstance(other, GeneratorConfig):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name) for name in self.__slots__)

    def __hash__(self):
        return hash(tuple(getattr(self, name) for name in self.__slots__))

    def __repr__(self):
        if not hasattr(self, "epoch"):
            return "GeneratorConfig(<incomplete>)"
        settings = ", ".join(f"{key}={value!r}" for key, value in self.to_dict().items())
        return f"GeneratorConfig({settings})"


def _int_setting(field, value, redact=False):
    """Integer setting or None; anything else is a configuration error."""
    if value is None or (isinstance(value, int) and not isinstance(value, bool)):
        return value
    raise InvalidConfigurationError(
        f"{field} must be an integer", field=field, value="<redacted>" if redact else value
    )


def _resolve_delimiter(delimiter):
    if not delimiter:
        return DEFAULT_DELIMITER
    if isinstance(delimiter, int) and not isinstance(delimiter, bool):
        delimiter = bytes([delimiter]) if 0 <= delimiter <= 255 else b""
    elif isinstance(delimiter, str):
        delimiter = delimiter.encode("utf-8")
    if not isinstance(delimiter, (bytes, bytearray)) or len(delimiter) != 1:
        raise InvalidConfigurationError("delimiter must be a single byte", field="delimiter", value=delimiter)
    return bytes(delimiter)


def parse_token(raw, source="checksum_token"):
    """Token from an int or a decimal / 0x-prefixed string; None when blank."""
    if raw is None or isinstance(raw, int):
        return raw
    if not isinstance(raw, str):
        raise InvalidConfigurationError(f"{source} must be an integer", field="checksum_token", value="<redacted>")
    raw = raw.strip()
    if not raw:
        return None
    try:
        return int(raw, 0)
    except ValueError as exc:
        raise InvalidConfigurationError(
            f"{source} must be a decimal or 0x-prefixed integer", field="checksum_token", value="<redacted>"
        ) from exc


def generator_config_from_dict(d, checksum_token=None):
    """Build settings from a config.json section; a token passed in wins over the file's."""
    return GeneratorConfig(
        delimiter=d.get("delimiter"),
        checksum_token=checksum_token or parse_token(d.get("checksum_token")),
        checksum_length=d.get("checksum_length"),
        random_digits_length=d.get("random_digits_length"),
        timestamp_length=d.get("timestamp_length"),
        timestamp_order=d.get("timestamp_order"),
    )
