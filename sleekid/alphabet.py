"""Base62 digit sets."""

from enum import Enum

ALPHABETICAL_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
ASCII_DIGITS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
BASE = 62
NOT_FOUND = -1


class TimestampOrder(Enum):
    ALPHABETICAL = "alphabetical"  # 0-9 < a-z < A-Z
    ASCII = "ascii"  # 0-9 < A-Z < a-z, same as byte order


class Alphabet:
    """62 distinct symbols, each mapped to its position 0..61."""

    __slots__ = ("symbols",)

    def __init__(self, symbols):
        if isinstance(symbols, str):
            symbols = symbols.encode("ascii")
        symbols = bytes(symbols)
        if len(symbols) != BASE or len(set(symbols)) != BASE:
            raise ValueError(f"alphabet must hold exactly {BASE} distinct symbols")
        self.symbols = symbols

    @property
    def zero(self):
        return self.symbols[0]

    def digit_at(self, value):
        return self.symbols[value]

    def index_of(self, symbol):
        if isinstance(symbol, str):
            if len(symbol) != 1:
                return NOT_FOUND
            symbol = ord(symbol)
        for index, candidate in enumerate(self.symbols):
            if candidate == symbol:
                return index
        return NOT_FOUND

    def encode(self, value, width=None):
        """Encode a non-negative int most-significant-first, zero-padded to width."""
        digits = bytearray()
        while value > 0:
            value, remainder = divmod(value, BASE)
            digits.append(self.symbols[remainder])
        if width is not None:
            del digits[width:]
            digits.extend([self.zero] * (width - len(digits)))
        elif not digits:
            digits.append(self.zero)
        digits.reverse()
        return bytes(digits)

    def __repr__(self):
        return f"Alphabet({self.symbols.decode('ascii')!r})"


ALPHABETICAL = Alphabet(ALPHABETICAL_DIGITS)
ASCII = Alphabet(ASCII_DIGITS)


def alphabet_for(order):
    """Alphabet instance for a TimestampOrder (or its string value)."""
    return ASCII if TimestampOrder(order) is TimestampOrder.ASCII else ALPHABETICAL
