from __future__ import annotations

from typing import Dict, Optional

from .errors import AlphabetError, TruncatedError

# Digits 0-63. Multi-digit numbers are written least-significant digit first.
BASE64_CHARS = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
BASE = len(BASE64_CHARS)  # 64

CHAR_TO_DIGIT: Dict[str, int] = {c: i for i, c in enumerate(BASE64_CHARS)}


def encode_digit(value: int) -> str:
    """Map a 6-bit value to its symbol."""
    if not 0 <= value < BASE:
        raise ValueError(f"Digit must be 0-{BASE - 1}, got {value}")
    return BASE64_CHARS[value]


def decode_char(char: str) -> Optional[int]:
    """Map a symbol back to its 6-bit value, or None if it is not in the table."""
    return CHAR_TO_DIGIT.get(char)


def encode_number(value: int, digits: int) -> str:
    """Emit `value` as `digits` symbols, least-significant 6 bits first."""
    out = []
    for _ in range(digits):
        out.append(BASE64_CHARS[value & 0x3F])
        value >>= 6
    return "".join(out)


class DigitReader:
    """Sequential reader over the symbol stream that follows the header."""

    def __init__(self, data: str, offset: int = 0) -> None:
        self.data = data
        self.pos = offset

    def has_more(self) -> bool:
        return self.pos < len(self.data)

    def read_digit(self, what: str = "data") -> int:
        if self.pos >= len(self.data):
            raise TruncatedError(f"Unexpected end of input while reading {what} at offset {self.pos}")
        char = self.data[self.pos]
        digit = decode_char(char)
        if digit is None:
            raise AlphabetError(f"Invalid character {char!r} at offset {self.pos}")
        self.pos += 1
        return digit

    def read(self, digits: int, what: str = "data") -> int:
        """Read a little-endian group of `digits` symbols."""
        value = 0
        for shift in range(digits):
            value |= self.read_digit(what) << (6 * shift)
        return value
