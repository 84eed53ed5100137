"""
Comment text codec.

Comments are escaped the way JavaScript's legacy `escape()` does it,
truncated to 4095 characters and packed four characters per five digits
(base 96 over printable ASCII).
"""
from __future__ import annotations

import string
from typing import List

from .alphabet import DigitReader, encode_number

MAX_ESCAPED_LENGTH = 4095  # largest value of the two-digit length prefix
CHARS_PER_GROUP = 4
DIGITS_PER_GROUP = 5
PRINTABLE_BASE = 96
PRINTABLE_OFFSET = 0x20

_UNESCAPED = frozenset(string.ascii_letters + string.digits + "@*_+-./")
_HEX = frozenset(string.hexdigits)


def _utf16_units(code_point: int) -> List[int]:
    if code_point < 0x10000:
        return [code_point]
    v = code_point - 0x10000
    return [0xD800 + (v >> 10), 0xDC00 + (v & 0x3FF)]


def escape(text: str) -> str:
    out: List[str] = []
    for ch in text:
        cp = ord(ch)
        if ch in _UNESCAPED:
            out.append(ch)
        elif cp <= 0xFF:
            out.append(f"%{cp:02X}")
        else:
            for unit in _utf16_units(cp):
                out.append(f"%u{unit:04X}")
    return "".join(out)


def _parse_hex(chunk: str) -> int:
    # Non-hex characters inside an escape are skipped, not rejected.
    number = 0
    for ch in chunk:
        if ch in _HEX:
            number = number * 16 + int(ch, 16)
    return number


def _from_utf16_lossy(units: List[int]) -> str:
    out: List[str] = []
    i = 0
    while i < len(units):
        unit = units[i]
        if 0xD800 <= unit < 0xDC00 and i + 1 < len(units) and 0xDC00 <= units[i + 1] < 0xE000:
            out.append(chr(0x10000 + ((unit - 0xD800) << 10) + (units[i + 1] - 0xDC00)))
            i += 2
            continue
        out.append("\ufffd" if 0xD800 <= unit < 0xE000 else chr(unit))
        i += 1
    return "".join(out)


def unescape(escaped: str) -> str:
    units: List[int] = []
    i = 0
    n = len(escaped)
    while i < n:
        ch = escaped[i]
        i += 1
        if ch != "%":
            units.append(ord(ch))
            continue
        width = 2
        if i < n and escaped[i] == "u":
            i += 1
            width = 4
        chunk = escaped[i:i + width]
        i += len(chunk)
        units.append(_parse_hex(chunk))
    return _from_utf16_lossy(units)


def pack(escaped: str) -> str:
    """Length prefix plus base-96 groups. Input must be printable ASCII."""
    out: List[str] = [encode_number(len(escaped), 2)]
    for start in range(0, len(escaped), CHARS_PER_GROUP):
        chunk = escaped[start:start + CHARS_PER_GROUP]
        value = 0
        for ch in reversed(chunk):
            value = value * PRINTABLE_BASE + (ord(ch) - PRINTABLE_OFFSET)
        out.append(encode_number(value, DIGITS_PER_GROUP))
    return "".join(out)


def unpack(reader: DigitReader) -> str:
    length = reader.read(2, "comment length")
    chars: List[str] = []
    while length > 0:
        value = reader.read(DIGITS_PER_GROUP, "comment text")
        for _ in range(min(length, CHARS_PER_GROUP)):
            chars.append(chr(value % PRINTABLE_BASE + PRINTABLE_OFFSET))
            value //= PRINTABLE_BASE
            length -= 1
    return "".join(chars)


def encode_comment(text: str) -> str:
    """Escape, truncate and pack. Truncation may cut an escape sequence in half."""
    return pack(escape(text)[:MAX_ESCAPED_LENGTH])


def decode_comment(reader: DigitReader) -> str:
    return unescape(unpack(reader))
