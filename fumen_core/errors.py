from __future__ import annotations


class FumenError(ValueError):
    """Base class for every error raised by the fumen codec."""


class PlacementError(FumenError):
    """A piece placement falls outside the field (caller precondition)."""


class DecodeError(FumenError):
    """A fumen string could not be decoded."""


class HeaderError(DecodeError):
    """Missing or unknown version header."""


class AlphabetError(DecodeError):
    """A character outside the 64-symbol table where a digit was expected."""


class TruncatedError(DecodeError):
    """Input ended while more symbols were required."""


class InvalidValueError(DecodeError):
    """A decoded color, piece or position is outside its enumerated range."""


class FieldFillError(DecodeError):
    """Run-length data overflows or underfills the 240-cell field."""
