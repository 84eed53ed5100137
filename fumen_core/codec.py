from __future__ import annotations

from dataclasses import replace
from typing import List, Optional, Tuple

from .alphabet import BASE64_CHARS, DigitReader, encode_number
from .board import EMPTY_FIELD, EMPTY_ROW
from .comment import decode_comment, encode_comment
from .document import Fumen
from .errors import DecodeError, HeaderError, InvalidValueError, PlacementError
from .field import (
    MAX_UNCHANGED_RUN,
    UNCHANGED_MARKER,
    apply_deltas,
    decode_deltas,
    encode_deltas,
    field_deltas,
    is_unchanged,
    linearize,
)
from .page import Page
from .piece import piece_from_format
from .transition import next_page

HEADER = "v115@"

# Page flag word: piece number + FLAG_UNIT * flags
FLAG_UNIT = 240 * 32
FLAG_RISE = 1
FLAG_MIRROR = 2
FLAG_GUIDELINE = 4  # first page only
FLAG_COMMENT = 8
FLAG_NO_LOCK = 16


def page_number(page: Page) -> int:
    """The three-digit header word of a page, without the document flag."""
    piece = page.piece.format_number() if page.piece is not None else 0
    flags = (
        (FLAG_RISE if page.rise else 0)
        + (FLAG_MIRROR if page.mirror else 0)
        + (FLAG_COMMENT if page.comment is not None else 0)
        + (0 if page.lock else FLAG_NO_LOCK)
    )
    return piece + FLAG_UNIT * flags


def encode(fumen: Fumen) -> str:
    """Encodes a document. Raises PlacementError for pieces outside the field."""
    data: List[str] = list(HEADER)
    previous = linearize(EMPTY_FIELD, EMPTY_ROW)
    # (index of the run-count digit in `data`, pages after the first in the run)
    unchanged_run: Optional[Tuple[int, int]] = None

    for i, page in enumerate(fumen.pages):
        deltas = field_deltas(previous, linearize(page.field, page.garbage_row))
        if is_unchanged(deltas):
            if unchanged_run is None:
                data.extend(UNCHANGED_MARKER)
                unchanged_run = (len(data), 0)
                data.append(BASE64_CHARS[0])
            else:
                index, count = unchanged_run
                count += 1
                data[index] = BASE64_CHARS[count]
                unchanged_run = None if count == MAX_UNCHANGED_RUN else (index, count)
        else:
            unchanged_run = None
            data.extend(encode_deltas(deltas))

        number = page_number(page)
        if i == 0 and fumen.guideline:
            number += FLAG_UNIT * FLAG_GUIDELINE
        data.extend(encode_number(number, 3))

        if page.comment is not None:
            data.extend(encode_comment(page.comment))

        following = next_page(page)
        previous = linearize(following.field, following.garbage_row)

    return "".join(data)


def decode(data: str) -> Fumen:
    """Decodes a fumen string. Raises a DecodeError subclass on malformed input."""
    if not isinstance(data, str) or not data.startswith(HEADER):
        raise HeaderError(f"Expected {HEADER!r} header")
    reader = DigitReader(data, len(HEADER))
    fumen = Fumen()
    unchanged_pages = 0

    while reader.has_more():
        try:
            page = fumen.add_page()
        except PlacementError as e:
            raise InvalidValueError(str(e)) from e

        if unchanged_pages == 0:
            deltas = decode_deltas(reader)
            if is_unchanged(deltas):
                unchanged_pages = reader.read(1, "unchanged page count")
            field, garbage_row = apply_deltas(page.field, page.garbage_row, deltas)
            page = replace(page, field=field, garbage_row=garbage_row)
        else:
            unchanged_pages -= 1

        number = reader.read(3, "page flags")
        piece = piece_from_format(number % 8, number // 8 % 4, number // 32 % 240)
        flags = number // FLAG_UNIT
        comment = decode_comment(reader) if flags & FLAG_COMMENT else None
        page = replace(
            page,
            piece=piece,
            rise=bool(flags & FLAG_RISE),
            mirror=bool(flags & FLAG_MIRROR),
            lock=not (flags & FLAG_NO_LOCK),
            comment=comment,
        )
        fumen.pages[-1] = page
        if len(fumen.pages) == 1:
            fumen.guideline = bool(flags & FLAG_GUIDELINE)

    if fumen.pages:
        # The last page's piece must lock inside the field too.
        try:
            next_page(fumen.pages[-1])
        except PlacementError as e:
            raise InvalidValueError(str(e)) from e
    return fumen


def try_decode(data: str) -> Optional[Fumen]:
    """Like decode, but returns None for malformed input."""
    try:
        return decode(data)
    except DecodeError:
        return None
