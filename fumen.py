from __future__ import annotations

# Facade module that re-exports the fumen core for the Flask app, the CLI
# and tests. Single-responsibility modules live under fumen_core/*.

from fumen_core.alphabet import BASE64_CHARS, DigitReader, decode_char, encode_digit, encode_number
from fumen_core.board import (
    EMPTY_FIELD,
    EMPTY_ROW,
    FIELD_CELLS,
    FIELD_HEIGHT,
    FIELD_WIDTH,
    CellColor,
    Field,
    Row,
    make_field,
    make_row,
    row_from_str,
    row_to_str,
)
from fumen_core.codec import HEADER, decode, encode, page_number, try_decode
from fumen_core.comment import decode_comment, encode_comment, escape, pack, unescape, unpack
from fumen_core.document import Fumen
from fumen_core.errors import (
    AlphabetError,
    DecodeError,
    FieldFillError,
    FumenError,
    HeaderError,
    InvalidValueError,
    PlacementError,
    TruncatedError,
)
from fumen_core.field import (
    UNCHANGED_MARKER,
    apply_deltas,
    decode_deltas,
    encode_deltas,
    field_deltas,
    linearize,
)
from fumen_core.jsonio import (
    fumen_from_json,
    fumen_to_json,
    page_from_json,
    page_to_json,
    piece_from_json,
    piece_to_json,
)
from fumen_core.page import Page
from fumen_core.piece import Piece, PieceType, Rotation, piece_from_format
from fumen_core.transition import clear_lines, lock_piece, mirror_field, next_page, rise_field


def main() -> None:
    # CLI driver delegated to fumen_core.cli
    from fumen_core.cli import main as _main
    raise SystemExit(_main())


if __name__ == '__main__':
    main()
