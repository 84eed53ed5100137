from __future__ import annotations

from typing import List

from .board import EMPTY_ROW, FIELD_HEIGHT, FIELD_WIDTH, CellColor, Field, Row
from .errors import PlacementError
from .page import Page
from .piece import Piece


def lock_piece(field: Field, piece: Piece) -> Field:
    """Stamps the piece's cells into the field with its color."""
    rows: List[List[CellColor]] = [list(r) for r in field]
    for x, y in piece.cells():
        if not (0 <= x < FIELD_WIDTH and 0 <= y < FIELD_HEIGHT):
            raise PlacementError(
                f"{piece.kind.name} piece at ({piece.x}, {piece.y}) covers ({x}, {y}), outside the field"
            )
        rows[y][x] = piece.color
    return tuple(tuple(r) for r in rows)


def clear_lines(field: Field) -> Field:
    """Removes every full playfield row; the rows above fall down in order."""
    kept = [row for row in field if CellColor.EMPTY in row]
    kept.extend([EMPTY_ROW] * (FIELD_HEIGHT - len(kept)))
    return tuple(kept)


def rise_field(field: Field, garbage_row: Row) -> Field:
    """Pushes the field up one row and inserts the garbage row at the bottom."""
    return (garbage_row,) + tuple(field[:FIELD_HEIGHT - 1])


def mirror_field(field: Field) -> Field:
    return tuple(tuple(reversed(row)) for row in field)


def next_page(page: Page) -> Page:
    """
    Derives the page that follows `page`: lock, line clear, rise, then mirror.
    Its field is also the delta baseline for encoding/decoding the next page.
    Only `lock` carries over; piece, comment, rise and mirror are cleared.
    """
    field = page.field
    if page.piece is not None and page.lock:
        field = lock_piece(field, page.piece)
    field = clear_lines(field)
    garbage_row = page.garbage_row
    if page.rise:
        field = rise_field(field, garbage_row)
        garbage_row = EMPTY_ROW
    if page.mirror:
        field = mirror_field(field)
    return Page(field=field, garbage_row=garbage_row, lock=page.lock)
