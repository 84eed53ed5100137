from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Optional

from .board import (
    EMPTY_FIELD,
    EMPTY_ROW,
    FIELD_HEIGHT,
    CellColor,
    Field,
    Row,
    make_row,
    pretty,
    set_cell,
)
from .piece import Piece


@dataclass(frozen=True)
class Page:
    """One frame of a fumen document: a field, an optional piece and the transcription flags."""
    piece: Optional[Piece] = None
    field: Field = EMPTY_FIELD  # 23 rows, index 0 is the bottom row
    garbage_row: Row = EMPTY_ROW
    rise: bool = False
    mirror: bool = False
    lock: bool = True
    comment: Optional[str] = None

    def with_cell(self, x: int, y: int, color: CellColor) -> 'Page':
        return replace(self, field=set_cell(self.field, x, y, color))

    def with_row(self, y: int, cells: Iterable[CellColor]) -> 'Page':
        if not 0 <= y < FIELD_HEIGHT:
            raise ValueError(f"Row {y} is outside the field")
        rows = list(self.field)
        rows[y] = make_row(cells)
        return replace(self, field=tuple(rows))

    def with_garbage(self, cells: Iterable[CellColor]) -> 'Page':
        return replace(self, garbage_row=make_row(cells))

    def pretty(self) -> str:
        """Text dump of the field and garbage row, with the piece cells marked '#'."""
        marks = self.piece.cells() if self.piece is not None else ()
        return pretty(self.field, self.garbage_row, marks=marks)
