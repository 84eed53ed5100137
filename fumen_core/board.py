from __future__ import annotations

from enum import IntEnum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple


class CellColor(IntEnum):
    EMPTY = 0
    I = 1
    L = 2
    O = 3
    Z = 4
    T = 5
    J = 6
    S = 7
    GREY = 8


# Wire value <-> color. Every encode/decode boundary goes through these tables.
COLOR_BY_CODE: Dict[int, CellColor] = {
    0: CellColor.EMPTY,
    1: CellColor.I,
    2: CellColor.L,
    3: CellColor.O,
    4: CellColor.Z,
    5: CellColor.T,
    6: CellColor.J,
    7: CellColor.S,
    8: CellColor.GREY,
}
CODE_BY_COLOR: Dict[CellColor, int] = {c: v for v, c in COLOR_BY_CODE.items()}

# One letter per color for text dumps and the JSON row format.
COLOR_LETTERS: Dict[CellColor, str] = {
    CellColor.EMPTY: "_",
    CellColor.I: "I",
    CellColor.L: "L",
    CellColor.O: "O",
    CellColor.Z: "Z",
    CellColor.T: "T",
    CellColor.J: "J",
    CellColor.S: "S",
    CellColor.GREY: "X",
}
LETTER_COLORS: Dict[str, CellColor] = {s: c for c, s in COLOR_LETTERS.items()}

FIELD_WIDTH = 10
FIELD_HEIGHT = 23  # playfield rows; the garbage row is kept separately
FIELD_CELLS = FIELD_WIDTH * (FIELD_HEIGHT + 1)  # 240

Row = Tuple[CellColor, ...]     # length FIELD_WIDTH, x left to right
Field = Tuple[Row, ...]         # length FIELD_HEIGHT, index 0 is the bottom row (y-up)

EMPTY_ROW: Row = (CellColor.EMPTY,) * FIELD_WIDTH
EMPTY_FIELD: Field = (EMPTY_ROW,) * FIELD_HEIGHT


def color_from_code(value: int) -> Optional[CellColor]:
    """Look up a wire value, returning None when it names no color."""
    return COLOR_BY_CODE.get(value)


def make_row(cells: Iterable[CellColor]) -> Row:
    row = tuple(CellColor(c) for c in cells)
    if len(row) != FIELD_WIDTH:
        raise ValueError(f"Row must have {FIELD_WIDTH} cells, got {len(row)}")
    return row


def make_field(rows: Sequence[Iterable[CellColor]]) -> Field:
    if len(rows) != FIELD_HEIGHT:
        raise ValueError(f"Field must have {FIELD_HEIGHT} rows, got {len(rows)}")
    return tuple(make_row(r) for r in rows)


def row_to_str(row: Row) -> str:
    return "".join(COLOR_LETTERS[c] for c in row)


def row_from_str(text: str) -> Row:
    try:
        return make_row(LETTER_COLORS[ch] for ch in text)
    except KeyError as e:
        raise ValueError(f"Unknown cell letter {e.args[0]!r} in row {text!r}") from None


def set_cell(field: Field, x: int, y: int, color: CellColor) -> Field:
    """Return a copy of `field` with one cell replaced."""
    if not (0 <= x < FIELD_WIDTH and 0 <= y < FIELD_HEIGHT):
        raise ValueError(f"Cell ({x}, {y}) is outside the field")
    rows: List[List[CellColor]] = [list(r) for r in field]
    rows[y][x] = color
    return tuple(tuple(r) for r in rows)


def pretty(
    field: Field,
    garbage_row: Optional[Row] = None,
    marks: Iterable[Tuple[int, int]] = (),
    skip_empty: bool = True,
) -> str:
    """Render the field top row first, drawing `marks` cells as '#'.
    Empty rows above the stack are dropped by default."""
    grid: List[List[str]] = [[COLOR_LETTERS[c] for c in row] for row in field]
    for x, y in marks:
        if 0 <= x < FIELD_WIDTH and 0 <= y < FIELD_HEIGHT:
            grid[y][x] = "#"
    top = FIELD_HEIGHT - 1
    if skip_empty:
        while top >= 0 and all(ch == "_" for ch in grid[top]):
            top -= 1
    lines: List[str] = ["".join(grid[y]) for y in range(top, -1, -1)]
    if garbage_row is not None:
        lines.append("-" * FIELD_WIDTH)
        lines.append(row_to_str(garbage_row))
    return "\n".join(lines)
