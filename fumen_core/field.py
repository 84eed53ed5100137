"""
Field delta codec.

Each page's field is stored as the difference from the previous page's
resulting field, linearised top row first with the garbage row last
(240 cells), then run-length encoded in two-digit groups.
"""
from __future__ import annotations

from typing import List, Sequence, Tuple

from .alphabet import DigitReader, encode_number
from .board import (
    CODE_BY_COLOR,
    FIELD_CELLS,
    FIELD_HEIGHT,
    FIELD_WIDTH,
    Field,
    Row,
    color_from_code,
)
from .errors import FieldFillError, InvalidValueError

NO_CHANGE = 8  # delta value of an unchanged cell
RUN_BASE = FIELD_CELLS  # value * 240 + (run length - 1)

# An all-unchanged field is just the run "240 cells of 8"; it doubles as the
# marker for the unchanged-page shorthand.
UNCHANGED_MARKER = encode_number(NO_CHANGE * RUN_BASE + FIELD_CELLS - 1, 2)
# Largest run-count digit: one marker covers at most 63 pages.
MAX_UNCHANGED_RUN = 62


def linearize(field: Field, garbage_row: Row) -> Tuple[int, ...]:
    """Wire order: playfield row 22 down to row 0, then the garbage row."""
    cells: List[int] = []
    for y in range(FIELD_HEIGHT - 1, -1, -1):
        cells.extend(CODE_BY_COLOR[c] for c in field[y])
    cells.extend(CODE_BY_COLOR[c] for c in garbage_row)
    return tuple(cells)


def field_deltas(previous: Sequence[int], current: Sequence[int]) -> List[int]:
    return [NO_CHANGE + cur - prev for prev, cur in zip(previous, current)]


def is_unchanged(deltas: Sequence[int]) -> bool:
    return all(d == NO_CHANGE for d in deltas)


def encode_deltas(deltas: Sequence[int]) -> str:
    """Run-length encode 240 deltas as two-digit groups."""
    out: List[str] = []
    prev = deltas[0]
    count = 0
    for d in deltas:
        if d == prev:
            count += 1
        else:
            out.append(encode_number(prev * RUN_BASE + count - 1, 2))
            prev = d
            count = 1
    out.append(encode_number(prev * RUN_BASE + count - 1, 2))
    return "".join(out)


def decode_deltas(reader: DigitReader) -> List[int]:
    deltas: List[int] = []
    while len(deltas) < FIELD_CELLS:
        if not reader.has_more():
            raise FieldFillError(f"Field data ended after {len(deltas)} of {FIELD_CELLS} cells")
        number = reader.read(2, "field data")
        value = number // RUN_BASE
        repeats = number % RUN_BASE + 1
        if len(deltas) + repeats > FIELD_CELLS:
            raise FieldFillError(
                f"Run of {repeats} cells overflows the field at cell {len(deltas)}"
            )
        deltas.extend([value] * repeats)
    return deltas


def apply_deltas(field: Field, garbage_row: Row, deltas: Sequence[int]) -> Tuple[Field, Row]:
    """Rebuilds the current field from the previous one and the decoded deltas."""
    previous = linearize(field, garbage_row)
    cells = []
    for i, (prev, delta) in enumerate(zip(previous, deltas)):
        color = color_from_code(prev + delta - NO_CHANGE)
        if color is None:
            raise InvalidValueError(
                f"Cell {i} decodes to color {prev + delta - NO_CHANGE}, expected 0-8"
            )
        cells.append(color)
    rows = [tuple(cells[i:i + FIELD_WIDTH]) for i in range(0, FIELD_CELLS, FIELD_WIDTH)]
    new_garbage = rows.pop()
    rows.reverse()
    return tuple(rows), new_garbage
