from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Optional, Tuple

from .board import FIELD_CELLS, FIELD_HEIGHT, FIELD_WIDTH, CellColor
from .errors import InvalidValueError, PlacementError

Coord = Tuple[int, int]  # (x, y), y-up


class PieceType(IntEnum):
    I = 1
    L = 2
    O = 3
    Z = 4
    T = 5
    J = 6
    S = 7


class Rotation(IntEnum):
    SOUTH = 0
    EAST = 1
    NORTH = 2
    WEST = 3


PIECE_BY_CODE: Dict[int, PieceType] = {
    1: PieceType.I,
    2: PieceType.L,
    3: PieceType.O,
    4: PieceType.Z,
    5: PieceType.T,
    6: PieceType.J,
    7: PieceType.S,
}
CODE_BY_PIECE: Dict[PieceType, int] = {p: v for v, p in PIECE_BY_CODE.items()}

ROTATION_BY_CODE: Dict[int, Rotation] = {
    0: Rotation.SOUTH,
    1: Rotation.EAST,
    2: Rotation.NORTH,
    3: Rotation.WEST,
}
CODE_BY_ROTATION: Dict[Rotation, int] = {r: v for v, r in ROTATION_BY_CODE.items()}

PIECE_COLORS: Dict[PieceType, CellColor] = {
    PieceType.I: CellColor.I,
    PieceType.L: CellColor.L,
    PieceType.O: CellColor.O,
    PieceType.Z: CellColor.Z,
    PieceType.T: CellColor.T,
    PieceType.J: CellColor.J,
    PieceType.S: CellColor.S,
}

# Cell offsets around the rotation center in the North orientation.
PIECE_OFFSETS: Dict[PieceType, Tuple[Coord, ...]] = {
    PieceType.I: ((-1, 0), (0, 0), (1, 0), (2, 0)),
    PieceType.O: ((0, 0), (1, 0), (0, 1), (1, 1)),
    PieceType.T: ((-1, 0), (0, 0), (1, 0), (0, 1)),
    PieceType.L: ((-1, 0), (0, 0), (1, 0), (1, 1)),
    PieceType.J: ((-1, 0), (0, 0), (1, 0), (-1, 1)),
    PieceType.S: ((-1, 0), (0, 0), (0, 1), (1, 1)),
    PieceType.Z: ((1, 0), (0, 0), (0, 1), (-1, 1)),
}

# The format centers some placements one cell away from the true rotation
# center. Values are the (dx, dy) added when going true -> format.
FORMAT_CENTER_SHIFT: Dict[Tuple[PieceType, Rotation], Coord] = {
    (PieceType.S, Rotation.EAST): (1, 0),
    (PieceType.Z, Rotation.WEST): (-1, 0),
    (PieceType.O, Rotation.WEST): (-1, 1),
    (PieceType.O, Rotation.SOUTH): (-1, 0),
    (PieceType.I, Rotation.SOUTH): (-1, 0),
    (PieceType.S, Rotation.NORTH): (0, 1),
    (PieceType.Z, Rotation.NORTH): (0, 1),
    (PieceType.O, Rotation.NORTH): (0, 1),
    (PieceType.I, Rotation.WEST): (0, 1),
}


def rotate_offset(dx: int, dy: int, rotation: Rotation) -> Coord:
    if rotation == Rotation.NORTH:
        return dx, dy
    if rotation == Rotation.EAST:
        return dy, -dx
    if rotation == Rotation.SOUTH:
        return -dx, -dy
    return -dy, dx


@dataclass(frozen=True)
class Piece:
    """A placed piece. (x, y) is the true rotation center, y-up."""
    kind: PieceType
    rotation: Rotation
    x: int
    y: int

    @property
    def color(self) -> CellColor:
        return PIECE_COLORS[self.kind]

    def cells(self) -> Tuple[Coord, ...]:
        """Absolute field cells occupied by the piece."""
        out = []
        for dx, dy in PIECE_OFFSETS[self.kind]:
            rx, ry = rotate_offset(dx, dy, self.rotation)
            out.append((rx + self.x, ry + self.y))
        return tuple(out)

    def format_coords(self) -> Coord:
        sx, sy = FORMAT_CENTER_SHIFT.get((self.kind, self.rotation), (0, 0))
        return self.x + sx, self.y + sy

    def format_position(self) -> int:
        """Single-integer cell address used on the wire, 0 is the top-left cell."""
        fx, fy = self.format_coords()
        pos = fx + (FIELD_HEIGHT - 1 - fy) * FIELD_WIDTH
        if self.x < 0 or self.y < 0 or not 0 <= fx < FIELD_WIDTH or not 0 <= pos < FIELD_CELLS:
            raise PlacementError(
                f"{self.kind.name} piece at ({self.x}, {self.y}) {self.rotation.name.lower()} "
                f"has no position in the field"
            )
        return pos

    def format_number(self) -> int:
        return (
            CODE_BY_PIECE[self.kind]
            + 8 * CODE_BY_ROTATION[self.rotation]
            + 32 * self.format_position()
        )


def piece_from_format(kind_code: int, rotation_code: int, position: int) -> Optional[Piece]:
    """Rebuild a piece from decoded header values. Kind code 0 means no piece."""
    if kind_code == 0:
        return None
    kind = PIECE_BY_CODE.get(kind_code)
    rotation = ROTATION_BY_CODE.get(rotation_code)
    if kind is None or rotation is None:
        raise InvalidValueError(f"Invalid piece kind {kind_code} / rotation {rotation_code}")
    if not 0 <= position < FIELD_CELLS:
        raise InvalidValueError(f"Piece position {position} is outside the field")
    sx, sy = FORMAT_CENTER_SHIFT.get((kind, rotation), (0, 0))
    x = position % FIELD_WIDTH - sx
    y = FIELD_HEIGHT - 1 - position // FIELD_WIDTH - sy
    if x < 0 or y < 0:
        raise InvalidValueError(
            f"{kind.name} piece at position {position} maps to a negative rotation center"
        )
    return Piece(kind=kind, rotation=rotation, x=x, y=y)
