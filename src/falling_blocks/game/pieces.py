

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, List, Tuple

import numpy as np


BLOCK_SIZE = 4
BOARD_WIDTH = 30
BOARD_HEIGHT = 30

SPAWN_X = BOARD_WIDTH // 2 - BLOCK_SIZE // 2
SPAWN_Y = 0


class TetrominoType(IntEnum):
    I = 0
    O = 1
    T = 2
    S = 3
    Z = 4
    J = 5
    L = 6


class ColorTag(IntEnum):
    CYAN = 1
    YELLOW = 2
    MAGENTA = 3
    GREEN = 4
    RED = 5
    BLUE = 6
    BROWN = 7


Mask = np.ndarray


def _template(rows: List[List[int]]) -> Mask:
    mask = np.array(rows, dtype=np.bool_)
    mask.setflags(write=False)
    return mask


# Unrotated reference orientation, all in a fixed 4x4 bounding box.
SHAPES: Dict[TetrominoType, Mask] = {
    TetrominoType.I: _template([[0, 0, 0, 0], [1, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]]),
    TetrominoType.O: _template([[0, 0, 0, 0], [0, 1, 1, 0], [0, 1, 1, 0], [0, 0, 0, 0]]),
    TetrominoType.T: _template([[0, 0, 0, 0], [0, 1, 0, 0], [1, 1, 1, 0], [0, 0, 0, 0]]),
    TetrominoType.S: _template([[0, 0, 0, 0], [0, 1, 1, 0], [1, 1, 0, 0], [0, 0, 0, 0]]),
    TetrominoType.Z: _template([[0, 0, 0, 0], [1, 1, 0, 0], [0, 1, 1, 0], [0, 0, 0, 0]]),
    TetrominoType.J: _template([[0, 0, 0, 0], [1, 0, 0, 0], [1, 1, 1, 0], [0, 0, 0, 0]]),
    TetrominoType.L: _template([[0, 0, 0, 0], [0, 0, 1, 0], [1, 1, 1, 0], [0, 0, 0, 0]]),
}

for _kind, _mask in SHAPES.items():
    assert _mask.shape == (BLOCK_SIZE, BLOCK_SIZE), f"{_kind.name} template must be 4x4"
    assert int(_mask.sum()) == 4, f"{_kind.name} template must have 4 cells"
assert set(SHAPES) == set(TetrominoType)


def color_for(kind: TetrominoType) -> ColorTag:
    return ColorTag(int(kind) + 1)


def rotate_cw(mask: Mask) -> Mask:
    """Rotate a 4x4 mask 90 degrees clockwise inside its bounding box.

    ``result[j][3 - i] == mask[i][j]``. Returns a new array; the input is untouched.
    """
    return np.ascontiguousarray(np.rot90(mask, 1, axes=(1, 0)))


@dataclass(eq=False)
class Piece:
    kind: TetrominoType
    mask: Mask = field(repr=False)
    x: int = SPAWN_X
    y: int = SPAWN_Y

    @classmethod
    def spawn(cls, kind: TetrominoType | int) -> "Piece":
        kind = TetrominoType(kind)
        return cls(kind=kind, mask=SHAPES[kind].copy(), x=SPAWN_X, y=SPAWN_Y)

    @property
    def color(self) -> ColorTag:
        return color_for(self.kind)

    def rotated(self) -> "Piece":
        """Candidate piece with the clockwise mask at the same position."""
        return Piece(self.kind, rotate_cw(self.mask), self.x, self.y)

    def copy(self) -> "Piece":
        return Piece(self.kind, self.mask.copy(), self.x, self.y)

    def move_to_spawn(self) -> None:
        self.x = SPAWN_X
        self.y = SPAWN_Y

    def cells(self) -> List[Tuple[int, int]]:
        """Occupied (row, col) offsets inside the bounding box."""
        rows, cols = np.nonzero(self.mask)
        return [(int(i), int(j)) for i, j in zip(rows, cols)]

    def cells_at(self, origin_x: int, origin_y: int) -> List[Tuple[int, int]]:
        return [(origin_x + j, origin_y + i) for i, j in self.cells()]

    def lowest_row(self) -> int:
        return max(i for i, _ in self.cells())
