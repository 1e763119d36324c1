

from __future__ import annotations

from typing import NamedTuple

import numpy as np

from .pieces import BOARD_HEIGHT, BOARD_WIDTH, Piece


class Cell(NamedTuple):
    occupied: bool
    color: int


class GameGrid:
    """Fixed-size board of locked cells.

    Cells hold a colour tag: 0 for empty, 1..7 for a locked piece of that
    colour, so a cell's colour is meaningful exactly when it is occupied.
    Row 0 is the top of the board.
    """

    def __init__(self, width: int = BOARD_WIDTH, height: int = BOARD_HEIGHT) -> None:
        self.width = int(width)
        self.height = int(height)
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"grid dimensions must be positive, got {self.width}x{self.height}")
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(0)

    def cell(self, x: int, y: int) -> Cell:
        value = int(self.grid[y, x])
        return Cell(occupied=value != 0, color=value)

    @property
    def occupied(self) -> np.ndarray:
        return self.grid != 0

    def is_valid_placement(self, piece: Piece, x: int, y: int) -> bool:
        """Check whether ``piece``'s mask fits with its top-left corner at (x, y).

        Cells above the board (negative rows) are only checked against the
        side walls.
        """
        for grid_x, grid_y in piece.cells_at(x, y):
            if grid_x < 0 or grid_x >= self.width or grid_y >= self.height:
                return False
            if grid_y >= 0 and self.grid[grid_y, grid_x] != 0:
                return False
        return True

    def merge(self, piece: Piece) -> None:
        """Lock ``piece`` into the board. Assumes the placement was validated."""
        value = int(piece.color)
        for grid_x, grid_y in piece.cells_at(piece.x, piece.y):
            if grid_y >= 0:
                self.grid[grid_y, grid_x] = value

    def clear_full_rows(self) -> int:
        full_rows = np.where(np.all(self.grid != 0, axis=1))[0]
        if full_rows.size == 0:
            return 0
        num = int(full_rows.size)
        # Remove full rows and add empty rows at the top
        remaining = np.delete(self.grid, full_rows, axis=0)
        new_rows = np.zeros((num, self.width), dtype=np.int8)
        self.grid = np.vstack((new_rows, remaining))
        return num

    def get_max_height(self) -> int:
        # y=0 is top; find first non-empty from top
        non_empty_rows = np.where(np.any(self.grid != 0, axis=1))[0]
        if non_empty_rows.size == 0:
            return 0
        return self.height - int(non_empty_rows[0])

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
