from __future__ import annotations

import numpy as np
import pytest

from falling_blocks.game import Cell, GameGrid, Piece, TetrominoType, rotate_cw


def _all_rotations(kind: TetrominoType):
    piece = Piece.spawn(kind)
    for _ in range(4):
        yield piece
        piece = piece.rotated()


@pytest.mark.parametrize("kind", list(TetrominoType))
def test_out_of_bounds_placements_rejected(kind: TetrominoType) -> None:
    grid = GameGrid(width=8, height=6)
    for piece in _all_rotations(kind):
        for x in range(-4, grid.width + 1):
            for y in range(-4, grid.height + 1):
                in_bounds = all(
                    0 <= gx < grid.width and gy < grid.height for gx, gy in piece.cells_at(x, y)
                )
                assert grid.is_valid_placement(piece, x, y) == in_bounds


def test_cells_above_board_only_checked_against_walls() -> None:
    grid = GameGrid(width=6, height=6)
    grid.grid[0, :] = 3
    piece = Piece.spawn(TetrominoType.I)  # occupies mask row 1
    assert grid.is_valid_placement(piece, 0, -2)
    assert not grid.is_valid_placement(piece, 0, -1)
    assert not grid.is_valid_placement(piece, -1, -2)
    assert not grid.is_valid_placement(piece, 3, -2)


def test_occupied_cell_blocks_placement() -> None:
    grid = GameGrid(width=10, height=10)
    piece = Piece.spawn(TetrominoType.O)
    grid.grid[5, 4] = 1
    assert not grid.is_valid_placement(piece, 3, 3)
    assert grid.is_valid_placement(piece, 5, 3)


def test_merge_writes_piece_color() -> None:
    grid = GameGrid(width=10, height=10)
    piece = Piece.spawn(TetrominoType.T)
    piece.x, piece.y = 2, 4
    grid.merge(piece)
    for x, y in piece.cells_at(2, 4):
        assert grid.cell(x, y) == Cell(occupied=True, color=int(piece.color))
    assert int(grid.occupied.sum()) == 4
    assert grid.cell(0, 0) == Cell(occupied=False, color=0)


def test_clear_two_full_rows_above_partial_row() -> None:
    grid = GameGrid(width=4, height=3)
    grid.grid[0, :] = 1
    grid.grid[1, :] = 2
    partial = np.array([5, 0, 6, 0], dtype=np.int8)
    grid.grid[2, :] = partial

    assert grid.clear_full_rows() == 2
    assert not grid.grid[:2].any()
    assert np.array_equal(grid.grid[2], partial)


def test_clear_preserves_order_of_remaining_rows() -> None:
    grid = GameGrid(width=3, height=5)
    grid.grid[1] = [1, 0, 0]
    grid.grid[2] = [2, 2, 2]
    grid.grid[3] = [0, 3, 0]
    grid.grid[4] = [4, 4, 4]

    assert grid.clear_full_rows() == 2
    expected = np.array([[0, 0, 0], [0, 0, 0], [0, 0, 0], [1, 0, 0], [0, 3, 0]], dtype=np.int8)
    assert np.array_equal(grid.grid, expected)
    assert grid.grid.shape == (5, 3)


def test_clear_without_full_rows_is_noop() -> None:
    grid = GameGrid(width=3, height=3)
    grid.grid[2] = [1, 1, 0]
    before = grid.clone_state()
    assert grid.clear_full_rows() == 0
    assert np.array_equal(grid.grid, before)


def test_max_height_and_reset() -> None:
    grid = GameGrid(width=3, height=5)
    assert grid.get_max_height() == 0
    grid.grid[3, 1] = 1
    assert grid.get_max_height() == 2
    grid.reset()
    assert not grid.occupied.any()


def test_invalid_dimensions_rejected() -> None:
    with pytest.raises(ValueError):
        GameGrid(width=0, height=5)


def test_rotated_mask_validity_uses_same_rules() -> None:
    grid = GameGrid(width=10, height=10)
    piece = Piece.spawn(TetrominoType.I)
    vertical = Piece(piece.kind, rotate_cw(piece.mask), 0, 0)
    # Vertical I sits in mask column 2
    assert grid.is_valid_placement(vertical, -2, 0)
    assert not grid.is_valid_placement(vertical, -3, 0)
    assert not grid.is_valid_placement(vertical, 0, 7)
