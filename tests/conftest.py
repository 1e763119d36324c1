from __future__ import annotations

import os

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from falling_blocks.game import FallingBlockGame, GameConfig, Piece, TetrominoType  # noqa: E402


@pytest.fixture
def game() -> FallingBlockGame:
    return FallingBlockGame(GameConfig(random_seed=1234))


def force_active(game: FallingBlockGame, kind: TetrominoType) -> Piece:
    """Replace the active piece with a fresh ``kind`` at the spawn position."""
    game.active_piece = Piece.spawn(kind)
    return game.active_piece
