"""Game module for Falling Blocks.

Exports the core game engine and supporting classes:
- GameGrid: Board of locked cells, collision testing and row clearing
- Piece: Tetromino instance with its 4x4 mask and position
- TetrominoType / ColorTag: The 7 shapes and their colour tags
- PieceQueue: Random upcoming pieces with a fixed lookahead
- HoldSlot: One-piece hold with the once-per-spawn rule
- ScoringRules: Flat points per cleared row
- FallingBlockGame: Tick/command state machine
"""

from .grid import Cell, GameGrid
from .pieces import (
    BLOCK_SIZE,
    BOARD_HEIGHT,
    BOARD_WIDTH,
    SHAPES,
    SPAWN_X,
    SPAWN_Y,
    ColorTag,
    Piece,
    TetrominoType,
    rotate_cw,
)
from .queue import PieceQueue
from .hold import HoldSlot
from .rules import ScoringRules
from .core import Command, FallingBlockGame, GameConfig, GameSnapshot, GameStatus

__all__ = [
    "BLOCK_SIZE",
    "BOARD_HEIGHT",
    "BOARD_WIDTH",
    "SHAPES",
    "SPAWN_X",
    "SPAWN_Y",
    "Cell",
    "ColorTag",
    "Command",
    "FallingBlockGame",
    "GameConfig",
    "GameGrid",
    "GameSnapshot",
    "GameStatus",
    "HoldSlot",
    "Piece",
    "PieceQueue",
    "ScoringRules",
    "TetrominoType",
    "rotate_cw",
]
