

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Callable, Dict, Optional, Tuple

import numpy as np

from .grid import GameGrid
from .hold import HoldSlot
from .pieces import BOARD_HEIGHT, BOARD_WIDTH, Piece
from .queue import PieceQueue
from .rules import ScoringRules

logger = logging.getLogger(__name__)


class Command(IntEnum):
    MOVE_LEFT = 0
    MOVE_RIGHT = 1
    SOFT_DROP = 2
    ROTATE_CW = 3
    HARD_DROP = 4
    PAUSE = 5
    RESUME = 6
    HOLD = 7
    QUIT = 8


class GameStatus(Enum):
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclass
class GameConfig:
    random_seed: Optional[int] = None
    preview_depth: int = 3
    tick_interval_ms: int = 200
    max_episode_steps: int = 10000


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of the engine handed to renderers, once per frame."""

    grid: np.ndarray
    active: Piece
    ghost_y: int
    preview: Tuple[Piece, ...]
    held: Optional[Piece]
    can_hold: bool
    score: int
    lines_cleared_total: int
    paused: bool
    game_over: bool


class FallingBlockGame:
    """Single-threaded falling-block engine.

    The driving loop calls :meth:`tick` for gravity and :meth:`handle_command`
    for player input, one at a time. Blocked moves, rotations and holds are
    normal outcomes: the command methods return ``False`` and leave the state
    untouched. ``GAME_OVER`` is terminal until :meth:`reset`.
    """

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None) -> None:
        self.config = config or GameConfig()
        if self.config.preview_depth < 1:
            raise ValueError(f"preview_depth must be >= 1, got {self.config.preview_depth}")
        self.rules = rules or ScoringRules()
        self.rng = random.Random(self.config.random_seed)
        self.grid = GameGrid(BOARD_WIDTH, BOARD_HEIGHT)
        self.queue = PieceQueue(self.config.preview_depth, rng=self.rng)
        self.hold_slot = HoldSlot()
        self.score = 0
        self.lines_cleared_total = 0
        self.pieces_locked = 0
        self.status = GameStatus.RUNNING
        self.quit_requested = False
        self.active_piece: Piece = self.queue.dequeue_next()
        self._handlers: Dict[Command, Callable[[], bool]] = {
            Command.MOVE_LEFT: self.move_left,
            Command.MOVE_RIGHT: self.move_right,
            Command.SOFT_DROP: self.soft_drop,
            Command.ROTATE_CW: self.rotate_cw,
            Command.HARD_DROP: self.hard_drop,
            Command.PAUSE: self.pause,
            Command.RESUME: self.resume,
            Command.HOLD: self.hold,
            Command.QUIT: self.request_quit,
        }

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.rng.seed(seed)
        self.grid.reset()
        self.queue.clear()
        self.hold_slot.clear()
        self.score = 0
        self.lines_cleared_total = 0
        self.pieces_locked = 0
        self.status = GameStatus.RUNNING
        self.quit_requested = False
        self.active_piece = self.queue.dequeue_next()
        logger.info("Game reset (seed=%s)", seed)

    # ---- state queries -----------------------------------------------------------

    @property
    def paused(self) -> bool:
        return self.status is GameStatus.PAUSED

    @property
    def game_over(self) -> bool:
        return self.status is GameStatus.GAME_OVER

    @property
    def preview(self) -> Tuple[Piece, ...]:
        return self.queue.lookahead

    @property
    def held_piece(self) -> Optional[Piece]:
        held = self.hold_slot.piece
        return held.copy() if held is not None else None

    def drop_distance(self) -> int:
        """Rows the active piece can fall before it rests on something."""
        piece = self.active_piece
        distance = 0
        while self.grid.is_valid_placement(piece, piece.x, piece.y + distance + 1):
            distance += 1
        return distance

    def get_state(self) -> np.ndarray:
        # Overlay current piece on a copy of the grid for observation
        state = self.grid.clone_state()
        if not self.game_over:
            piece = self.active_piece
            for x, y in piece.cells_at(piece.x, piece.y):
                if 0 <= y < self.grid.height and 0 <= x < self.grid.width:
                    # Negative marks the falling piece
                    state[y, x] = -int(piece.color)
        return state

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            grid=self.grid.clone_state(),
            active=self.active_piece.copy(),
            ghost_y=self.active_piece.y + self.drop_distance(),
            preview=self.preview,
            held=self.held_piece,
            can_hold=self.hold_slot.can_hold_again,
            score=self.score,
            lines_cleared_total=self.lines_cleared_total,
            paused=self.paused,
            game_over=self.game_over,
        )

    def get_game_stats(self) -> dict:
        return {
            "final_score": self.score,
            "pieces_locked": self.pieces_locked,
            "lines_cleared": self.lines_cleared_total,
            "max_height": self.grid.get_max_height(),
            "avg_lines_per_piece": self.lines_cleared_total / max(1, self.pieces_locked),
        }

    # ---- entry points ------------------------------------------------------------

    def tick(self) -> int:
        """One gravity step. Returns the number of rows cleared by a lock, if any."""
        if self.status is not GameStatus.RUNNING:
            return 0
        if self._try_move(0, 1):
            return 0
        return self._lock_and_spawn()

    def handle_command(self, command: Command | int) -> bool:
        """Apply one player command. Returns whether it changed the game."""
        return self._handlers[Command(command)]()

    # ---- commands ----------------------------------------------------------------

    def move_left(self) -> bool:
        return self._running() and self._try_move(-1, 0)

    def move_right(self) -> bool:
        return self._running() and self._try_move(1, 0)

    def soft_drop(self) -> bool:
        return self._running() and self._try_move(0, 1)

    def rotate_cw(self) -> bool:
        if not self._running():
            return False
        candidate = self.active_piece.rotated()
        if not self.grid.is_valid_placement(candidate, candidate.x, candidate.y):
            return False
        self.active_piece.mask = candidate.mask
        return True

    def hard_drop(self) -> bool:
        if not self._running():
            return False
        self.active_piece.y += self.drop_distance()
        self._lock_and_spawn()
        return True

    def hold(self) -> bool:
        if not self._running() or not self.hold_slot.can_hold_again:
            return False
        self.active_piece = self.hold_slot.hold(self.active_piece, self.queue)
        logger.debug("Held piece, now playing %s", self.active_piece.kind.name)
        self._check_spawn()
        return True

    def pause(self) -> bool:
        if self.status is not GameStatus.RUNNING:
            return False
        self.status = GameStatus.PAUSED
        logger.debug("Paused")
        return True

    def resume(self) -> bool:
        if self.status is not GameStatus.PAUSED:
            return False
        self.status = GameStatus.RUNNING
        logger.debug("Resumed")
        return True

    def request_quit(self) -> bool:
        # Only a signal for the driving loop; the game state is left alone
        self.quit_requested = True
        return True

    # ---- internals ---------------------------------------------------------------

    def _running(self) -> bool:
        return self.status is GameStatus.RUNNING

    def _try_move(self, dx: int, dy: int) -> bool:
        piece = self.active_piece
        new_x = piece.x + dx
        new_y = piece.y + dy
        if not self.grid.is_valid_placement(piece, new_x, new_y):
            return False
        piece.x = new_x
        piece.y = new_y
        return True

    def _lock_and_spawn(self) -> int:
        locked = self.active_piece
        self.grid.merge(locked)
        lines = self.grid.clear_full_rows()
        self.score += self.rules.score_for_lines(lines)
        self.lines_cleared_total += lines
        self.pieces_locked += 1
        logger.debug("Locked %s at (%d, %d), cleared %d", locked.kind.name, locked.x, locked.y, lines)

        self.active_piece = self.queue.dequeue_next()
        self.hold_slot.rearm()
        self._check_spawn()
        return lines

    def _check_spawn(self) -> None:
        piece = self.active_piece
        if not self.grid.is_valid_placement(piece, piece.x, piece.y):
            self.status = GameStatus.GAME_OVER
            logger.info("Game over, final score %d", self.score)
