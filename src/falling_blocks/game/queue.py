

from __future__ import annotations

import random
from collections import deque
from typing import Deque, Optional, Tuple

from .pieces import Piece, TetrominoType


class PieceQueue:
    """Upcoming pieces, drawn independently and uniformly from the 7 shapes.

    There is no 7-bag: repeats and droughts are allowed.
    """

    def __init__(self, min_depth: int = 3, rng: Optional[random.Random] = None) -> None:
        if min_depth < 1:
            raise ValueError(f"min_depth must be >= 1, got {min_depth}")
        self.min_depth = int(min_depth)
        self.rng = rng or random.Random()
        self._pieces: Deque[Piece] = deque()
        self.ensure_minimum_depth()

    def __len__(self) -> int:
        return len(self._pieces)

    def _random_piece(self) -> Piece:
        kind = self.rng.choice(list(TetrominoType))
        return Piece.spawn(kind)

    def ensure_minimum_depth(self, n: Optional[int] = None) -> None:
        target = self.min_depth if n is None else int(n)
        while len(self._pieces) < target:
            self._pieces.append(self._random_piece())

    def dequeue_next(self) -> Piece:
        if self._pieces:
            piece = self._pieces.popleft()
        else:
            piece = self._random_piece()
        self.ensure_minimum_depth()
        piece.move_to_spawn()
        return piece

    @property
    def lookahead(self) -> Tuple[Piece, ...]:
        """Copies of the next ``min_depth`` pieces; reading never consumes."""
        return tuple(p.copy() for p in list(self._pieces)[: self.min_depth])

    def clear(self) -> None:
        self._pieces.clear()
        self.ensure_minimum_depth()
