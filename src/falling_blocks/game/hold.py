

from __future__ import annotations

from typing import Optional

from .pieces import Piece
from .queue import PieceQueue


class HoldSlot:
    """Keeps at most one piece aside.

    ``can_hold_again`` allows a single hold per spawned piece: it is cleared
    by every hold/swap and only re-armed by :meth:`rearm`, which the engine
    calls when a piece is spawned from the queue after a lock.
    """

    def __init__(self) -> None:
        self.piece: Optional[Piece] = None
        self.can_hold_again = True

    @property
    def is_empty(self) -> bool:
        return self.piece is None

    def rearm(self) -> None:
        self.can_hold_again = True

    def clear(self) -> None:
        self.piece = None
        self.can_hold_again = True

    def hold(self, active: Piece, queue: PieceQueue) -> Piece:
        """Set ``active`` aside and return the piece that replaces it.

        Returns ``active`` itself when holding is currently blocked.
        """
        if not self.can_hold_again:
            return active

        if self.piece is None:
            self.piece = active.copy()
            incoming = queue.dequeue_next()
        else:
            incoming, self.piece = self.piece, active.copy()
            incoming.move_to_spawn()

        self.can_hold_again = False
        return incoming
