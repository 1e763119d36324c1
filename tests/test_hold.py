from __future__ import annotations

import random

from falling_blocks.game import SPAWN_X, SPAWN_Y, HoldSlot, Piece, PieceQueue, TetrominoType


def _queue() -> PieceQueue:
    return PieceQueue(3, rng=random.Random(7))


def test_hold_into_empty_slot_draws_from_queue() -> None:
    slot = HoldSlot()
    queue = _queue()
    upcoming = queue.lookahead[0].kind
    active = Piece.spawn(TetrominoType.T)
    active.x, active.y = 4, 9

    incoming = slot.hold(active, queue)

    assert incoming.kind is upcoming
    assert (incoming.x, incoming.y) == (SPAWN_X, SPAWN_Y)
    assert slot.piece is not None and slot.piece is not active
    assert slot.piece.kind is TetrominoType.T
    assert not slot.can_hold_again


def test_second_hold_is_blocked_until_rearmed() -> None:
    slot = HoldSlot()
    queue = _queue()
    active = slot.hold(Piece.spawn(TetrominoType.T), queue)
    held = slot.piece

    again = slot.hold(active, queue)

    assert again is active
    assert slot.piece is held
    assert len(queue) == 3


def test_swap_returns_stored_piece_at_spawn() -> None:
    slot = HoldSlot()
    queue = _queue()
    active = slot.hold(Piece.spawn(TetrominoType.Z), queue)
    active.x, active.y = 2, 12
    slot.rearm()

    swapped = slot.hold(active, queue)

    assert swapped.kind is TetrominoType.Z
    assert (swapped.x, swapped.y) == (SPAWN_X, SPAWN_Y)
    assert slot.piece.kind is active.kind
    assert not slot.can_hold_again


def test_clear_empties_and_rearms() -> None:
    slot = HoldSlot()
    slot.hold(Piece.spawn(TetrominoType.O), _queue())
    slot.clear()
    assert slot.is_empty
    assert slot.can_hold_again
