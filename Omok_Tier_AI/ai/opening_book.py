"""Opening book for the first few stones (used by the Master tier only)."""

import random
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Optional, Tuple

from Omok_Tier_AI.Board import EMPTY

Move = Tuple[int, int]

DIAGONAL_OFFSETS = ((-1, -1), (-1, 1), (1, -1), (1, 1))
KNIGHT_OFFSETS = (
    (-2, -1), (-2, 1), (-1, -2), (-1, 2),
    (1, -2), (1, 2), (2, -1), (2, 1),
)


@dataclass(frozen=True)
class BookEntry:
    """A predicate over the board paired with exactly one kind of outcome.

    - move: a fixed cell.
    - choices: cells picked uniformly at random among those still empty.
    - generator: callable(board, player, rng) -> Optional[Move].
    """

    name: str
    predicate: Callable
    move: Optional[Move] = None
    choices: Tuple[Move, ...] = ()
    generator: Optional[Callable] = None

    def propose(self, board, player, rng):
        if self.move is not None:
            return self.move if board.is_empty(*self.move) else None
        if self.choices:
            valid = [m for m in self.choices if board.is_empty(*m)]
            return rng.choice(valid) if valid else None
        if self.generator is not None:
            return self.generator(board, player, rng)
        return None


def _center_taken(board):
    cx, cy = board.center
    return board.cells[cy][cx] != EMPTY


def _knight_move(board, player, rng):
    cx, cy = board.center
    valid = [(cx + dx, cy + dy) for dx, dy in KNIGHT_OFFSETS if board.is_empty(cx + dx, cy + dy)]
    return rng.choice(valid) if valid else None


@lru_cache(maxsize=None)
def build_opening_book(size):
    """Ordered book entries for a board of the given size."""
    c = size // 2
    return (
        BookEntry("first-stone-center", lambda b: b.move_count == 0, move=(c, c)),
        BookEntry(
            "reply-diagonal",
            lambda b: b.move_count == 1 and _center_taken(b),
            choices=tuple((c + dx, c + dy) for dx, dy in DIAGONAL_OFFSETS),
        ),
        BookEntry("reply-take-center", lambda b: b.move_count == 1 and not _center_taken(b), move=(c, c)),
        BookEntry(
            "third-stone-knight",
            lambda b: b.move_count == 2 and _center_taken(b),
            generator=_knight_move,
        ),
    )


def consult(board, player, rng=None):
    """Return the first book move that applies, or None to defer to search."""
    rng = rng or random
    for entry in build_opening_book(board.size):
        if not entry.predicate(board):
            continue
        move = entry.propose(board, player, rng)
        if move is not None:
            return move
    return None
