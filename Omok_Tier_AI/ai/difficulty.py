"""Difficulty tiers: fixed search parameters per tier and the policy that applies them."""

import enum
import random
from dataclasses import dataclass

from Omok_Tier_AI.Board import opponent
from Omok_Tier_AI.engine import rules

from . import move_selector
from . import opening_book
from .search_minimax import MinimaxSearcher

EASY_BLOCK_PROBABILITY = 0.7
EASY_WEIGHT_BASE = 15


@dataclass(frozen=True)
class TierParams:
    depth: int
    time_limit_ms: int
    advanced_eval: bool
    iterative: bool = False
    use_opening_book: bool = False
    candidate_radius: int = 2


class Difficulty(enum.Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    MASTER = "master"

    @property
    def params(self) -> TierParams:
        return _TIER_PARAMS[self]

    @classmethod
    def parse(cls, level):
        """Return the tier named by `level`, or None if it is not recognised."""
        if isinstance(level, cls):
            return level
        try:
            return cls(str(level).strip().lower())
        except ValueError:
            return None


_TIER_PARAMS = {
    Difficulty.EASY: TierParams(depth=0, time_limit_ms=0, advanced_eval=False, candidate_radius=1),
    Difficulty.MEDIUM: TierParams(depth=2, time_limit_ms=1000, advanced_eval=False),
    Difficulty.HARD: TierParams(depth=4, time_limit_ms=3000, advanced_eval=True),
    Difficulty.MASTER: TierParams(
        depth=6, time_limit_ms=2000, advanced_eval=True, iterative=True, use_opening_book=True
    ),
}


def easy_move(board, player, rng=None):
    """
    Take an immediate win, usually block an immediate loss, otherwise pick a
    nearby cell at random weighted toward the center.
    """
    rng = rng or random
    candidates = move_selector.generate_candidates(board, radius=Difficulty.EASY.params.candidate_radius)
    if not candidates:
        return board.center
    # Scan in a fixed order so a seeded rng reproduces the same game.
    candidates.sort(key=lambda m: (m[1], m[0]))

    for x, y in candidates:
        if rules.is_winning_move(board, x, y, player):
            return (x, y)

    opp = opponent(player)
    for x, y in candidates:
        if rules.is_winning_move(board, x, y, opp) and rng.random() < EASY_BLOCK_PROBABILITY:
            return (x, y)

    cx, cy = board.center
    weights = [max(1, EASY_WEIGHT_BASE - (abs(x - cx) + abs(y - cy))) for x, y in candidates]
    return rng.choices(candidates, weights=weights, k=1)[0]


def choose_move(difficulty, board, player, patterns=None, rng=None, stats=None):
    """Dispatch one decision to the policy of `difficulty`."""
    params = difficulty.params
    if difficulty is Difficulty.EASY:
        return easy_move(board, player, rng=rng)

    if params.use_opening_book:
        book_move = opening_book.consult(board, player, rng=rng)
        if book_move is not None:
            return book_move

    searcher = MinimaxSearcher(patterns=patterns, stats=stats)
    if params.iterative:
        return searcher.find_best_move_iterative(
            board, player, params.depth, params.time_limit_ms, advanced_eval=params.advanced_eval
        )
    return searcher.find_best_move(
        board, player, params.depth, time_limit_ms=params.time_limit_ms, advanced_eval=params.advanced_eval
    )
