"""Decision engine entry point: pick a move for a board snapshot at a difficulty tier."""

import logging

from Omok_Tier_AI.Board import BLACK, BOARD_SIZE, WHITE, Board
from Omok_Tier_AI.Player import Player
from Omok_Tier_AI.ai import difficulty as tiers
from Omok_Tier_AI.ai.difficulty import Difficulty

LOGGER = logging.getLogger(__name__)


class GomokuAI:
    def __init__(self, difficulty="medium", board_size=BOARD_SIZE, patterns=None, rng=None, stats=None):
        self.board_size = board_size
        self.patterns = patterns
        self.rng = rng
        self.stats = stats
        self.difficulty = Difficulty.parse(difficulty) or Difficulty.MEDIUM

    @property
    def center(self):
        c = self.board_size // 2
        return (c, c)

    def set_difficulty(self, level):
        """Switch tier; unrecognised levels are ignored."""
        parsed = Difficulty.parse(level)
        if parsed is not None:
            self.difficulty = parsed

    def get_move(self, grid, player):
        """
        Return (x, y) for `player` on grid[y][x] (0 empty, 1 black, 2 white).
        The caller's grid is copied, never mutated. Malformed input yields the center cell.
        """
        board = self._to_board(grid)
        if board is None or player not in (BLACK, WHITE):
            LOGGER.warning("Malformed board or player %r; falling back to center", player)
            return self.center
        if board.is_full():
            return self.center
        return tiers.choose_move(
            self.difficulty, board, player, patterns=self.patterns, rng=self.rng, stats=self.stats
        )

    def _to_board(self, grid):
        if not isinstance(grid, (list, tuple)) or len(grid) != self.board_size:
            return None
        if not all(isinstance(row, (list, tuple)) for row in grid):
            return None
        try:
            return Board.from_grid(grid)
        except ValueError:
            return None


class AIPlayer(Player):
    """Game-loop adapter: answers next_move with a GomokuAI decision."""

    def __init__(self, color, difficulty="medium", board_size=BOARD_SIZE, patterns=None, rng=None):
        super().__init__(color)
        self.stats = []
        self.ai = GomokuAI(difficulty=difficulty, board_size=board_size, patterns=patterns, rng=rng, stats=self.stats)

    def next_move(self, board, deadline=None):
        return self.ai.get_move(board.to_grid(), self.color)
