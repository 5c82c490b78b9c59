"""Minimax with alpha-beta pruning, tactical shortcuts, and iterative deepening under a time budget."""

import logging
import time

from Omok_Tier_AI.Board import opponent
from Omok_Tier_AI.engine import rules
from Omok_Tier_AI.utils import timer

from . import heuristic
from . import move_selector

LOGGER = logging.getLogger(__name__)

INF = 1e9
WIN_SCORE = 1e8
TIME_CHECK_INTERVAL = 1000  # poll the clock every this many nodes
ROOT_MOVE_LIMIT = 20
# Iterative deepening stops starting new depths past this share of the budget.
ITERATIVE_TIME_SHARE = 0.7


def branch_limit(depth):
    """Moves expanded at a node with `depth` plies remaining."""
    if depth <= 1:
        return 10
    if depth <= 2:
        return 15
    return 20


class MinimaxSearcher:
    """Encapsulates the state and logic for one top-level search at a time."""

    def __init__(self, patterns=None, stats=None):
        self.patterns = patterns or heuristic.DEFAULT_PATTERNS
        self.stats_list = stats

        # Per-call state, reset by every find_best_move* call
        self.node_counter = 0
        self.start_time = 0.0
        self.time_limit_ms = 0
        self.timed_out = False
        self.use_advanced_eval = False
        self.completed_depth = 0

    def _reset(self, time_limit_ms, advanced_eval):
        self.node_counter = 0
        self.start_time = time.time()
        self.time_limit_ms = time_limit_ms
        self.timed_out = False
        self.use_advanced_eval = advanced_eval
        self.completed_depth = 0

    def ordered_moves(self, board, player):
        return [move for move, _ in move_selector.ordered_moves(board, player, patterns=self.patterns)]

    def evaluate(self, board, player):
        if self.use_advanced_eval:
            return heuristic.evaluate_board_advanced(board, player, patterns=self.patterns)
        return heuristic.evaluate_board(board, player, patterns=self.patterns)

    def find_best_move(self, board, player, depth, time_limit_ms=0, advanced_eval=False):
        """
        Fixed-depth alpha-beta over the top root candidates.
        The board is mutated during search and restored before returning.
        """
        self._reset(time_limit_ms, advanced_eval)
        moves = self.ordered_moves(board, player)
        if not moves:
            return board.center
        if len(moves) == 1:
            return moves[0]

        forced = self._find_forced_move(board, player, moves)
        if forced is not None:
            return forced

        best_move, _ = self._search_root(board, player, moves[:ROOT_MOVE_LIMIT], depth)
        if not self.timed_out:
            self.completed_depth = depth
        self._finish(player)
        return best_move

    def find_best_move_iterative(self, board, player, max_depth, time_limit_ms, advanced_eval=True):
        """
        Iterative deepening from depth 1 to max_depth. A depth that times out
        never replaces the best move of the last completed depth.
        """
        self._reset(time_limit_ms, advanced_eval)
        moves = self.ordered_moves(board, player)
        if not moves:
            return board.center
        if len(moves) == 1:
            return moves[0]

        forced = self._find_forced_move(board, player, moves)
        if forced is not None:
            return forced

        root_moves = moves[:ROOT_MOVE_LIMIT]
        best_move = None
        for depth in range(1, max_depth + 1):
            depth_move, depth_score = self._search_root(board, player, root_moves, depth)
            if self.timed_out:
                break
            best_move = depth_move
            self.completed_depth = depth

            if depth_score >= WIN_SCORE:
                break
            if time_limit_ms and timer.elapsed_ms(self.start_time) > time_limit_ms * ITERATIVE_TIME_SHARE:
                break

        self._finish(player)
        # Fallback if no depth completed in time
        return best_move if best_move is not None else root_moves[0]

    def _find_forced_move(self, board, player, moves):
        win_move = self._find_immediate_win(board, player, moves)
        if win_move is not None:
            return win_move
        return self._find_immediate_block(board, player, moves)

    def _find_immediate_win(self, board, color, moves):
        for x, y in moves:
            with rules.simulate(board, x, y, color):
                if rules.is_win_after_move(board, x, y, color):
                    return (x, y)
        return None

    def _find_immediate_block(self, board, color, moves):
        opp = opponent(color)
        for x, y in moves:
            with rules.simulate(board, x, y, opp):
                if rules.is_win_after_move(board, x, y, opp):
                    return (x, y)
        return None

    def _search_root(self, board, player, root_moves, depth):
        """Search every root move at `depth`. Returns (best_move, best_score)."""
        opp = opponent(player)
        best_move = root_moves[0]
        best_score = -INF
        for x, y in root_moves:
            board._push_stone(x, y, player)
            try:
                score = self._alphabeta(board, depth - 1, best_score, INF, player, opp, False)
            finally:
                board._pop_stone(x, y)

            if self.timed_out:
                break
            # Strict comparison keeps the earliest (best-ordered) move on ties.
            if score > best_score:
                best_score = score
                best_move = (x, y)
        return best_move, best_score

    def _time_ok(self):
        self.node_counter += 1
        if self.time_limit_ms > 0 and self.node_counter % TIME_CHECK_INTERVAL == 0:
            if timer.elapsed_ms(self.start_time) > self.time_limit_ms:
                self.timed_out = True
        return not self.timed_out

    def _alphabeta(self, board, depth, alpha, beta, perspective, to_move, maximizing):
        if not self._time_ok():
            return 0

        # Terminal state check; a sooner win keeps more depth and scores higher.
        if rules.check_win(board, perspective):
            return WIN_SCORE + depth
        if rules.check_win(board, opponent(perspective)):
            return -(WIN_SCORE + depth)
        if depth == 0 or rules.is_board_full(board):
            return self.evaluate(board, perspective)

        moves = self.ordered_moves(board, to_move)[:branch_limit(depth)]
        if not moves:
            return self.evaluate(board, perspective)

        value = -INF if maximizing else INF
        for x, y in moves:
            board._push_stone(x, y, to_move)
            try:
                score = self._alphabeta(board, depth - 1, alpha, beta, perspective, opponent(to_move), not maximizing)
            finally:
                board._pop_stone(x, y)

            if self.timed_out:
                return value

            if maximizing:
                value = max(value, score)
                alpha = max(alpha, value)
            else:
                value = min(value, score)
                beta = min(beta, value)
            if alpha >= beta:
                break
        return value

    def _finish(self, player):
        total_time = max(time.time() - self.start_time, 1e-9)
        LOGGER.debug(
            "search player=%s depth=%s nodes=%s time=%.1fms timed_out=%s",
            player, self.completed_depth, self.node_counter, total_time * 1000.0, self.timed_out,
        )
        if self.stats_list is not None:
            self.stats_list.append({
                "player": player,
                "depth": self.completed_depth,
                "nodes": self.node_counter,
                "time": total_time,
                "nps": self.node_counter / total_time,
                "timed_out": self.timed_out,
            })


def find_best_move(board, player, depth, time_limit_ms=0, advanced_eval=False, patterns=None, stats=None):
    """Public function for a fixed-depth search. Instantiates and uses MinimaxSearcher."""
    searcher = MinimaxSearcher(patterns=patterns, stats=stats)
    return searcher.find_best_move(board, player, depth, time_limit_ms=time_limit_ms, advanced_eval=advanced_eval)


def find_best_move_iterative(board, player, max_depth, time_limit_ms, advanced_eval=True, patterns=None, stats=None):
    """Public function for an iterative-deepening search under a time budget."""
    searcher = MinimaxSearcher(patterns=patterns, stats=stats)
    return searcher.find_best_move_iterative(
        board, player, max_depth, time_limit_ms=time_limit_ms, advanced_eval=advanced_eval
    )
