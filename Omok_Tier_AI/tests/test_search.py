import pytest

from Omok_Tier_AI.Board import BLACK, WHITE, Board, opponent
from Omok_Tier_AI.ai import search_minimax
from Omok_Tier_AI.ai.search_minimax import INF, WIN_SCORE, MinimaxSearcher, branch_limit
from Omok_Tier_AI.engine import rules


def _board(black=(), white=()):
    b = Board(size=15)
    for x, y in black:
        b.place(x, y, BLACK)
    for x, y in white:
        b.place(x, y, WHITE)
    return b


def _draw_grid():
    return [[BLACK if (y + x // 2) % 2 == 0 else WHITE for x in range(15)] for y in range(15)]


def _quiet_position():
    return _board(black=[(7, 7), (6, 7)], white=[(8, 8), (6, 6)])


def test_branch_limits():
    assert branch_limit(1) == 10
    assert branch_limit(2) == 15
    assert branch_limit(3) == 20
    assert branch_limit(6) == 20


@pytest.mark.parametrize("advanced", [False, True])
def test_takes_immediate_win(advanced):
    b = _board(black=[(7, 5), (7, 6), (7, 7), (7, 8)], white=[(0, 0), (14, 14), (0, 14)])
    assert search_minimax.find_best_move(b, BLACK, 2, advanced_eval=advanced) in {(7, 4), (7, 9)}


def test_blocks_immediate_loss():
    b = _board(black=[(10, 10), (11, 11), (12, 3)], white=[(5, 5), (5, 6), (5, 7), (5, 8)])
    assert search_minimax.find_best_move(b, BLACK, 2) in {(5, 4), (5, 9)}


def test_own_win_beats_block():
    b = _board(black=[(7, 5), (7, 6), (7, 7), (7, 8)], white=[(3, 5), (3, 6), (3, 7), (3, 8)])
    assert search_minimax.find_best_move(b, WHITE, 2) in {(3, 4), (3, 9)}
    assert search_minimax.find_best_move(b, BLACK, 2) in {(7, 4), (7, 9)}


def test_empty_and_full_boards_return_center():
    assert search_minimax.find_best_move(Board(size=15), BLACK, 2) == (7, 7)
    assert search_minimax.find_best_move_iterative(Board(size=15), WHITE, 4, 100) == (7, 7)

    full = Board.from_grid(_draw_grid())
    assert search_minimax.find_best_move(full, BLACK, 2) == (7, 7)


def test_single_empty_cell_is_returned():
    grid = _draw_grid()
    grid[3][11] = 0
    b = Board.from_grid(grid)
    assert search_minimax.find_best_move(b, WHITE, 4) == (11, 3)
    assert search_minimax.find_best_move_iterative(b, BLACK, 6, 2000) == (11, 3)


def test_search_restores_board():
    b = _quiet_position()
    grid = b.to_grid()
    history = list(b.history)
    move = search_minimax.find_best_move(b, BLACK, 2)
    assert b.to_grid() == grid
    assert b.history == history
    assert b.move_count == 4
    assert b.is_empty(*move)


def test_iterative_completes_depths_without_budget():
    searcher = MinimaxSearcher()
    b = _quiet_position()
    move = searcher.find_best_move_iterative(b, BLACK, 2, 0, advanced_eval=False)
    assert searcher.completed_depth == 2
    assert not searcher.timed_out
    assert b.is_empty(*move)


def test_timeout_falls_back_to_best_ordered_move(monkeypatch):
    monkeypatch.setattr(search_minimax, "TIME_CHECK_INTERVAL", 1)
    monkeypatch.setattr(search_minimax.timer, "elapsed_ms", lambda start: 1e9)
    stats = []
    searcher = MinimaxSearcher(stats=stats)
    b = _quiet_position()

    move = searcher.find_best_move_iterative(b, BLACK, 6, 1)
    assert searcher.timed_out
    assert searcher.completed_depth == 0
    assert move == searcher.ordered_moves(b, BLACK)[0]
    assert stats[-1]["timed_out"] is True
    assert stats[-1]["depth"] == 0


def test_fixed_depth_timeout_still_returns_legal_move(monkeypatch):
    monkeypatch.setattr(search_minimax, "TIME_CHECK_INTERVAL", 1)
    monkeypatch.setattr(search_minimax.timer, "elapsed_ms", lambda start: 1e9)
    searcher = MinimaxSearcher()
    b = _quiet_position()
    move = searcher.find_best_move(b, WHITE, 4, time_limit_ms=1)
    assert move == searcher.ordered_moves(b, WHITE)[0]
    assert b.move_count == 4


def test_stats_recorded_per_search():
    stats = []
    b = _quiet_position()
    search_minimax.find_best_move(b, BLACK, 1, stats=stats)
    assert len(stats) == 1
    entry = stats[0]
    assert set(entry) == {"player", "depth", "nodes", "time", "nps", "timed_out"}
    assert entry["player"] == BLACK
    assert entry["depth"] == 1
    assert entry["nodes"] > 0
    assert entry["timed_out"] is False


def test_forced_moves_skip_tree_search():
    stats = []
    b = _board(black=[(7, 5), (7, 6), (7, 7), (7, 8)], white=[(0, 0), (14, 14), (0, 14)])
    search_minimax.find_best_move(b, BLACK, 4, stats=stats)
    assert stats == []


def _open_four_position():
    return _board(black=[(7, 5), (7, 6), (7, 7), (7, 8)], white=[(0, 0), (14, 14), (0, 14)])


def _plain_minimax(searcher, board, depth, perspective, to_move, maximizing):
    """Exhaustive minimax over the same capped, ordered move lists the searcher expands."""
    if rules.check_win(board, perspective):
        return WIN_SCORE + depth
    if rules.check_win(board, opponent(perspective)):
        return -(WIN_SCORE + depth)
    if depth == 0 or rules.is_board_full(board):
        return searcher.evaluate(board, perspective)
    moves = searcher.ordered_moves(board, to_move)[:branch_limit(depth)]
    if not moves:
        return searcher.evaluate(board, perspective)
    values = []
    for x, y in moves:
        with rules.simulate(board, x, y, to_move):
            values.append(_plain_minimax(searcher, board, depth - 1, perspective, opponent(to_move), not maximizing))
    return max(values) if maximizing else min(values)


def test_terminal_node_scores_win_plus_remaining_depth():
    b = _board(black=[(3, 3), (4, 3), (5, 3), (6, 3), (7, 3)], white=[(3, 4), (4, 4), (5, 4), (6, 4)])
    searcher = MinimaxSearcher()
    searcher._reset(0, False)
    assert searcher._alphabeta(b, 3, -INF, INF, BLACK, WHITE, False) == WIN_SCORE + 3
    assert searcher._alphabeta(b, 3, -INF, INF, WHITE, WHITE, True) == -(WIN_SCORE + 3)
    assert searcher._alphabeta(b, 0, -INF, INF, BLACK, WHITE, False) == WIN_SCORE


def test_sooner_win_scores_higher():
    searcher = MinimaxSearcher()
    searcher._reset(0, False)
    b = _open_four_position()
    # Black completes five on the next ply, leaving two plies of depth unused.
    next_ply = searcher._alphabeta(b, 3, -INF, INF, BLACK, BLACK, True)
    assert next_ply == WIN_SCORE + 2
    assert searcher._alphabeta(b, 3, -INF, INF, WHITE, BLACK, False) == -(WIN_SCORE + 2)

    b.place(7, 9, BLACK)
    already_won = searcher._alphabeta(b, 3, -INF, INF, BLACK, WHITE, False)
    assert already_won > next_ply
    assert b.move_count == 8


@pytest.mark.parametrize(
    "black, white, depth, advanced",
    [
        ([(7, 7), (6, 7)], [(8, 8), (6, 6)], 1, False),
        ([(7, 7), (6, 7)], [(8, 8), (6, 6)], 2, False),
        ([(7, 7), (8, 6), (6, 8)], [(7, 6), (7, 8), (9, 9)], 2, False),
        ([(4, 4), (5, 5)], [(5, 4), (10, 10)], 2, True),
    ],
)
def test_alphabeta_matches_plain_minimax(black, white, depth, advanced):
    b = _board(black=black, white=white)
    searcher = MinimaxSearcher()
    searcher._reset(0, advanced)
    grid = b.to_grid()
    for perspective in (BLACK, WHITE):
        expected = _plain_minimax(searcher, b, depth, perspective, perspective, True)
        assert searcher._alphabeta(b, depth, -INF, INF, perspective, perspective, True) == expected
    assert b.to_grid() == grid
    assert not searcher.timed_out


def test_timed_out_depth_keeps_previous_best(monkeypatch):
    b = _quiet_position()
    depth_one_move = MinimaxSearcher().find_best_move(b, BLACK, 1)
    original = MinimaxSearcher._search_root

    def time_out_past_depth_one(self, board, player, root_moves, depth):
        if depth >= 2:
            self.timed_out = True
            return (-1, -1), 0.0
        return original(self, board, player, root_moves, depth)

    monkeypatch.setattr(MinimaxSearcher, "_search_root", time_out_past_depth_one)
    searcher = MinimaxSearcher()
    move = searcher.find_best_move_iterative(b, BLACK, 4, 0, advanced_eval=False)
    assert move == depth_one_move
    assert searcher.completed_depth == 1
    assert searcher.timed_out


def test_iterative_stops_once_a_win_is_proven(monkeypatch):
    depths = []

    def winning_root(self, board, player, root_moves, depth):
        depths.append(depth)
        return root_moves[1], WIN_SCORE + depth

    monkeypatch.setattr(MinimaxSearcher, "_search_root", winning_root)
    searcher = MinimaxSearcher()
    b = _quiet_position()
    move = searcher.find_best_move_iterative(b, BLACK, 6, 0)
    assert depths == [1]
    assert move == searcher.ordered_moves(b, BLACK)[1]
    assert searcher.completed_depth == 1


def test_iterative_runs_every_depth_without_a_win(monkeypatch):
    depths = []

    def quiet_root(self, board, player, root_moves, depth):
        depths.append(depth)
        return root_moves[0], 0.0

    monkeypatch.setattr(MinimaxSearcher, "_search_root", quiet_root)
    searcher = MinimaxSearcher()
    searcher.find_best_move_iterative(_quiet_position(), BLACK, 5, 0)
    assert depths == [1, 2, 3, 4, 5]
    assert searcher.completed_depth == 5


@pytest.mark.parametrize("elapsed, completed", [(750.0, 1), (650.0, 2)])
def test_iterative_stops_past_time_share(monkeypatch, elapsed, completed):
    # 750 of 1000 ms is past the 70% cut; 650 is not, so depth 2 is searched too.
    monkeypatch.setattr(search_minimax.timer, "elapsed_ms", lambda start: elapsed)
    searcher = MinimaxSearcher()
    b = _quiet_position()
    move = searcher.find_best_move_iterative(b, BLACK, 2, 1000, advanced_eval=False)
    assert searcher.completed_depth == completed
    assert not searcher.timed_out
    assert b.is_empty(*move)
