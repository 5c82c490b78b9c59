"""Candidate move generation (radius frontier) and quick single-cell move scoring."""

from Omok_Tier_AI.Board import DIRECTIONS, EMPTY, opponent

from . import heuristic

# Blocking an opponent shape is valued slightly below building the same shape.
BLOCK_WEIGHT = 0.9
SCAN_REACH = 4


def generate_candidates(board, radius=2):
    """
    Empty cells within Chebyshev distance `radius` of any stone, de-duplicated.
    - If board empty: return center only.
    """
    size = board.size
    cells = board.cells
    candidates = set()
    has_stone = False

    for oy in range(size):
        for ox in range(size):
            if cells[oy][ox] == EMPTY:
                continue
            has_stone = True
            for dy in range(-radius, radius + 1):
                ny = oy + dy
                if ny < 0 or ny >= size:
                    continue
                for dx in range(-radius, radius + 1):
                    nx = ox + dx
                    if 0 <= nx < size and cells[ny][nx] == EMPTY:
                        candidates.add((nx, ny))

    if not has_stone:
        return [board.center]
    return list(candidates)


def _scan(board, x, y, dx, dy, color):
    """Walk up to SCAN_REACH cells from (x, y); return (run, open) for color."""
    run = 0
    for k in range(1, SCAN_REACH + 1):
        cx, cy = x + dx * k, y + dy * k
        if not board.in_bounds(cx, cy):
            return run, False
        v = board.cells[cy][cx]
        if v == color:
            run += 1
        else:
            return run, v == EMPTY
    return run, False


def _line_shape(board, x, y, dx, dy, color):
    forward, open_forward = _scan(board, x, y, dx, dy, color)
    backward, open_backward = _scan(board, x, y, -dx, -dy, color)
    return 1 + forward + backward, int(open_forward) + int(open_backward)


def score_move_quick(board, x, y, player, patterns=None):
    """
    Constant-time ordering heuristic for placing `player` at (x, y):
    attack value of the runs it builds, plus BLOCK_WEIGHT times the opponent
    runs it cuts, plus a small center bonus. Never recurses.
    """
    patterns = patterns or heuristic.DEFAULT_PATTERNS
    opp = opponent(player)
    score = 0
    for dx, dy in DIRECTIONS:
        length, open_ends = _line_shape(board, x, y, dx, dy, player)
        score += patterns.score(length, open_ends)

        length, open_ends = _line_shape(board, x, y, dx, dy, opp)
        score += patterns.score(length, open_ends) * BLOCK_WEIGHT

    score += heuristic.center_bonus(board, x, y)
    return score


def ordered_moves(board, player, radius=2, patterns=None):
    """Candidates as [((x, y), score), ...], best quick score first."""
    scored = [
        (move, score_move_quick(board, move[0], move[1], player, patterns=patterns))
        for move in generate_candidates(board, radius=radius)
    ]
    # Ties break on (y, x) so the order does not depend on set iteration.
    scored.sort(key=lambda item: (-item[1], item[0][1], item[0][0]))
    return scored
