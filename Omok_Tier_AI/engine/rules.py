"""Five-in-a-row rule enforcement: win detection (exact five by default) and draw."""

from contextlib import contextmanager

from Omok_Tier_AI.Board import DIRECTIONS, EMPTY, Board

WIN_LENGTH = 5

# Process-wide policy: when False only an exact five wins; overlines (6+) do not.
ALLOW_OVERLINE = False


def set_allow_overline(flag):
    global ALLOW_OVERLINE
    ALLOW_OVERLINE = bool(flag)


def _is_winning_length(length: int) -> bool:
    if ALLOW_OVERLINE:
        return length >= WIN_LENGTH
    return length == WIN_LENGTH


@contextmanager
def simulate(board: Board, x: int, y: int, color: int):
    board._push_stone(x, y, color)
    try:
        yield
    finally:
        board._pop_stone(x, y)


def winning_line(board: Board, x: int, y: int, color: int):
    """Return the five winning cells through (x, y) for color, or None.

    Assumes the stone is already placed. The cells are ordered ascending
    along the winning axis.
    """
    for dx, dy in DIRECTIONS:
        line = board.collect_line(x, y, dx, dy, color)
        if _is_winning_length(len(line)):
            return line[:WIN_LENGTH]
    return None


def is_win_after_move(board: Board, x: int, y: int, color: int) -> bool:
    """Assumes stone is already placed."""
    return winning_line(board, x, y, color) is not None


def is_winning_move(board: Board, x: int, y: int, color: int) -> bool:
    """True if placing color at (x, y) would complete a winning run right now."""
    for dx, dy in DIRECTIONS:
        total = 1 + board.count_dir(x, y, dx, dy, color) + board.count_dir(x, y, -dx, -dy, color)
        if _is_winning_length(total):
            return True
    return False


def check_win(board: Board, color: int) -> bool:
    """Scan the whole board for a winning run of color."""
    cells = board.cells
    size = board.size
    for y in range(size):
        row = cells[y]
        for x in range(size):
            if row[x] != color:
                continue
            for dx, dy in DIRECTIONS:
                # Only measure a run from its first stone along this axis.
                px, py = x - dx, y - dy
                if 0 <= px < size and 0 <= py < size and cells[py][px] == color:
                    continue
                if _is_winning_length(1 + board.count_dir(x, y, dx, dy, color)):
                    return True
    return False


def is_board_full(board: Board) -> bool:
    return all(EMPTY not in row for row in board.cells)
