"""Move validation and time control for the match loop."""

import time


def check_move(move, board, deadline=None):
    """
    Validate a move against time, shape, bounds, and occupancy.
    Raises ValueError/TimeoutError on invalid moves.
    """
    if deadline is not None and time.time() > deadline:
        raise TimeoutError("Move exceeded allotted time")

    try:
        x, y = move
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Malformed move {move!r}") from exc
    if not board.in_bounds(x, y):
        raise ValueError("Move out of bounds")
    if not board.is_empty(x, y):
        raise ValueError("Cell already occupied")

    return True
