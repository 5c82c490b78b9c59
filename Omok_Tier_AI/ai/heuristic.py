"""Pattern weights and whole-board evaluation (contiguous runs plus gapped 5-cell windows)."""

from dataclasses import dataclass, fields
from pathlib import Path

import yaml

from Omok_Tier_AI.Board import DIRECTIONS, EMPTY, opponent

# Opponent material is weighted slightly above our own.
DEFENSE_WEIGHT = 1.1
# Gapped-window score is blended in at half strength on top of the run scan.
WINDOW_BLEND = 0.5
CENTER_BONUS_RADIUS = 7


@dataclass(frozen=True)
class PatternTable:
    five: float = 10_000_000
    open_four: float = 1_000_000
    half_open_four: float = 100_000
    open_three: float = 10_000
    half_open_three: float = 1_000
    open_two: float = 100
    half_open_two: float = 10
    open_one: float = 1

    def __post_init__(self):
        ladder = [
            self.five, self.open_four, self.half_open_four, self.open_three,
            self.half_open_three, self.open_two, self.half_open_two, self.open_one,
        ]
        if any(higher <= lower for higher, lower in zip(ladder, ladder[1:])):
            raise ValueError("pattern weights must strictly decrease from five to open_one")
        if self.open_one < 0:
            raise ValueError("pattern weights must be non-negative")

    def score(self, length, open_ends):
        """Weight of a run of `length` stones with `open_ends` free ends."""
        if length >= 5:
            return self.five
        if open_ends == 0:
            return 0
        if length == 4:
            return self.open_four if open_ends == 2 else self.half_open_four
        if length == 3:
            return self.open_three if open_ends == 2 else self.half_open_three
        if length == 2:
            return self.open_two if open_ends == 2 else self.half_open_two
        if length == 1:
            return self.open_one if open_ends == 2 else 0
        return 0

    def window_score(self, stones):
        """Coarser weight for a 5-cell window holding `stones` of one player only."""
        if stones >= 5:
            return self.five
        if stones == 4:
            return self.half_open_four
        if stones == 3:
            return self.half_open_three * 2
        if stones == 2:
            return self.half_open_two
        return 0


DEFAULT_PATTERNS = PatternTable()


def load_patterns(path="config/patterns.yaml"):
    """Load pattern weights from YAML; fallback to defaults if the file is missing."""
    path = Path(path)
    if not path.is_absolute() and not path.exists():
        # Allow running from outside the package directory.
        candidate = Path(__file__).resolve().parents[1] / path
        if candidate.exists():
            path = candidate

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        return DEFAULT_PATTERNS

    if not isinstance(data, dict):
        raise ValueError(f"pattern file {path} must contain a mapping")
    weights = data.get("patterns", data)
    if not isinstance(weights, dict):
        raise ValueError(f"pattern weights in {path} must be a mapping of name to weight")
    known = {f.name for f in fields(PatternTable)}
    unknown = set(weights) - known
    if unknown:
        raise ValueError(f"unknown pattern names: {sorted(unknown)}")
    return PatternTable(**{name: float(value) for name, value in weights.items()})


def center_bonus(board, x, y):
    cx, cy = board.center
    return max(0, CENTER_BONUS_RADIUS - (abs(x - cx) + abs(y - cy)))


def _run_scores(board, player, patterns):
    """Sum pattern weights of every maximal run, split into (mine, theirs)."""
    cells = board.cells
    size = board.size
    mine = 0
    theirs = 0
    for dx, dy in DIRECTIONS:
        for y in range(size):
            for x in range(size):
                stone = cells[y][x]
                if stone == EMPTY:
                    continue
                # A run starts where the previous cell is off-board or a different value.
                px, py = x - dx, y - dy
                if 0 <= px < size and 0 <= py < size and cells[py][px] == stone:
                    continue

                length = 1 + board.count_dir(x, y, dx, dy, stone)
                ex, ey = x + dx * length, y + dy * length
                open_ends = 0
                if 0 <= px < size and 0 <= py < size and cells[py][px] == EMPTY:
                    open_ends += 1
                if 0 <= ex < size and 0 <= ey < size and cells[ey][ex] == EMPTY:
                    open_ends += 1

                value = patterns.score(length, open_ends)
                if stone == player:
                    mine += value
                else:
                    theirs += value
    return mine, theirs


def evaluate_board(board, player, patterns=None):
    """
    Basic evaluation from `player`'s perspective (higher is better for player).
    Scores contiguous runs by (length, open ends) and adds a small center bonus.
    """
    patterns = patterns or DEFAULT_PATTERNS
    mine, theirs = _run_scores(board, player, patterns)

    for y, row in enumerate(board.cells):
        for x, stone in enumerate(row):
            if stone == player:
                mine += center_bonus(board, x, y)

    return mine - theirs * DEFENSE_WEIGHT


def window_scores(board, player, patterns=None):
    """Score every uncontested 5-cell window. Returns (mine, theirs)."""
    patterns = patterns or DEFAULT_PATTERNS
    opp = opponent(player)
    cells = board.cells
    size = board.size
    mine = 0
    theirs = 0
    for dx, dy in DIRECTIONS:
        for y in range(size):
            for x in range(size):
                if not board.in_bounds(x + dx * 4, y + dy * 4):
                    continue
                my_count = 0
                opp_count = 0
                for k in range(5):
                    v = cells[y + dy * k][x + dx * k]
                    if v == player:
                        my_count += 1
                    elif v == opp:
                        opp_count += 1
                if my_count and not opp_count:
                    mine += patterns.window_score(my_count)
                elif opp_count and not my_count:
                    theirs += patterns.window_score(opp_count)
    return mine, theirs


def evaluate_board_advanced(board, player, patterns=None):
    """Basic evaluation plus half-weight credit for gapped shapes such as XX_XX."""
    patterns = patterns or DEFAULT_PATTERNS
    mine, theirs = window_scores(board, player, patterns)
    return evaluate_board(board, player, patterns) + (mine - theirs * DEFENSE_WEIGHT) * WINDOW_BLEND
