"""Self-play runner: batches of AI-vs-AI games across weighted tier matchups."""

from __future__ import annotations

import argparse
import json
import random
import statistics
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple

from Omok_Tier_AI.Board import BLACK, WHITE, opponent
from Omok_Tier_AI.GomokuAI import AIPlayer
from Omok_Tier_AI.Omokgame import DRAW, Omokgame
from Omok_Tier_AI.Player import Player
from Omok_Tier_AI.ai import heuristic, move_selector
from Omok_Tier_AI.engine import rules
from Omok_Tier_AI.utils import config
from Omok_Tier_AI.utils.logger import configure_logging, log_event


@dataclass(frozen=True)
class Matchup:
    black: str
    white: str
    share: float


# Medium is fast enough for bulk play; some easy games add variety.
DEFAULT_MATCHUPS = (
    Matchup("medium", "medium", 0.70),
    Matchup("medium", "easy", 0.15),
    Matchup("easy", "medium", 0.15),
)


def schedule(total_games: int, matchups=DEFAULT_MATCHUPS) -> List[Tuple[str, str]]:
    """
    Expand matchup shares into a list of (black_tier, white_tier), one per game.
    Games left over after flooring go to the largest remainders; a group of
    equal remainders is only seated whole, otherwise its games go to the first matchup.
    """
    quotas = [total_games * m.share for m in matchups]
    counts = [int(q) for q in quotas]
    leftover = total_games - sum(counts)

    remainders = sorted({q - c for q, c in zip(quotas, counts)}, reverse=True)
    for remainder in remainders:
        if leftover <= 0 or remainder <= 0:
            break
        tied = [i for i, (q, c) in enumerate(zip(quotas, counts)) if q - c == remainder]
        if len(tied) > leftover:
            break
        for i in tied:
            counts[i] += 1
        leftover -= len(tied)
    if leftover > 0:
        counts[0] += leftover

    plan: List[Tuple[str, str]] = []
    for m, n in zip(matchups, counts):
        plan.extend([(m.black, m.white)] * n)
    return plan[:total_games]


class _Recorder(Player):
    """Wraps a player to count moves that block an immediate opponent five."""

    def __init__(self, inner: Player):
        super().__init__(inner.color)
        self.inner = inner
        self.blocks = 0

    def next_move(self, board, deadline=None):
        move = self.inner.next_move(board, deadline=deadline)
        x, y = move
        if board.is_empty(x, y) and rules.is_winning_move(board, x, y, opponent(self.color)):
            self.blocks += 1
        return move


def play_game(
    black_tier: str,
    white_tier: str,
    *,
    board_size: int = 15,
    patterns=None,
    rng: random.Random | None = None,
    random_open: int = 0,
    move_timeout: float | None = None,
) -> dict:
    """Play one game and return its record."""
    rng = rng or random.Random()
    black = _Recorder(AIPlayer(BLACK, difficulty=black_tier, board_size=board_size, patterns=patterns, rng=rng))
    white = _Recorder(AIPlayer(WHITE, difficulty=white_tier, board_size=board_size, patterns=patterns, rng=rng))
    game = Omokgame(
        board_size=board_size,
        black_player=black,
        white_player=white,
        move_timeout=move_timeout,
        logger=lambda _msg: None,
    )

    # Optional random opening to diversify games
    for _ in range(random_open):
        choices = move_selector.generate_candidates(game.board, radius=1)
        if game.play_move(rng.choice(sorted(choices))) is not None:
            break

    winner = game.result if game.is_over else game.play()
    return {
        "black": black_tier,
        "white": white_tier,
        "winner": winner,
        "moves": [list(m) for m in game.moves],
        "total_moves": len(game.moves),
        "blocks": black.blocks + white.blocks,
        "win_line": game.win_line,
    }


def summarize(games: List[dict]) -> dict:
    """Aggregate results per tier and overall."""
    by_tier: Counter = Counter()
    played: Counter = Counter()
    draws = 0
    for g in games:
        played[g["black"]] += 1
        played[g["white"]] += 1
        if g["winner"] == BLACK:
            by_tier[g["black"]] += 1
        elif g["winner"] == WHITE:
            by_tier[g["white"]] += 1
        elif g["winner"] == DRAW:
            draws += 1
    lengths = [g["total_moves"] for g in games]
    return {
        "games": len(games),
        "black_wins": sum(1 for g in games if g["winner"] == BLACK),
        "white_wins": sum(1 for g in games if g["winner"] == WHITE),
        "draws": draws,
        "wins_by_tier": dict(by_tier),
        "games_by_tier": dict(played),
        "mean_length": statistics.mean(lengths) if lengths else 0.0,
        "total_blocks": sum(g["blocks"] for g in games),
    }


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Run AI-vs-AI self-play games between difficulty tiers")
    parser.add_argument("--games", type=int, default=None, help="Number of games (default from settings)")
    parser.add_argument("--settings", default="config/settings.yaml", help="Path to settings YAML")
    parser.add_argument("--patterns", default="config/patterns.yaml", help="Path to pattern weights YAML")
    parser.add_argument("--random-open", type=int, default=None, help="Random opening moves per game")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible runs")
    parser.add_argument("--out", default=None, help="Write games and summary as JSON to this path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log search statistics")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    configure_logging(args.verbose)
    settings = config.load_settings(args.settings)
    config.apply_settings(settings)
    patterns = heuristic.load_patterns(config.resolve_project_path(args.patterns))

    total = args.games if args.games is not None else settings.get("games", 20)
    random_open = args.random_open if args.random_open is not None else settings.get("random_open", 0)
    rng = random.Random(args.seed)

    games = []
    for idx, (black_tier, white_tier) in enumerate(schedule(total), start=1):
        record = play_game(
            black_tier,
            white_tier,
            board_size=settings.get("board_size", 15),
            patterns=patterns,
            rng=rng,
            random_open=random_open,
        )
        games.append(record)
        log_event(f"Game {idx}/{total}: {black_tier} vs {white_tier} -> winner={record['winner']} in {record['total_moves']} moves")

    summary = summarize(games)
    log_event(f"Summary: {json.dumps(summary)}")

    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        with open(out_path, "w", encoding="utf-8") as f:
            json.dump({"summary": summary, "games": games}, f, indent=2)
        log_event(f"Wrote {out_path}")
    return summary


if __name__ == "__main__":
    main()
