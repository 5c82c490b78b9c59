"""Entry point for an AI-vs-AI match. Load config, wire players, start Omokgame."""

import random

from Omok_Tier_AI.GomokuAI import AIPlayer
from Omok_Tier_AI.Omokgame import DRAW, Omokgame
from Omok_Tier_AI.Board import BLACK, WHITE
from Omok_Tier_AI.ai import heuristic
from Omok_Tier_AI.utils import config
from Omok_Tier_AI.utils.cli import parse_args
from Omok_Tier_AI.utils.logger import configure_logging, log_event


def resolve_tiers(args, settings):
    """Per-side tier: CLI side flag > CLI --difficulty > settings side > settings default."""
    default = args.difficulty or settings.get("difficulty", "medium")
    black = args.black or (None if args.difficulty else settings.get("black_difficulty")) or default
    white = args.white or (None if args.difficulty else settings.get("white_difficulty")) or default
    return black, white


def main(argv=None):
    args = parse_args(argv)
    configure_logging(args.verbose)
    settings = config.load_settings(args.settings)
    if args.allow_overline:
        settings["allow_overline"] = True
    config.apply_settings(settings)

    patterns = heuristic.load_patterns(config.resolve_project_path(args.patterns))
    move_timeout = args.timeout or settings.get("move_timeout_seconds")
    rng = random.Random(args.seed)
    black_tier, white_tier = resolve_tiers(args, settings)

    board_size = settings.get("board_size", 15)
    black = AIPlayer(BLACK, difficulty=black_tier, board_size=board_size, patterns=patterns, rng=rng)
    white = AIPlayer(WHITE, difficulty=white_tier, board_size=board_size, patterns=patterns, rng=rng)
    log_event(f"Black: {black_tier}  White: {white_tier}")

    game = Omokgame(
        board_size=board_size,
        black_player=black,
        white_player=white,
        move_timeout=move_timeout,
        logger=log_event,
    )
    result = game.play()
    if game.win_line:
        log_event(f"Winning line: {game.win_line}")
    outcome = {BLACK: "Black wins", WHITE: "White wins", DRAW: "Draw"}
    print(outcome.get(result, "Unknown result"))
    return result


if __name__ == "__main__":
    main()
