"""CLI options for selecting difficulty tiers, rules, and config paths."""

TIERS = ["easy", "medium", "hard", "master"]


def build_parser():
    import argparse

    parser = argparse.ArgumentParser(description="Omok tiered AI (five in a row, 15x15)")
    parser.add_argument("--settings", default="config/settings.yaml", help="Path to settings YAML")
    parser.add_argument("--patterns", default="config/patterns.yaml", help="Path to pattern weights YAML")
    parser.add_argument("--difficulty", choices=TIERS, help="Tier for both sides (default from settings)")
    parser.add_argument("--black", choices=TIERS, help="Tier for black")
    parser.add_argument("--white", choices=TIERS, help="Tier for white")
    parser.add_argument("--timeout", type=float, help="Referee seconds per move (default from settings)")
    parser.add_argument("--allow-overline", action="store_true", help="Let six or more in a row win")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the stochastic tiers")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log search statistics")
    return parser


def parse_args(argv=None):
    return build_parser().parse_args(argv)
