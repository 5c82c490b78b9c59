"""Omok_Tier_AI package exports."""

from .Board import Board, BLACK, WHITE, EMPTY, opponent
from .Player import Player
from .Omokgame import Omokgame
from .GomokuAI import GomokuAI, AIPlayer

# Subpackages for rules, AI search, and helpers
from . import ai, engine, utils

__all__ = [
    "Board",
    "BLACK",
    "WHITE",
    "EMPTY",
    "opponent",
    "Player",
    "Omokgame",
    "GomokuAI",
    "AIPlayer",
    "ai",
    "engine",
    "utils",
]
