"""
Configuration for the tic-tac-toe game engine.
All the tunable constants for the board, the automated opponent and logging.
"""

from enum import Enum

from .board import Mark


class Mode(Enum):
    """Who plays the O side."""
    LOCAL = "local"   # Two humans at one board
    AI = "ai"         # Human (X) vs automated opponent (O)


class GameConfig:
    """
    Configuration class for engine settings.
    Command-line flags in main.py override these per run.
    """

    # ==================== BOARD SETTINGS ====================
    # Tic-tac-toe is a 3x3 grid
    BOARD_SIZE = 3

    # ==================== PLAYER SETTINGS ====================
    # The human always plays X and moves first; the automated player is O
    AI_PLAYER = Mark.O

    # Mode for a fresh engine
    DEFAULT_MODE = Mode.LOCAL

    # ==================== OPPONENT SETTINGS ====================
    # Pause before the automated move is applied (milliseconds)
    OPPONENT_DELAY_MS = 650

    # Seed for the opponent's random fallback (None = unpredictable)
    RANDOM_SEED = None

    # ==================== DEBUG SETTINGS ====================
    LOG_LEVEL = "WARNING"
    LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
