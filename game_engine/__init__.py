"""
Game engine for tic-tac-toe.
Handles the board, win/draw rules, the turn state machine and the AI opponent.
"""

__version__ = "1.0.0"

from .board import Board, Mark, GameError, IllegalCellError
from .win_checker import WinChecker, Outcome, OutcomeStatus, evaluate
from .ai_player import AIPlayer
from .scheduler import Scheduler, ScheduledHandle, ManualScheduler, TkScheduler
from .move_validator import MoveValidator, IllegalMoveError
from .config import GameConfig, Mode
from .game_state import GameEngine, GameSession, Move
