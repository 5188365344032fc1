"""
Move validator for the tic-tac-toe engine.
Validates that moves follow the rules before the engine applies them.
"""

from typing import TYPE_CHECKING, Optional
from dataclasses import dataclass

from .board import GameError, Mark
from .config import Mode

if TYPE_CHECKING:
    from .game_state import GameSession


class IllegalMoveError(GameError):
    """Raised when a move is attempted after the game ended, out of turn, or on a bad cell."""


@dataclass
class ValidationResult:
    """Result of move validation."""
    is_valid: bool
    error_message: Optional[str] = None


class MoveValidator:
    """
    Validates moves.

    Rules:
    1. Game must not be over
    2. Can only place on cells inside the board
    3. Can only place on empty cells
    4. Against the AI, the human may only move on their own turn
    """

    def __init__(self, human_player: Mark = Mark.X):
        self.human_player = human_player

    def validate_move(
        self,
        session: "GameSession",
        row: int,
        col: int,
        by_opponent: bool = False
    ) -> ValidationResult:
        """
        Validate a move.

        Args:
            session: Current game session.
            row: Row to place the mark.
            col: Column to place the mark.
            by_opponent: True when the automated player is moving.

        Returns:
            ValidationResult with is_valid and error_message.
        """
        # Check if game is over
        if session.is_game_over:
            return ValidationResult(
                is_valid=False,
                error_message="Game is already over!"
            )

        # Against the AI, each side may only move on its own turn
        if session.mode == Mode.AI:
            if by_opponent and session.current_player == self.human_player:
                return ValidationResult(
                    is_valid=False,
                    error_message="It's not the AI's turn!"
                )
            if not by_opponent and session.current_player != self.human_player:
                return ValidationResult(
                    is_valid=False,
                    error_message=f"It's {session.current_player.value}'s turn (AI)!"
                )

        board = session.board

        # Check if row/col are in valid range
        if not board.in_bounds(row, col):
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid position ({row}, {col}). Must be 0-{board.size - 1}."
            )

        # Check if cell is empty
        occupant = board.get(row, col)
        if occupant is not None:
            return ValidationResult(
                is_valid=False,
                error_message=f"Cell ({row}, {col}) is already occupied by {occupant.value}"
            )

        return ValidationResult(is_valid=True)



# Quick test
if __name__ == "__main__":
    from .game_state import GameSession

    validator = MoveValidator()
    session = GameSession(mode=Mode.AI)

    result = validator.validate_move(session, 1, 1)
    print(f"Move (1,1): valid={result.is_valid}, error={result.error_message}")

    result = validator.validate_move(session, 5, 5)
    print(f"Move (5,5): valid={result.is_valid}, error={result.error_message}")

    result = validator.validate_move(session, 0, 0, by_opponent=True)
    print(f"AI move on X's turn: valid={result.is_valid}, error={result.error_message}")
