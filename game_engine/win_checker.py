"""
Win checker for the tic-tac-toe engine.
Classifies a board as in progress, won by one mark, or drawn.
"""

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import List, Optional, Tuple

import numpy as np

from .board import EMPTY, Board, Mark

Line = Tuple[Tuple[int, int], ...]


class OutcomeStatus(Enum):
    """Whether the game goes on, and if not, how it ended."""
    IN_PROGRESS = "in_progress"
    WIN = "win"
    DRAW = "draw"


@dataclass(frozen=True)
class Outcome:
    """
    Result of evaluating a board.

    Exactly one of: in progress, a win for `winner` along `line`, or a draw.
    """
    status: OutcomeStatus
    winner: Optional[Mark] = None
    line: Optional[Line] = None

    @classmethod
    def in_progress(cls) -> "Outcome":
        return cls(OutcomeStatus.IN_PROGRESS)

    @classmethod
    def win(cls, mark: Mark, line: Line) -> "Outcome":
        return cls(OutcomeStatus.WIN, winner=mark, line=line)

    @classmethod
    def draw(cls) -> "Outcome":
        return cls(OutcomeStatus.DRAW)

    @property
    def is_in_progress(self) -> bool:
        return self.status == OutcomeStatus.IN_PROGRESS

    @property
    def is_win(self) -> bool:
        return self.status == OutcomeStatus.WIN

    @property
    def is_draw(self) -> bool:
        return self.status == OutcomeStatus.DRAW

    @property
    def is_game_over(self) -> bool:
        return not self.is_in_progress


@lru_cache(maxsize=None)
def winning_lines(size: int) -> Tuple[Line, ...]:
    """
    All lines that win on a board of the given size.

    Rows first, then columns, then the main and anti diagonals.
    """
    rows = [tuple((r, c) for c in range(size)) for r in range(size)]
    cols = [tuple((r, c) for r in range(size)) for c in range(size)]
    diagonals = [
        tuple((i, i) for i in range(size)),
        tuple((i, size - 1 - i) for i in range(size)),
    ]
    return tuple(rows + cols + diagonals)


@lru_cache(maxsize=None)
def _line_index(size: int) -> Tuple[np.ndarray, np.ndarray]:
    # Fancy-index arrays of shape (2N+2, N) picking every line at once
    lines = winning_lines(size)
    row_idx = np.array([[r for r, _ in line] for line in lines], dtype=np.intp)
    col_idx = np.array([[c for _, c in line] for line in lines], dtype=np.intp)
    return row_idx, col_idx


class WinChecker:
    """
    Checks for win conditions.

    Win condition: N marks of the same kind in a row
    (horizontally, vertically, or diagonally).
    """

    def evaluate(self, board: Board) -> Outcome:
        """
        Classify a board.

        Args:
            board: The board to check.

        Returns:
            Win for the first winning line found, else Draw if the board
            is full, else InProgress.
        """
        index = self._find_winning_index(board)
        if index is not None:
            line = winning_lines(board.size)[index]
            row, col = line[0]
            return Outcome.win(board.get(row, col), line)

        if board.is_full():
            return Outcome.draw()

        return Outcome.in_progress()

    def check_winner(self, board: Board) -> Optional[Mark]:
        """
        Check if there's a winner.

        Returns:
            The winning Mark, or None if no line is complete.
        """
        return self.evaluate(board).winner

    def check_draw(self, board: Board) -> bool:
        """A draw is a full board with no winning line."""
        return self.evaluate(board).is_draw

    def get_winning_line(self, board: Board) -> Optional[List[Tuple[int, int]]]:
        """
        Get the winning line if there is one.

        Returns:
            The winning line as list of (row, col), or None.
        """
        line = self.evaluate(board).line
        return list(line) if line is not None else None

    def _find_winning_index(self, board: Board) -> Optional[int]:
        row_idx, col_idx = _line_index(board.size)
        lines = board.cells[row_idx, col_idx]
        first = lines[:, 0]
        complete = (first != EMPTY) & (lines == first[:, None]).all(axis=1)
        hits = np.flatnonzero(complete)
        if hits.size == 0:
            return None
        return int(hits[0])


_default_checker = WinChecker()


def evaluate(board: Board) -> Outcome:
    """Classify a board with the shared WinChecker."""
    return _default_checker.evaluate(board)


# Quick test
if __name__ == "__main__":
    checker = WinChecker()

    board = Board.from_rows(["XXX", "OO.", "..."])
    print(board)
    print(f"Row win: {evaluate(board)}")

    board = Board.from_rows(["XOX", "XOO", "OXX"])
    print(board)
    print(f"Draw: {checker.check_draw(board)}")
