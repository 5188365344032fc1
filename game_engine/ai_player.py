"""
AI player for the tic-tac-toe engine.
A one-ply greedy heuristic: win, else block, else center, else random.
"""

import logging
from typing import List, Optional, Tuple

import numpy as np

from .board import Board, Mark
from .win_checker import WinChecker

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]


class AIPlayer:
    """
    The automated opponent.

    Decision order, each step tried only if the previous finds nothing:
    1. Win now: complete one of our own lines
    2. Block: take the cell that would complete an opponent line
    3. Center: take the middle cell if it is free
    4. Random: any remaining empty cell, chosen uniformly

    This is not a search. It never misses an immediate win or block, but
    the random fallback can walk into a fork.
    """

    def __init__(self, player: Mark = Mark.O, rng: Optional[np.random.Generator] = None, seed: Optional[int] = None):
        """
        Initialize the AI player.

        Args:
            player: Which mark the AI plays (default: O)
            rng: Random generator for the fallback step.
            seed: Seed for a fresh generator when rng is not given.
        """
        self.player = player
        self.win_checker = WinChecker()
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def find_winning_move(self, board: Board, mark: Mark) -> Optional[Cell]:
        """
        Find the first empty cell (row-major) where `mark` would win.

        Returns:
            (row, col), or None if no single placement wins.
        """
        for row, col in board.empty_cells():
            hypothetical = board.with_mark(row, col, mark)
            if self.win_checker.check_winner(hypothetical) == mark:
                return (row, col)
        return None

    def candidate_moves(
        self,
        board: Board,
        own_mark: Optional[Mark] = None,
        opponent_mark: Optional[Mark] = None
    ) -> Tuple[str, List[Cell]]:
        """
        Get the rule that applies and the cells it allows.

        The win, block and center rules yield exactly one cell; the random
        rule yields every empty cell. An empty list means the board is full.

        Returns:
            (rule name, list of candidate cells)
        """
        own_mark = own_mark or self.player
        opponent_mark = opponent_mark or own_mark.opposite()

        empty = board.empty_cells()
        if not empty:
            return "none", []

        move = self.find_winning_move(board, own_mark)
        if move is not None:
            return "win", [move]

        move = self.find_winning_move(board, opponent_mark)
        if move is not None:
            return "block", [move]

        # Only odd sizes have a single center cell
        if board.size % 2 == 1:
            center = (board.size - 1) // 2
            if board.is_empty(center, center):
                return "center", [(center, center)]

        return "random", empty

    def select_move(
        self,
        board: Board,
        own_mark: Optional[Mark] = None,
        opponent_mark: Optional[Mark] = None
    ) -> Optional[Cell]:
        """
        Choose a move for the current position.

        Args:
            board: Current board (never modified).
            own_mark: The mark being played (default: self.player).
            opponent_mark: The other mark (default: own_mark.opposite()).

        Returns:
            (row, col) to play, or None if the board is full.
        """
        rule, candidates = self.candidate_moves(board, own_mark, opponent_mark)
        if not candidates:
            return None

        if len(candidates) == 1:
            move = candidates[0]
        else:
            move = candidates[int(self.rng.integers(len(candidates)))]

        logger.debug("AI picked %s by rule %r", move, rule)
        return move


# Quick test
if __name__ == "__main__":
    ai = AIPlayer(Mark.O, seed=0)

    # O can win with (0, 2)
    board = Board.from_rows(["OO.", "XX.", "X.."])
    print(board)
    print(f"AI's move: {ai.select_move(board)}")

    # O must block X at (0, 2)
    board = Board.from_rows(["XX.", ".O.", "..."])
    print(board)
    print(f"AI's move: {ai.select_move(board)}")
