from typing import List, Set, Tuple

import numpy as np
import pytest

from game_engine.ai_player import AIPlayer
from game_engine.board import Board, Mark
from game_engine.win_checker import evaluate


def immediate_wins(board: Board, mark: Mark) -> List[Tuple[int, int]]:
    return [
        (row, col) for row, col in board.empty_cells()
        if evaluate(board.with_mark(row, col, mark)).winner == mark
    ]


def test_takes_the_win():
    ai = AIPlayer(Mark.O, seed=0)
    board = Board.from_rows(["OO.", "XX.", "X.."])
    assert ai.candidate_moves(board) == ("win", [(0, 2)])
    assert ai.select_move(board) == (0, 2)


def test_win_beats_block():
    # X threatens (1, 2) but O can finish column 2 first
    board = Board.from_rows([".XO", "XX.", "..O"])
    ai = AIPlayer(Mark.O, seed=0)
    assert ai.select_move(board) == (1, 2)
    board = Board.from_rows(["X.O", "XX.", "..O"])
    assert ai.candidate_moves(board)[0] == "win"


def test_blocks_the_opponent():
    ai = AIPlayer(Mark.O, seed=0)
    board = Board.from_rows(["XX.", ".O.", "..."])
    assert ai.candidate_moves(board) == ("block", [(0, 2)])


def test_first_match_in_row_major_order():
    ai = AIPlayer(Mark.O, seed=0)
    # X threatens both (1, 0) and (2, 1); the scan finds (1, 0) first
    board = Board.from_rows(["X.O", ".O.", "X.X"])
    assert ai.select_move(board) == (1, 0)


def test_takes_center_when_free():
    ai = AIPlayer(Mark.O, seed=0)
    board = Board.from_rows(["X..", "...", "..."])
    assert ai.candidate_moves(board) == ("center", [(1, 1)])


def test_random_fallback_picks_an_empty_cell():
    board = Board.from_rows(["...", ".X.", "..."])
    rule, candidates = AIPlayer(Mark.O).candidate_moves(board)
    assert rule == "random"
    assert candidates == board.empty_cells()
    for seed in range(20):
        move = AIPlayer(Mark.O, seed=seed).select_move(board)
        assert move in candidates


def test_random_fallback_is_reproducible_with_a_seed():
    board = Board.from_rows(["...", ".X.", "..."])
    a = AIPlayer(Mark.O, rng=np.random.default_rng(42))
    b = AIPlayer(Mark.O, rng=np.random.default_rng(42))
    assert [a.select_move(board) for _ in range(5)] == [b.select_move(board) for _ in range(5)]


def test_random_fallback_covers_every_cell():
    board = Board.from_rows(["...", ".X.", "..."])
    ai = AIPlayer(Mark.O, seed=7)
    seen = {ai.select_move(board) for _ in range(400)}
    assert seen == set(board.empty_cells())


def test_full_board_returns_none():
    board = Board.from_rows(["XOX", "XOO", "OXX"])
    ai = AIPlayer(Mark.O)
    assert ai.select_move(board) is None
    assert ai.candidate_moves(board) == ("none", [])


def test_explicit_marks_override_player():
    ai = AIPlayer(Mark.O, seed=0)
    board = Board.from_rows(["XX.", "OO.", "..."])
    assert ai.select_move(board, Mark.X, Mark.O) == (0, 2)
    assert ai.select_move(board, Mark.O, Mark.X) == (1, 2)


def test_select_move_does_not_mutate_board():
    board = Board.from_rows(["XX.", ".O.", "..."])
    before = board.cells.copy()
    AIPlayer(Mark.O, seed=0).select_move(board)
    assert np.array_equal(board.cells, before)


def test_random_fallback_can_be_forked():
    # X corner, O center, X opposite corner, O picks a corner at random:
    # X blocks with (2, 0) and now threatens two cells at once
    board = Board.from_rows(["X.O", ".O.", "X.X"])
    ai = AIPlayer(Mark.O, seed=0)
    assert len(immediate_wins(board, Mark.X)) == 2
    move = ai.select_move(board)
    after = board.with_mark(*move, Mark.O)
    assert evaluate(after).is_in_progress
    assert immediate_wins(after, Mark.X) == [(2, 1)]


class GameTreeStats:
    def __init__(self):
        self.seen: Set[Board] = set()
        self.x_wins = 0
        self.o_wins = 0
        self.draws = 0


def explore(ai: AIPlayer, board: Board, stats: GameTreeStats) -> None:
    """Walk every game: X tries every move, O tries every move its policy allows."""
    if board in stats.seen:
        return
    stats.seen.add(board)

    outcome = evaluate(board)
    if outcome.is_game_over:
        if outcome.is_draw:
            stats.draws += 1
        elif outcome.winner == Mark.X:
            stats.x_wins += 1
        else:
            stats.o_wins += 1
        return

    x_to_move = board.count(Mark.X) == board.count(Mark.O)
    if x_to_move:
        for row, col in board.empty_cells():
            explore(ai, board.with_mark(row, col, Mark.X), stats)
        return

    rule, candidates = ai.candidate_moves(board, Mark.O, Mark.X)
    own_wins = immediate_wins(board, Mark.O)
    threats = immediate_wins(board, Mark.X)

    # Never misses a win, never misses a block
    if own_wins:
        assert rule == "win" and candidates[0] in own_wins
    elif threats:
        assert rule == "block" and candidates[0] in threats

    for row, col in candidates:
        after = board.with_mark(row, col, Mark.O)
        if evaluate(after).is_in_progress and immediate_wins(after, Mark.X):
            # X can only still win next move if it had a fork
            assert len(threats) >= 2, f"O left a single threat open:\n{board}"
        explore(ai, after, stats)


@pytest.fixture(scope="module")
def game_tree():
    stats = GameTreeStats()
    explore(AIPlayer(Mark.O, seed=0), Board.empty(), stats)
    return stats


def test_exhaustive_play_never_misses_win_or_block(game_tree):
    assert game_tree.o_wins > 0
    assert game_tree.draws > 0


def test_exhaustive_play_losses_only_come_from_forks(game_tree):
    # The random fallback can be out-forced, so X wins do exist
    assert game_tree.x_wins > 0
