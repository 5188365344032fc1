"""
Game state management for the tic-tac-toe engine.
Owns the board, the current player and the outcome, and decides when the
automated opponent moves.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Callable, List, Optional, Tuple

from .ai_player import AIPlayer
from .board import Board, Mark
from .config import GameConfig, Mode
from .move_validator import IllegalMoveError, MoveValidator
from .scheduler import ManualScheduler, ScheduledHandle, Scheduler
from .win_checker import Outcome, WinChecker

logger = logging.getLogger(__name__)

Listener = Callable[["GameSession"], None]


@dataclass(frozen=True)
class Move:
    """
    A move in the game.
    """
    player: Mark            # Who made the move
    row: int                # Row (0-2)
    col: int                # Column (0-2)
    move_number: int        # Which move this is (0-8)


@dataclass(frozen=True)
class GameSession:
    """
    Snapshot of one game.

    Tracks:
    - The board
    - Whose turn it is
    - The outcome (in progress, won, drawn)
    - The mode, and whether an AI move is waiting to be applied
    - Move history for this game
    """

    board: Board = field(default_factory=Board.empty)
    current_player: Mark = Mark.X
    outcome: Outcome = field(default_factory=Outcome.in_progress)
    mode: Mode = Mode.LOCAL
    opponent_pending: bool = False
    moves: Tuple[Move, ...] = ()

    @property
    def winner(self) -> Optional[Mark]:
        return self.outcome.winner

    @property
    def is_draw(self) -> bool:
        return self.outcome.is_draw

    @property
    def is_game_over(self) -> bool:
        return self.outcome.is_game_over

    @property
    def status_text(self) -> str:
        """One-line status for a front end."""
        if self.outcome.is_win:
            return f"{self.winner.value} wins!"
        if self.outcome.is_draw:
            return "Draw!"
        if self.opponent_pending:
            return "Thinking..."
        return f"Next: {self.current_player.value}"


class GameEngine:
    """
    The game state machine.

    All changes go through place_mark(), reset() and set_mode(). Each one
    replaces the current GameSession with a new snapshot and notifies
    subscribers.

    In AI mode, a human placement that leaves the game running arms the
    scheduler; when it fires, the AI's move goes through the same
    placement path as a human move.
    """

    def __init__(
        self,
        mode: Mode = GameConfig.DEFAULT_MODE,
        scheduler: Optional[Scheduler] = None,
        ai: Optional[AIPlayer] = None,
        delay_ms: int = GameConfig.OPPONENT_DELAY_MS,
        board_size: int = GameConfig.BOARD_SIZE
    ):
        """
        Initialize the engine.

        Args:
            mode: Starting mode.
            scheduler: Backend for the deferred AI move (default: ManualScheduler).
            ai: The automated opponent (default: AIPlayer for GameConfig.AI_PLAYER).
            delay_ms: Pause before the AI move is applied.
            board_size: Side length of the board.

        Raises:
            ValueError: If delay_ms is negative.
        """
        if delay_ms < 0:
            raise ValueError(f"delay_ms must be >= 0, got {delay_ms}")

        self.scheduler = scheduler if scheduler is not None else ManualScheduler()
        self.ai = ai if ai is not None else AIPlayer(GameConfig.AI_PLAYER, seed=GameConfig.RANDOM_SEED)
        self.human_player = self.ai.player.opposite()
        self.delay_ms = delay_ms
        self.board_size = board_size

        self.validator = MoveValidator(self.human_player)
        self.win_checker = WinChecker()

        self._listeners: List[Listener] = []
        self._pending: Optional[ScheduledHandle] = None
        self._session = self._new_session(mode)

    # ==================== READ ====================

    def current_state(self) -> GameSession:
        """Get the current snapshot."""
        return self._session

    @property
    def mode(self) -> Mode:
        return self._session.mode

    # ==================== MUTATIONS ====================

    def place_mark(self, row: int, col: int) -> GameSession:
        """
        Place the current player's mark.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            The new session.

        Raises:
            IllegalMoveError: If the game is over, the cell is off the board
                or taken, or (against the AI) it is not the human's turn.
                The session is left unchanged.
        """
        return self._place(row, col, by_opponent=False)

    def reset(self) -> GameSession:
        """Start a new game in the current mode, dropping any pending AI move."""
        return self._start(self._session.mode)

    def set_mode(self, mode: Mode) -> GameSession:
        """Switch mode; this always starts a new game."""
        mode = Mode(mode)
        logger.info("Mode set to %s", mode.value)
        return self._start(mode)

    # ==================== SUBSCRIBERS ====================

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Call `listener` with the new session after every change.

        Returns:
            A function that removes the listener.
        """
        self._listeners.append(listener)
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ==================== INTERNALS ====================

    def _new_session(self, mode: Mode) -> GameSession:
        return GameSession(board=Board.empty(self.board_size), current_player=self.human_player, mode=mode)

    def _start(self, mode: Mode) -> GameSession:
        # Cancel before replacing state so a stale AI move can never land
        self._cancel_opponent()
        self._session = self._new_session(mode)
        logger.info("New game (%s)", mode.value)
        self._notify()
        return self._session

    def _place(self, row: int, col: int, by_opponent: bool) -> GameSession:
        session = self._session
        result = self.validator.validate_move(session, row, col, by_opponent=by_opponent)
        if not result.is_valid:
            logger.info("Rejected move (%s, %s): %s", row, col, result.error_message)
            raise IllegalMoveError(result.error_message)

        player = session.current_player
        board = session.board.with_mark(row, col, player)
        outcome = self.win_checker.evaluate(board)
        next_player = player.opposite() if outcome.is_in_progress else player

        move = Move(player=player, row=row, col=col, move_number=len(session.moves))
        self._session = replace(
            session,
            board=board,
            current_player=next_player,
            outcome=outcome,
            opponent_pending=False,
            moves=session.moves + (move,),
        )
        logger.debug("%s placed at (%s, %s)", player.value, row, col)
        if outcome.is_game_over:
            logger.info("Game over: %s", self._session.status_text)

        if self._should_arm_opponent():
            self._arm_opponent()

        self._notify()
        return self._session

    def _should_arm_opponent(self) -> bool:
        session = self._session
        return (
            session.mode == Mode.AI
            and session.outcome.is_in_progress
            and session.current_player == self.ai.player
        )

    def _arm_opponent(self) -> None:
        self._cancel_opponent()
        handle = self.scheduler.arm(self.delay_ms, lambda: self._on_opponent_due(handle))
        self._pending = handle
        self._session = replace(self._session, opponent_pending=True)

    def _cancel_opponent(self) -> None:
        if self._pending is not None:
            self.scheduler.cancel(self._pending)
            self._pending = None

    def _on_opponent_due(self, handle: ScheduledHandle) -> None:
        # A handle that is no longer ours belongs to a game that was reset
        if handle is not self._pending:
            return
        self._pending = None
        session = self._session

        move = self.ai.select_move(session.board, self.ai.player, self.human_player)
        if move is None:
            # Full board: nothing to play
            self._session = replace(session, opponent_pending=False)
            self._notify()
            return

        row, col = move
        self._place(row, col, by_opponent=True)

    def _notify(self) -> None:
        session = self._session
        for listener in list(self._listeners):
            listener(session)


# Quick test
if __name__ == "__main__":
    scheduler = ManualScheduler()
    engine = GameEngine(mode=Mode.AI, scheduler=scheduler, ai=AIPlayer(Mark.O, seed=0))

    state = engine.place_mark(1, 1)
    print(state.board)
    print(state.status_text)

    scheduler.advance(engine.delay_ms)
    state = engine.current_state()
    print(state.board)
    print(state.status_text)
