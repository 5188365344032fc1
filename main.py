"""
Main entry point for tic-tac-toe.

Launches the Tkinter UI by default, or a console game with --no-ui.
Both are thin front ends: all rules live in the game_engine package.

Console commands:
    <row> <col>   place a mark (e.g. "1 1" for the center)
    r             start a new game
    m             switch between 2-player and vs AI (starts a new game)
    q             quit
"""

import logging
import time
from typing import Callable, Optional

from game_engine import GameConfig, GameEngine, GameSession, IllegalMoveError, ManualScheduler, Mode
from game_engine.ai_player import AIPlayer

logger = logging.getLogger(__name__)


class ConsoleGame:
    """
    Console front end.

    The AI's move is armed on a ManualScheduler; after each human move the
    console waits the real delay and then advances the virtual clock, so
    the pause is felt the same way as in the UI.
    """

    def __init__(
        self,
        mode: Mode = GameConfig.DEFAULT_MODE,
        delay_ms: int = GameConfig.OPPONENT_DELAY_MS,
        seed: Optional[int] = GameConfig.RANDOM_SEED,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
        sleep_fn: Callable[[float], None] = time.sleep
    ):
        self.scheduler = ManualScheduler()
        self.engine = GameEngine(
            mode=mode,
            scheduler=self.scheduler,
            ai=AIPlayer(GameConfig.AI_PLAYER, seed=seed),
            delay_ms=delay_ms,
        )
        self.input_fn = input_fn
        self.output_fn = output_fn
        self.sleep_fn = sleep_fn
        self.is_running = False

    def start(self):
        """Run until the user quits or input runs out."""
        self.is_running = True
        self._show(self.engine.current_state())
        while self.is_running:
            try:
                line = self.input_fn("> ")
            except EOFError:
                break
            self.handle_command(line)

    def handle_command(self, line: str):
        """Apply one line of console input."""
        parts = line.strip().lower().split()
        if not parts:
            return

        if parts[0] == "q":
            self.is_running = False
            self.engine.reset()
            return
        if parts[0] == "r":
            self._show(self.engine.reset())
            return
        if parts[0] == "m":
            new_mode = Mode.AI if self.engine.mode == Mode.LOCAL else Mode.LOCAL
            self._show(self.engine.set_mode(new_mode))
            return

        if len(parts) != 2:
            self.output_fn("Enter '<row> <col>', 'r', 'm' or 'q'.")
            return
        try:
            row, col = int(parts[0]), int(parts[1])
        except ValueError:
            self.output_fn(f"Not a position: {line.strip()!r}")
            return

        try:
            session = self.engine.place_mark(row, col)
        except IllegalMoveError as e:
            self.output_fn(f"Illegal move: {e}")
            return
        self._show(session)

        if session.opponent_pending:
            self.sleep_fn(self.engine.delay_ms / 1000)
            self.scheduler.advance(self.engine.delay_ms)
            self._show(self.engine.current_state())

    def _show(self, session: GameSession):
        self.output_fn("")
        self.output_fn(str(session.board))
        self.output_fn(f"[{session.mode.value}] {session.status_text}")


def main(argv=None):
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Tic-tac-toe")
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in Mode],
        default=GameConfig.DEFAULT_MODE.value,
        help="local = two players, ai = play against the computer"
    )
    parser.add_argument(
        "--delay-ms",
        type=int,
        default=GameConfig.OPPONENT_DELAY_MS,
        help="Pause before the computer's move"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=GameConfig.RANDOM_SEED,
        help="Seed for the computer's random choices"
    )
    parser.add_argument(
        "--no-ui",
        action="store_true",
        help="Run without UI (console mode)"
    )
    parser.add_argument(
        "--log-level",
        default=GameConfig.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity"
    )

    args = parser.parse_args(argv)
    if args.delay_ms < 0:
        parser.error("--delay-ms must be >= 0")

    logging.basicConfig(level=args.log_level, format=GameConfig.LOG_FORMAT)
    mode = Mode(args.mode)

    # Launch UI by default
    if not args.no_ui:
        from ui import TicTacToeUI
        ui = TicTacToeUI(mode=mode, delay_ms=args.delay_ms, seed=args.seed)
        ui.run()
        return 0

    game = ConsoleGame(mode=mode, delay_ms=args.delay_ms, seed=args.seed)
    try:
        game.start()
    except KeyboardInterrupt:
        print("\n\nGame interrupted by user.")
    finally:
        print("Goodbye!")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
