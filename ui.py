"""
Tic-tac-toe UI
A graphical front end for the game engine using Tkinter.

Shows:
- The board (click a cell to place a mark)
- Game status and whose turn it is
- Mode selection (2-player or vs AI)
- Light/dark theme switch

No game rules live here: every click goes through the engine, and the
board is redrawn from the snapshot the engine publishes.
"""

import logging
import tkinter as tk
from tkinter import ttk
from typing import Optional

from game_engine import GameConfig, GameEngine, GameSession, IllegalMoveError, Mark, Mode, TkScheduler
from game_engine.ai_player import AIPlayer

logger = logging.getLogger(__name__)

THEMES = {
    "light": {"bg": "#ffffff", "cell": "#f1f3f5", "fg": "#212529", "win": "#ffd600"},
    "dark": {"bg": "#1a1a2e", "cell": "#16213e", "fg": "#ffffff", "win": "#b8860b"},
}
MARK_COLORS = {Mark.X: "#1976d2", Mark.O: "#424242"}
MODE_COLORS = {Mode.LOCAL: "#1976d2", Mode.AI: "#ffd600"}


class TicTacToeUI:
    """
    Main UI class.
    """

    def __init__(
        self,
        mode: Mode = GameConfig.DEFAULT_MODE,
        delay_ms: int = GameConfig.OPPONENT_DELAY_MS,
        seed: Optional[int] = GameConfig.RANDOM_SEED
    ):
        """Initialize the UI."""
        self.theme = "light"
        self._create_ui()

        self.engine = GameEngine(
            mode=mode,
            scheduler=TkScheduler(self.root),
            ai=AIPlayer(GameConfig.AI_PLAYER, seed=seed),
            delay_ms=delay_ms,
        )
        self.engine.subscribe(self._render)
        self._render(self.engine.current_state())

    def _create_ui(self):
        """Create the Tkinter UI."""
        self.root = tk.Tk()
        self.root.title("Tic-Tac-Toe")
        self.root.minsize(360, 460)

        self.main_frame = tk.Frame(self.root, padx=20, pady=20)
        self.main_frame.pack(fill=tk.BOTH, expand=True)

        self.title_label = tk.Label(self.main_frame, text="Tic-Tac-Toe", font=('Segoe UI', 18, 'bold'))
        self.title_label.pack(pady=(0, 10))

        # Board (a grid of buttons)
        self.board_frame = tk.Frame(self.main_frame)
        self.board_frame.pack(pady=10)

        self.board_cells = []
        for row in range(GameConfig.BOARD_SIZE):
            row_cells = []
            for col in range(GameConfig.BOARD_SIZE):
                cell = tk.Button(
                    self.board_frame,
                    text="",
                    font=('Segoe UI', 24, 'bold'),
                    width=3,
                    height=1,
                    relief='ridge',
                    borderwidth=2,
                    command=lambda r=row, c=col: self._on_cell_clicked(r, c)
                )
                cell.grid(row=row, column=col, padx=2, pady=2)
                row_cells.append(cell)
            self.board_cells.append(row_cells)

        # Mode section
        mode_frame = tk.Frame(self.main_frame)
        mode_frame.pack(pady=10)

        self.mode_buttons = {}
        for text, mode in (("2-Player", Mode.LOCAL), ("vs AI", Mode.AI)):
            btn = tk.Button(
                mode_frame,
                text=text,
                font=('Segoe UI', 10, 'bold'),
                width=10,
                command=lambda m=mode: self._set_mode(m)
            )
            btn.pack(side=tk.LEFT, padx=5)
            self.mode_buttons[mode] = btn

        # Controls
        control_frame = tk.Frame(self.main_frame)
        control_frame.pack(pady=5)

        self.reset_btn = tk.Button(control_frame, text="New Game", width=10, command=self._reset_game)
        self.reset_btn.pack(side=tk.LEFT, padx=5)

        self.theme_btn = tk.Button(control_frame, text="Theme", width=10, command=self._toggle_theme)
        self.theme_btn.pack(side=tk.LEFT, padx=5)

        # Status
        self.status_label = ttk.Label(self.main_frame, text="", font=('Segoe UI', 14))
        self.status_label.pack(pady=10)

        self.message_label = ttk.Label(self.main_frame, text="", font=('Segoe UI', 10), foreground='#ef4444')
        self.message_label.pack()

        tk.Button(self.main_frame, text="Quit", width=22, command=self._quit).pack(pady=10)

        self.root.protocol("WM_DELETE_WINDOW", self._quit)

    def _on_cell_clicked(self, row: int, col: int):
        """Forward a click to the engine."""
        try:
            self.engine.place_mark(row, col)
        except IllegalMoveError as e:
            self.message_label.configure(text=str(e))

    def _set_mode(self, mode: Mode):
        self.engine.set_mode(mode)

    def _reset_game(self):
        self.engine.reset()

    def _toggle_theme(self):
        self.theme = "dark" if self.theme == "light" else "light"
        self._render(self.engine.current_state())

    def _render(self, session: GameSession):
        """Redraw everything from an engine snapshot."""
        colors = THEMES[self.theme]
        for frame in (self.root, self.main_frame, self.board_frame):
            frame.configure(bg=colors["bg"])
        self.title_label.configure(bg=colors["bg"], fg=colors["fg"])

        winning = set(session.outcome.line or ())
        human_locked = session.mode == Mode.AI and session.current_player != self.engine.human_player
        for row, marks in enumerate(session.board.rows()):
            for col, mark in enumerate(marks):
                cell = self.board_cells[row][col]
                cell.configure(
                    text=mark.value if mark else "",
                    fg=MARK_COLORS[mark] if mark else colors["fg"],
                    bg=colors["win"] if (row, col) in winning else colors["cell"],
                    state='disabled' if session.is_game_over or human_locked else 'normal'
                )

        for mode, btn in self.mode_buttons.items():
            active = mode == session.mode
            btn.configure(bg=MODE_COLORS[mode] if active else colors["cell"], fg='black' if active else colors["fg"])

        self.status_label.configure(text=session.status_text)
        self.message_label.configure(text="")

    def _quit(self):
        """Quit the application."""
        logger.info("Quitting...")
        self.engine.reset()
        self.root.quit()
        self.root.destroy()

    def run(self):
        """Run the UI main loop."""
        self.root.mainloop()


if __name__ == "__main__":
    logging.basicConfig(level=GameConfig.LOG_LEVEL, format=GameConfig.LOG_FORMAT)
    TicTacToeUI().run()
