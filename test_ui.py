import pytest

tk = pytest.importorskip("tkinter")

from game_engine.board import Mark
from game_engine.config import Mode


@pytest.fixture
def ui():
    from ui import TicTacToeUI

    try:
        app = TicTacToeUI(mode=Mode.AI, delay_ms=0, seed=0)
    except tk.TclError:
        pytest.skip("Tk unavailable in headless environment")
    app.root.withdraw()
    yield app
    app.engine.reset()
    app.root.destroy()


def test_click_places_mark_and_disables_board(ui):
    ui.board_cells[1][1].invoke()
    state = ui.engine.current_state()
    assert state.board.get(1, 1) == Mark.X
    assert str(ui.status_label.cget("text")) == "Thinking..."
    assert str(ui.board_cells[0][0].cget("state")) == "disabled"

    # Let the Tk "after" job run
    ui.root.after(50, ui.root.quit)
    ui.root.mainloop()
    assert ui.engine.current_state().board.count(Mark.O) == 1
    assert str(ui.status_label.cget("text")) == "Next: X"


def test_mode_and_reset_buttons(ui):
    ui.board_cells[0][0].invoke()
    ui.mode_buttons[Mode.LOCAL].invoke()
    state = ui.engine.current_state()
    assert state.mode == Mode.LOCAL
    assert state.board.count(None) == 9

    ui.board_cells[0][0].invoke()
    ui.reset_btn.invoke()
    assert ui.engine.current_state().moves == ()


def test_theme_toggle_keeps_game(ui):
    ui.board_cells[2][2].invoke()
    ui.theme_btn.invoke()
    assert ui.theme == "dark"
    assert ui.board_cells[2][2].cget("text") == "X"
