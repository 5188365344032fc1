"""
Board model for the tic-tac-toe engine.
An immutable N x N grid of cells; every placement returns a new board.
"""

from enum import Enum
from typing import Iterable, List, Optional, Tuple

import numpy as np


class GameError(Exception):
    """Base class for recoverable game errors."""


class IllegalCellError(GameError):
    """Raised when a coordinate is out of bounds or the cell is occupied."""


class Mark(Enum):
    """The two marks that can occupy a cell."""
    X = "X"
    O = "O"

    def opposite(self) -> "Mark":
        """Get the other player's mark."""
        return Mark.O if self == Mark.X else Mark.X

    @property
    def code(self) -> int:
        return _MARK_TO_CODE[self]


# Cell encoding in the backing array
EMPTY = 0
_MARK_TO_CODE = {Mark.X: 1, Mark.O: 2}
_CODE_TO_MARK = {1: Mark.X, 2: Mark.O}

# Text form: one character per cell, '.' for empty
_CHAR_TO_CODE = {".": EMPTY, "X": 1, "O": 2}
_CODE_TO_CHAR = {EMPTY: ".", 1: "X", 2: "O"}

DEFAULT_SIZE = 3


class Board:
    """
    A square grid of cells, stored row-major in a read-only numpy array.

    Boards are values: they compare and hash by contents, and nothing
    mutates one after construction. Use with_mark() to get the board
    that results from a placement.
    """

    __slots__ = ("_cells",)

    def __init__(self, cells: Iterable[Iterable[int]]):
        """
        Build a board from a square grid of cell codes.

        Args:
            cells: Rows of cell codes (0 empty, 1 X, 2 O).

        Raises:
            ValueError: If the grid is not square or holds unknown codes.
        """
        arr = np.array(cells, dtype=np.int8)
        if arr.ndim != 2 or arr.shape[0] != arr.shape[1] or arr.shape[0] == 0:
            raise ValueError(f"Board must be a non-empty square grid, got shape {arr.shape}")
        if not np.isin(arr, (EMPTY, 1, 2)).all():
            raise ValueError("Board cells must be 0 (empty), 1 (X) or 2 (O)")
        arr.flags.writeable = False
        self._cells = arr

    @classmethod
    def empty(cls, size: int = DEFAULT_SIZE) -> "Board":
        """Create a board with every cell empty."""
        if size < 1:
            raise ValueError(f"Board size must be positive, got {size}")
        return cls(np.zeros((size, size), dtype=np.int8))

    @classmethod
    def from_rows(cls, rows: Iterable[str]) -> "Board":
        """
        Parse a board from text rows such as ["X.O", ".X.", "..O"].

        Raises:
            ValueError: On unknown characters or a non-square layout.
        """
        grid = []
        for row in rows:
            try:
                grid.append([_CHAR_TO_CODE[ch] for ch in row.strip().upper()])
            except KeyError as exc:
                raise ValueError(f"Unknown cell character {exc.args[0]!r} in row {row!r}") from None
        return cls(grid)

    @property
    def size(self) -> int:
        return int(self._cells.shape[0])

    @property
    def cells(self) -> np.ndarray:
        """Read-only view of the cell codes."""
        return self._cells

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def get(self, row: int, col: int) -> Optional[Mark]:
        """
        Get the mark in a cell.

        Raises:
            IllegalCellError: If (row, col) is off the board.
        """
        if not self.in_bounds(row, col):
            raise IllegalCellError(f"Invalid position ({row}, {col}). Must be 0-{self.size - 1}.")
        return _CODE_TO_MARK.get(int(self._cells[row, col]))

    def is_empty(self, row: int, col: int) -> bool:
        return self.get(row, col) is None

    def with_mark(self, row: int, col: int, mark: Mark) -> "Board":
        """
        Get a new board with a mark placed in one cell.

        This board is left untouched.

        Args:
            row: Row index.
            col: Column index.
            mark: The mark to place.

        Returns:
            The resulting board.

        Raises:
            IllegalCellError: If the cell is off the board or occupied.
        """
        current = self.get(row, col)
        if current is not None:
            raise IllegalCellError(f"Cell ({row}, {col}) is already occupied by {current.value}")
        cells = self._cells.copy()
        cells[row, col] = mark.code
        return Board(cells)

    def empty_cells(self) -> List[Tuple[int, int]]:
        """
        Get all empty cells in row-major order.

        Returns:
            List of (row, col) tuples.
        """
        rows, cols = np.nonzero(self._cells == EMPTY)
        return [(int(r), int(c)) for r, c in zip(rows, cols)]

    def is_full(self) -> bool:
        return not (self._cells == EMPTY).any()

    def count(self, mark: Optional[Mark]) -> int:
        """Count the cells holding a mark (None counts empty cells)."""
        code = EMPTY if mark is None else mark.code
        return int(np.count_nonzero(self._cells == code))

    def rows(self) -> List[List[Optional[Mark]]]:
        """The board as nested lists of marks (None for empty)."""
        return [[_CODE_TO_MARK.get(int(code)) for code in row] for row in self._cells]

    def copy(self) -> "Board":
        return Board(self._cells)

    def to_text(self) -> str:
        return "\n".join("".join(_CODE_TO_CHAR[int(code)] for code in row) for row in self._cells)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return np.array_equal(self._cells, other._cells)

    def __hash__(self) -> int:
        return hash((self.size, self._cells.tobytes()))

    def __repr__(self) -> str:
        return f"Board.from_rows({self.to_text().splitlines()!r})"

    def __str__(self) -> str:
        header = "  " + " ".join(str(col) for col in range(self.size))
        lines = [header]
        for row in range(self.size):
            chars = " ".join(_CODE_TO_CHAR[int(code)] for code in self._cells[row])
            lines.append(f"{row} {chars}")
        return "\n".join(lines)
