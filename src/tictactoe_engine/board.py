"""Immutable 3x3 board state and the shared move-legality predicate."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, List, Sequence, Tuple

import numpy as np
import numpy.typing as npt

from tictactoe_engine.exceptions import IllegalMoveError

BOARD_SIZE = 3
NUM_CELLS = BOARD_SIZE * BOARD_SIZE

# All possible winning lines: rows, columns, diagonals
LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # Rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # Columns
    (0, 4, 8), (2, 4, 6),             # Diagonals
)

_SEPARATORS = " \t\n/|,"


class Mark(IntEnum):
    """Cell value. Encoded as 0 = empty, 1 = X, -1 = O."""

    EMPTY = 0
    X = 1
    O = -1

    @property
    def opponent(self) -> "Mark":
        """The other player's mark (EMPTY has no opponent)."""
        if self is Mark.EMPTY:
            raise ValueError("EMPTY has no opponent")
        return Mark(-self.value)

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    @classmethod
    def from_symbol(cls, symbol: str) -> "Mark":
        """Parse a single board symbol ('X', 'O', or '_', '.', '-' for empty)."""
        try:
            return _PARSE[symbol.upper()]
        except KeyError:
            raise ValueError(f"Unknown board symbol: {symbol!r}") from None


_SYMBOLS = {Mark.EMPTY: " ", Mark.X: "X", Mark.O: "O"}
_PARSE = {"X": Mark.X, "O": Mark.O, "_": Mark.EMPTY, ".": Mark.EMPTY, "-": Mark.EMPTY}


@dataclass(frozen=True)
class BoardState:
    """
    Tic-Tac-Toe board as an immutable value.

    Cells are stored row-major, so cell index = row * 3 + col:
        0 1 2
        3 4 5
        6 7 8

    Every update returns a new BoardState; an instance is never mutated, so
    search code can hold as many scratch copies as it needs.
    """

    cells: Tuple[Mark, ...] = (Mark.EMPTY,) * NUM_CELLS

    def __post_init__(self) -> None:
        if len(self.cells) != NUM_CELLS:
            raise ValueError(f"A board has {NUM_CELLS} cells, got {len(self.cells)}")
        object.__setattr__(self, "cells", tuple(Mark(c) for c in self.cells))

    @classmethod
    def _from_cells(cls, cells: Tuple[Mark, ...]) -> "BoardState":
        # Skips per-cell coercion; only for cells already known to be Marks.
        board = object.__new__(cls)
        object.__setattr__(board, "cells", cells)
        return board

    @classmethod
    def empty(cls) -> "BoardState":
        return cls()

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "BoardState":
        """Build a board from three rows of cell values."""
        if len(rows) != BOARD_SIZE or any(len(r) != BOARD_SIZE for r in rows):
            raise ValueError("Board rows must form a 3x3 grid")
        return cls(tuple(Mark(v) for row in rows for v in row))

    @classmethod
    def from_string(cls, text: str) -> "BoardState":
        """
        Parse a board from its symbols in row-major order.

        Separators (spaces, '/', '|', ',') are ignored, so "XX_/OO_/___" and
        "X|X|_ O|O|_ _|_|_" both describe the same position.

        Raises:
            ValueError: If the text does not hold exactly 9 valid symbols
        """
        symbols = [ch for ch in text if ch not in _SEPARATORS]
        if len(symbols) != NUM_CELLS:
            raise ValueError(
                f"Board string must contain {NUM_CELLS} symbols, got {len(symbols)}"
            )
        return cls(tuple(Mark.from_symbol(ch) for ch in symbols))

    def cell(self, row: int, col: int) -> Mark:
        return self.cells[row * BOARD_SIZE + col]

    def is_full(self) -> bool:
        """True iff no cell is empty."""
        return Mark.EMPTY not in self.cells

    def has_line(self, mark: Mark) -> bool:
        """True iff any row, column or diagonal is uniformly ``mark``."""
        cells = self.cells
        return any(
            cells[a] == mark and cells[b] == mark and cells[c] == mark
            for a, b, c in LINES
        )

    def place(self, index: int, mark: Mark) -> "BoardState":
        """
        Return a new board with cell ``index`` set to ``mark``.

        The target cell must be empty. This is a caller contract and is not
        re-checked here; use :func:`validate_move` on untrusted input.
        """
        cells = list(self.cells)
        cells[index] = Mark(mark)
        return BoardState._from_cells(tuple(cells))

    def place_at(self, row: int, col: int, mark: Mark) -> "BoardState":
        return self.place(row * BOARD_SIZE + col, mark)

    def empty_cells(self) -> List[int]:
        """Empty cell indices in increasing order."""
        return [i for i, v in enumerate(self.cells) if v == Mark.EMPTY]

    def count(self, mark: Mark) -> int:
        return self.cells.count(mark)

    def next_mark(self) -> Mark:
        """Side to move. X moves first, so it is X whenever the counts are equal."""
        return Mark.X if self.count(Mark.X) <= self.count(Mark.O) else Mark.O

    def is_consistent(self) -> bool:
        """
        Check whether this board can arise from alternating legal play.

        Returns:
            False if the mark counts differ by more than one ply, if both
            marks own a line, or if the winner's count does not match the
            move that completed the line.
        """
        x = self.count(Mark.X)
        o = self.count(Mark.O)
        if x not in (o, o + 1):
            return False
        x_won = self.has_line(Mark.X)
        o_won = self.has_line(Mark.O)
        if x_won and o_won:
            return False
        if x_won and x != o + 1:
            return False
        if o_won and x != o:
            return False
        return True

    def to_array(self) -> npt.NDArray[np.int_]:
        """Board as a 3x3 integer array (0 = empty, 1 = X, -1 = O)."""
        return np.array([int(v) for v in self.cells], dtype=np.int_).reshape(
            BOARD_SIZE, BOARD_SIZE
        )

    def render(self) -> str:
        """
        Render the board with row and column headers.

        Returns:
            String representation of the board
        """
        lines = ["   0 1 2"]
        for row in range(BOARD_SIZE):
            symbols = (self.cell(row, col).symbol for col in range(BOARD_SIZE))
            lines.append(f"{row} |" + "|".join(symbols) + "|")
        return "\n".join(lines)

    def __str__(self) -> str:
        return "".join("_" if v == Mark.EMPTY else v.symbol for v in self.cells)


def _is_index(value: object) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


def validate_move(board: BoardState, index: object) -> int:
    """
    Check a move index against a board.

    Args:
        board: Board the move is played on
        index: Proposed cell index

    Returns:
        The index as a plain int

    Raises:
        IllegalMoveError: If the index is not an integer, is out of range or
            names an occupied cell
    """
    if not _is_index(index):
        raise IllegalMoveError(index, "not_an_integer")
    if not 0 <= index < NUM_CELLS:  # type: ignore[operator]
        raise IllegalMoveError(index, "out_of_bounds")
    if board.cells[int(index)] != Mark.EMPTY:  # type: ignore[call-overload]
        raise IllegalMoveError(index, "occupied")
    return int(index)  # type: ignore[call-overload]


def is_legal_move(board: BoardState, index: object) -> bool:
    """True iff ``index`` is an integer in [0, 8] naming an empty cell."""
    try:
        validate_move(board, index)
    except IllegalMoveError:
        return False
    return True


def iter_lines(board: BoardState) -> Iterable[Tuple[Mark, Mark, Mark]]:
    """Yield the cell values of each of the 8 lines."""
    cells = board.cells
    for a, b, c in LINES:
        yield cells[a], cells[b], cells[c]
