"""
Board representation: colors, pieces, squares and the immutable board value.

A Board is a value, not an entity. Every move produces a new Board; no code
path mutates an existing one, so a board can be shared freely between the
caller, the search and any worker thread.

Each square holds either None (empty) or a Piece. Pieces are frozen too:
promotion replaces a man with a king rather than flipping a flag in place.

Text format:
    8 rows, top (row 0) first, separated by "/" or newlines. Each row has 8
    characters: "." empty, "r" red man, "R" red king, "b" black man,
    "B" black king. The standard starting position is:

        .b.b.b.b/b.b.b.b./.b.b.b.b/......../......../r.r.r.r./.r.r.r.r/r.r.r.r.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterator, Mapping, NamedTuple

from checkers.constants import (
    BLACK_PROMOTION_ROW,
    BLACK_START_ROWS,
    BOARD_SIZE,
    RED_PROMOTION_ROW,
    RED_START_ROWS,
)

_EMPTY_SYMBOL = "."


class Color(str, Enum):
    """Side to move. Red starts and moves up the board (decreasing row)."""

    RED = "red"
    BLACK = "black"

    @property
    def opponent(self) -> Color:
        return Color.BLACK if self is Color.RED else Color.RED

    @property
    def forward(self) -> int:
        """Row delta of a man's forward step."""
        return -1 if self is Color.RED else 1

    @property
    def promotion_row(self) -> int:
        return RED_PROMOTION_ROW if self is Color.RED else BLACK_PROMOTION_ROW

    @property
    def back_row(self) -> int:
        return BLACK_PROMOTION_ROW if self is Color.RED else RED_PROMOTION_ROW


class Square(NamedTuple):
    row: int
    col: int

    def on_board(self) -> bool:
        return 0 <= self.row < BOARD_SIZE and 0 <= self.col < BOARD_SIZE

    def is_dark(self) -> bool:
        return (self.row + self.col) % 2 == 1

    def offset(self, d_row: int, d_col: int) -> Square:
        return Square(self.row + d_row, self.col + d_col)


@dataclass(frozen=True)
class Piece:
    color: Color
    is_king: bool = False

    def crowned(self) -> Piece:
        """Return the king version of this piece. Kings stay kings."""
        return self if self.is_king else replace(self, is_king=True)

    @property
    def symbol(self) -> str:
        s = "r" if self.color is Color.RED else "b"
        return s.upper() if self.is_king else s

    @classmethod
    def from_symbol(cls, symbol: str) -> Piece:
        if symbol not in "rRbB" or len(symbol) != 1:
            raise ValueError(f"unknown piece symbol: {symbol!r}")
        color = Color.RED if symbol.lower() == "r" else Color.BLACK
        return cls(color=color, is_king=symbol.isupper())


Cell = Piece | None


@dataclass(frozen=True)
class Board:
    """
    An 8x8 checkers board.

    Attributes:
        cells: Row-major tuple of rows; cells[row][col] is a Piece or None.
    """

    cells: tuple[tuple[Cell, ...], ...]

    def __post_init__(self) -> None:
        if len(self.cells) != BOARD_SIZE or any(len(r) != BOARD_SIZE for r in self.cells):
            raise ValueError(f"board must be {BOARD_SIZE}x{BOARD_SIZE}")
        for row, cells in enumerate(self.cells):
            for col, cell in enumerate(cells):
                if cell is not None and not Square(row, col).is_dark():
                    raise ValueError(f"piece on light square ({row}, {col})")

    # -----------------------------------------------------------------------
    # Construction
    # -----------------------------------------------------------------------

    @classmethod
    def empty(cls) -> Board:
        return cls(tuple((None,) * BOARD_SIZE for _ in range(BOARD_SIZE)))

    @classmethod
    def initial(cls) -> Board:
        """Standard layout: Black on the dark squares of rows 0-2, Red on rows 5-7."""
        rows = []
        for row in range(BOARD_SIZE):
            cells: list[Cell] = []
            for col in range(BOARD_SIZE):
                piece = None
                if Square(row, col).is_dark():
                    if row in BLACK_START_ROWS:
                        piece = Piece(Color.BLACK)
                    elif row in RED_START_ROWS:
                        piece = Piece(Color.RED)
                cells.append(piece)
            rows.append(tuple(cells))
        return cls(tuple(rows))

    @classmethod
    def parse(cls, text: str) -> Board:
        """
        Build a board from its text form.

        Raises:
            ValueError: Wrong number of rows or columns, an unknown symbol,
                        or a piece on a light square.
        """
        lines = [ln.strip() for ln in text.replace("/", "\n").strip().splitlines()]
        lines = [ln for ln in lines if ln]
        if len(lines) != BOARD_SIZE:
            raise ValueError(f"expected {BOARD_SIZE} rows, got {len(lines)}")

        rows = []
        for line in lines:
            if len(line) != BOARD_SIZE:
                raise ValueError(f"expected {BOARD_SIZE} columns in row {line!r}")
            rows.append(tuple(
                None if ch == _EMPTY_SYMBOL else Piece.from_symbol(ch) for ch in line
            ))
        return cls(tuple(rows))

    # -----------------------------------------------------------------------
    # Queries
    # -----------------------------------------------------------------------

    def piece_at(self, square: Square) -> Cell:
        """Return the piece on square, or None for empty or off-board squares."""
        if not square.on_board():
            return None
        return self.cells[square.row][square.col]

    def is_empty(self, square: Square) -> bool:
        """True only for on-board squares with nothing on them."""
        return square.on_board() and self.cells[square.row][square.col] is None

    def pieces(self, color: Color | None = None) -> Iterator[tuple[Square, Piece]]:
        """Yield (square, piece) in row-major order, optionally for one color."""
        for row, cells in enumerate(self.cells):
            for col, piece in enumerate(cells):
                if piece is not None and (color is None or piece.color is color):
                    yield Square(row, col), piece

    def count(self, color: Color) -> int:
        return sum(1 for _ in self.pieces(color))

    # -----------------------------------------------------------------------
    # Derivation
    # -----------------------------------------------------------------------

    def with_changes(self, changes: Mapping[Square, Cell]) -> Board:
        """Return a new board with the given squares overwritten."""
        rows = [list(r) for r in self.cells]
        for square, cell in changes.items():
            rows[square.row][square.col] = cell
        return Board(tuple(tuple(r) for r in rows))

    # -----------------------------------------------------------------------
    # Text form
    # -----------------------------------------------------------------------

    def to_text(self, sep: str = "/") -> str:
        return sep.join(
            "".join(_EMPTY_SYMBOL if p is None else p.symbol for p in row)
            for row in self.cells
        )

    def __str__(self) -> str:
        lines = []
        for row, cells in enumerate(self.cells):
            body = " ".join(_EMPTY_SYMBOL if p is None else p.symbol for p in cells)
            lines.append(f"{BOARD_SIZE - row} {body}")
        lines.append("  " + " ".join(chr(ord("a") + c) for c in range(BOARD_SIZE)))
        return "\n".join(lines)
