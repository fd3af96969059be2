import pytest

from checkers.board import Board, Piece, Square


def make_board(pieces: dict[tuple[int, int], str]) -> Board:
    """Build a board from {(row, col): symbol} with symbols r, R, b, B."""
    return Board.empty().with_changes(
        {Square(*rc): Piece.from_symbol(symbol) for rc, symbol in pieces.items()}
    )


@pytest.fixture
def double_jump_board() -> Board:
    # Red man on e3 can take d4 then d6 in one turn.
    return make_board({(5, 4): "r", (4, 3): "b", (2, 3): "b"})


@pytest.fixture
def hanging_board() -> Board:
    # Red's e3-d4 walks into a capture by the black man on c5; e3-f4 is safe.
    return make_board({(5, 4): "r", (3, 2): "b"})


@pytest.fixture
def blocked_red_board() -> Board:
    # Red man on a1 is boxed in: b2 is black and c3 behind it is occupied.
    return make_board({(7, 0): "r", (6, 1): "b", (5, 2): "b"})


@pytest.fixture
def two_jumpers_board() -> Board:
    # Red can open with e3xc5 (which continues to e7) or with h2xf4.
    return make_board({(5, 4): "r", (4, 3): "b", (2, 3): "b", (5, 6): "b", (6, 7): "r"})
