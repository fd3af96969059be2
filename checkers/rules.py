"""
Rules engine: legal-move generation, mandatory capture, jump chains and
terminal-state detection for 8x8 English draughts.

Every function here is pure. It takes a Board and a player and returns a
result without touching any shared state, so the rules can be queried from
any thread on independent boards.

Rules implemented:
    - Men move one square diagonally forward; kings move in all four
      diagonal directions.
    - A jump hops over an adjacent opponent piece into the empty square
      directly beyond it, removing the hopped piece.
    - Mandatory capture: if any piece of the side to move can jump, only
      jumps are legal for every piece of that side.
    - Multi-jump chains: after landing from a jump, the same piece must keep
      jumping while continuation_jumps() is non-empty. Each hop is a separate
      Move; the caller drives the chain one hop at a time.
    - Promotion: a Red man reaching row 0 or a Black man reaching row 7
      becomes a king. It is checked on every hop, so a man crowned mid-chain
      continues the chain with a king's four directions.
    - A side with no pieces, or no legal move on its turn, loses.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from checkers.board import Board, Color, Piece, Square

# Diagonal step directions as (d_row, d_col). Red's forward is "up".
_UP: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1))
_DOWN: tuple[tuple[int, int], ...] = ((1, -1), (1, 1))


@dataclass(frozen=True)
class Move:
    """
    A single step or a single hop of a jump chain.

    Attributes:
        from_square: Square the piece leaves.
        to_square:   Square the piece lands on.
        is_jump:     True when this hop captures a piece.
        captured:    Square of the captured piece for jumps, else None.
    """

    from_square: Square
    to_square: Square
    is_jump: bool = False
    captured: Square | None = None


class GameStatus(str, Enum):
    PLAYING = "playing"
    RED_WINS = "red-wins"
    BLACK_WINS = "black-wins"
    DRAW = "draw"

    @classmethod
    def win_for(cls, color: Color) -> GameStatus:
        return cls.RED_WINS if color is Color.RED else cls.BLACK_WINS


def _directions(piece: Piece) -> tuple[tuple[int, int], ...]:
    if piece.is_king:
        return _UP + _DOWN
    return _UP if piece.color is Color.RED else _DOWN


def _candidate_moves(
    board: Board, square: Square, piece: Piece
) -> tuple[list[Move], list[Move]]:
    """Return (simple_moves, jumps) for the piece on square, ignoring mandatory capture."""
    simple: list[Move] = []
    jumps: list[Move] = []
    opponent = piece.color.opponent

    for d_row, d_col in _directions(piece):
        adjacent = square.offset(d_row, d_col)
        if not adjacent.on_board():
            continue

        occupant = board.piece_at(adjacent)
        if occupant is None:
            simple.append(Move(square, adjacent))
        elif occupant.color is opponent:
            landing = adjacent.offset(d_row, d_col)
            if board.is_empty(landing):
                jumps.append(Move(square, landing, is_jump=True, captured=adjacent))

    return simple, jumps


def _own_piece(board: Board, player: Color, square: Square) -> Piece | None:
    piece = board.piece_at(square)
    if piece is None or piece.color is not player:
        return None
    return piece


def has_any_capture(board: Board, player: Color) -> bool:
    """True iff some piece of player has at least one jump available."""
    return any(
        _candidate_moves(board, square, piece)[1]
        for square, piece in board.pieces(player)
    )


def legal_moves(board: Board, player: Color, square: Square) -> list[Move]:
    """
    Legal moves for the piece on square, in the context of the whole board.

    Returns only jumps when the piece can jump. Returns nothing when the piece
    cannot jump but another piece of the same side can (mandatory capture).
    An empty square or an opponent's piece yields an empty list.
    """
    piece = _own_piece(board, player, square)
    if piece is None:
        return []

    simple, jumps = _candidate_moves(board, square, piece)
    if jumps:
        return jumps
    if has_any_capture(board, player):
        return []
    return simple


def all_legal_moves(board: Board, player: Color) -> list[Move]:
    """
    Every legal move for player, in row-major square order.

    Jumps only when any capture exists. An empty result means player cannot
    move and, on their turn, has lost.
    """
    per_square = [
        _candidate_moves(board, square, piece) for square, piece in board.pieces(player)
    ]
    must_capture = any(jumps for _, jumps in per_square)

    moves: list[Move] = []
    for simple, jumps in per_square:
        moves.extend(jumps if must_capture else simple)
    return moves


def continuation_jumps(board: Board, square: Square, player: Color) -> list[Move]:
    """
    Jumps available to the piece that just landed on square.

    A non-empty result means the chain is not over: the same piece must jump
    again before the turn passes. The choice among several continuations
    belongs to the caller.
    """
    piece = _own_piece(board, player, square)
    if piece is None:
        return []
    return _candidate_moves(board, square, piece)[1]


def apply_move(board: Board, move: Move) -> Board:
    """
    Return the board after a single step or hop.

    The moving piece is relocated, the captured piece (if any) removed, and a
    man landing on its promotion row is crowned. The input board is not
    modified.

    The move is not checked against the legal set; callers validate with
    legal_moves() or all_legal_moves() first.

    Raises:
        ValueError: The origin square is empty.
    """
    piece = board.piece_at(move.from_square)
    if piece is None:
        raise ValueError(f"no piece on {move.from_square}")

    if move.to_square.row == piece.color.promotion_row:
        piece = piece.crowned()

    changes: dict[Square, Piece | None] = {
        move.from_square: None,
        move.to_square: piece,
    }
    if move.is_jump:
        captured = move.captured or Square(
            (move.from_square.row + move.to_square.row) // 2,
            (move.from_square.col + move.to_square.col) // 2,
        )
        changes[captured] = None
    return board.with_changes(changes)


def apply_chain(board: Board, hops: Iterable[Move]) -> Board:
    """Apply a sequence of hops in order and return the final board."""
    for hop in hops:
        board = apply_move(board, hop)
    return board


def game_status(board: Board, to_move: Color) -> GameStatus:
    """
    Terminal detection for the position with to_move on turn.

    A side with no pieces loses; so does the side to move when it has no
    legal move. This function never returns DRAW.
    """
    if board.count(Color.RED) == 0:
        return GameStatus.BLACK_WINS
    if board.count(Color.BLACK) == 0:
        return GameStatus.RED_WINS
    if not all_legal_moves(board, to_move):
        return GameStatus.win_for(to_move.opponent)
    return GameStatus.PLAYING
