"""
Human-readable notation for squares and moves, used for move logs and the
text and web interfaces. Nothing in the rules or the search depends on it.

Squares use algebraic names: column letter a-h for col 0-7, rank number
8-1 for row 0-7, so the top-left square (0, 0) is "a8".

Moves are written FROM-TO for a simple step and FROMxTOxTO... for a jump
chain, one "x" per hop:
    c3-d4       simple move
    c3xe5xg7    double jump
"""

import re
from typing import Sequence

from checkers.board import Square
from checkers.constants import BOARD_SIZE
from checkers.rules import Move

_SQUARE_RE = re.compile(r"^([a-h])([1-8])$")
_SEPARATORS = re.compile(r"[-xX×]")


def square_name(square: Square) -> str:
    row, col = square
    return f"{chr(ord('a') + col)}{BOARD_SIZE - row}"


def parse_square(name: str) -> Square:
    """
    Parse an algebraic square name.

    Raises:
        ValueError: name is not a-h followed by 1-8.
    """
    match = _SQUARE_RE.match(name.strip().lower())
    if match is None:
        raise ValueError(f"invalid square: {name!r}")
    col = ord(match.group(1)) - ord("a")
    row = BOARD_SIZE - int(match.group(2))
    return Square(row, col)


def move_notation(move: Move) -> str:
    sep = "x" if move.is_jump else "-"
    return f"{square_name(move.from_square)}{sep}{square_name(move.to_square)}"


def chain_notation(hops: Sequence[Move]) -> str:
    """
    Notation for a full turn: one simple move, or every hop of a jump chain.

    Raises:
        ValueError: hops is empty.
    """
    if not hops:
        raise ValueError("cannot write notation for an empty move")
    text = move_notation(hops[0])
    for hop in hops[1:]:
        text += f"x{square_name(hop.to_square)}"
    return text


def parse_chain(text: str) -> list[Square]:
    """
    Split move notation into the squares it visits, origin first.

    Accepts "-", "x", "X" and "×" as separators.

    Raises:
        ValueError: fewer than two squares, or any invalid square name.
    """
    parts = [p for p in _SEPARATORS.split(text.strip()) if p]
    if len(parts) < 2:
        raise ValueError(f"invalid move notation: {text!r}")
    return [parse_square(p) for p in parts]


def parse_hop_kinds(text: str) -> list[bool]:
    """
    The separators of move notation as one flag per hop, True for a jump
    ("x", "X" or "×") and False for a simple step ("-").

    Raises:
        ValueError: the separators do not sit one between each pair of
                    squares.
    """
    text = text.strip()
    kinds = [sep != "-" for sep in _SEPARATORS.findall(text)]
    if len(kinds) != len(parse_chain(text)) - 1:
        raise ValueError(f"invalid move notation: {text!r}")
    return kinds
