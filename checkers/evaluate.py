"""
Static evaluation: material plus simple positional bonuses.

The search needs to assign a number to any board so it can compare the
positions its moves lead to. This module scores a board from the point of
view of one player: positive means that player is ahead.

Each piece contributes its base value (man 100, king 180), counted positive
for the perspective player's pieces and negative for the opponent's. Men also
collect positional bonuses:

    - Advancement: 5 points per row the man has moved towards its promotion
      row. Red men start on rows 5-7 and advance towards row 0; Black men
      start on rows 0-2 and advance towards row 7.
    - Back row: 15 points for a man still on its own back row, which keeps
      the opponent's men from crowning there.
    - Center: 10 points for a man inside the central 4x4 block (rows 2-5,
      cols 2-5), where it controls the most diagonals.

Kings receive no positional bonus beyond their base value.
"""

from checkers.board import Board, Color
from checkers.constants import (
    ADVANCE_BONUS,
    BACK_ROW_BONUS,
    BOARD_SIZE,
    CENTER_BONUS,
    CENTER_MAX,
    CENTER_MIN,
    KING_VALUE,
    MAN_VALUE,
)


def evaluate(board: Board, player: Color) -> int:
    """
    Score board from player's perspective.

    Args:
        board:  The position to score. Not modified.
        player: The perspective; their pieces count positive.

    Returns:
        Sum of signed piece scores.

    Example:
        >>> evaluate(Board.initial(), Color.RED)  # symmetric start
        0
    """
    score = 0

    for square, piece in board.pieces():
        if piece.is_king:
            piece_score = KING_VALUE
        else:
            piece_score = MAN_VALUE

            # Rows advanced from the own back row towards the promotion row.
            if piece.color is Color.RED:
                advanced = (BOARD_SIZE - 1) - square.row
            else:
                advanced = square.row
            piece_score += advanced * ADVANCE_BONUS

            if square.row == piece.color.back_row:
                piece_score += BACK_ROW_BONUS

            if CENTER_MIN <= square.row <= CENTER_MAX and CENTER_MIN <= square.col <= CENTER_MAX:
                piece_score += CENTER_BONUS

        score += piece_score if piece.color is player else -piece_score

    return score
