"""
Engine constants: board geometry, piece values, search scores, and difficulty tiers.

All numeric constants used throughout the engine are defined here so that
the rules, evaluation and search modules never introduce their own magic
numbers. Tuning the computer opponent means editing this file only.

Values follow the same centi-unit convention as the evaluation: one man is
worth 100 points.
"""

from dataclasses import dataclass
from enum import Enum

# ---------------------------------------------------------------------------
# Board geometry
# ---------------------------------------------------------------------------
# Row 0 is the top of the board (Black's back row), row 7 the bottom (Red's).
# Only dark squares, where (row + col) is odd, are ever occupied.

BOARD_SIZE: int = 8
PIECES_PER_SIDE: int = 12

# Black starts on rows 0-2, Red on rows 5-7.
BLACK_START_ROWS: range = range(0, 3)
RED_START_ROWS: range = range(5, 8)

# Row on which a man of each color is crowned.
RED_PROMOTION_ROW: int = 0
BLACK_PROMOTION_ROW: int = BOARD_SIZE - 1

# ---------------------------------------------------------------------------
# Piece values and positional bonuses
# ---------------------------------------------------------------------------

MAN_VALUE: int = 100
KING_VALUE: int = 180

# Per row a man has advanced towards its promotion row.
ADVANCE_BONUS: int = 5
# A man still guarding its own back row.
BACK_ROW_BONUS: int = 15
# A man inside the central 4x4 block (rows 2-5, cols 2-5).
CENTER_BONUS: int = 10
CENTER_MIN: int = 2
CENTER_MAX: int = 5

# ---------------------------------------------------------------------------
# Special scores
# ---------------------------------------------------------------------------
# Returned when the side to move has no legal move. Large enough to dominate
# any material count (12 kings = 2160) but still a plain integer.

WIN_SCORE: int = 10_000

# ---------------------------------------------------------------------------
# Game session policy
# ---------------------------------------------------------------------------
# Consecutive completed turns without a capture after which a session
# declares the game drawn (40 moves per side). The rules module itself never
# produces a draw.

DRAW_MOVE_LIMIT: int = 80


# ---------------------------------------------------------------------------
# Difficulty tiers
# ---------------------------------------------------------------------------


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True)
class DifficultySettings:
    """
    Search parameters for one difficulty tier.

    Attributes:
        depth:      Fixed search depth in plies.
        randomness: Probability of playing a uniformly random legal move
                    instead of searching.
    """

    depth: int
    randomness: float


DIFFICULTY_SETTINGS: dict[Difficulty, DifficultySettings] = {
    Difficulty.EASY:   DifficultySettings(depth=1, randomness=0.40),
    Difficulty.MEDIUM: DifficultySettings(depth=3, randomness=0.15),
    Difficulty.HARD:   DifficultySettings(depth=5, randomness=0.0),
}

DEFAULT_DIFFICULTY: Difficulty = Difficulty.MEDIUM
