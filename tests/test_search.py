import random

import pytest

from checkers.board import Board, Color, Square
from checkers.constants import DIFFICULTY_SETTINGS, WIN_SCORE, Difficulty
from checkers.evaluate import evaluate
from checkers.rules import Move, all_legal_moves, apply_chain, has_any_capture
from checkers.search import SearchState, expand_chain, minimax, select_move


class NoRandom:
    """Random source that fails the test if it is ever consulted."""

    def random(self):
        raise AssertionError("randomness used")

    def choice(self, seq):
        raise AssertionError("randomness used")


class AlwaysRandom:
    """Random source that always triggers a random pick of the last move."""

    def random(self):
        return 0.0

    def choice(self, seq):
        return seq[-1]


def test_difficulty_table():
    assert DIFFICULTY_SETTINGS[Difficulty.EASY].depth == 1
    assert DIFFICULTY_SETTINGS[Difficulty.EASY].randomness == pytest.approx(0.40)
    assert DIFFICULTY_SETTINGS[Difficulty.MEDIUM].depth == 3
    assert DIFFICULTY_SETTINGS[Difficulty.MEDIUM].randomness == pytest.approx(0.15)
    assert DIFFICULTY_SETTINGS[Difficulty.HARD].depth == 5
    assert DIFFICULTY_SETTINGS[Difficulty.HARD].randomness == 0


def test_no_move_returns_none(blocked_red_board):
    assert select_move(blocked_red_board, Color.RED, Difficulty.HARD) is None


def test_single_move_skips_search(double_jump_board):
    state = SearchState()
    line = select_move(double_jump_board, Color.RED, Difficulty.HARD, state=state)
    assert state.node_count == 0
    assert state.depth == 0
    assert [hop.to_square for hop in line] == [Square(3, 2), Square(1, 4)]
    assert apply_chain(double_jump_board, line).count(Color.BLACK) == 0


def test_expand_chain_does_not_touch_input(double_jump_board):
    (first,) = all_legal_moves(double_jump_board, Color.RED)
    board, hops = expand_chain(double_jump_board, first)
    assert hops[0] is first
    assert first.to_square == Square(3, 2)
    assert double_jump_board.count(Color.BLACK) == 2
    assert board.count(Color.BLACK) == 0


def test_depth_one_from_start():
    board = Board.initial()
    state = SearchState()
    result = minimax(board, Color.RED, 1, -WIN_SCORE, WIN_SCORE, True, state)

    # Moving into the center gains the most and leaves nothing en prise.
    assert result.line == (Move(Square(5, 6), Square(4, 5)),)
    assert not has_any_capture(apply_chain(board, result.line), Color.BLACK)
    assert state.node_count == 1 + 7


def test_avoids_hanging_a_piece(hanging_board):
    line = select_move(hanging_board, Color.RED, Difficulty.HARD, rng=NoRandom())
    assert line == (Move(Square(5, 4), Square(4, 5)),)
    assert not has_any_capture(apply_chain(hanging_board, line), Color.BLACK)


def test_hard_is_deterministic():
    board = Board.parse(
        ".b.b.b.b/b...b.../...b.b../..b...../.r...r../..r...r./.r.r...r/r...r.r."
    )
    first = select_move(board, Color.RED, Difficulty.HARD, rng=NoRandom())
    second = select_move(board, Color.RED, Difficulty.HARD, rng=NoRandom())
    assert first == second


def test_random_pick():
    board = Board.initial()
    line = select_move(board, Color.RED, Difficulty.EASY, rng=AlwaysRandom())
    assert line == (all_legal_moves(board, Color.RED)[-1],)


def test_seeded_easy_moves_are_legal():
    board = Board.initial()
    rng = random.Random(3)
    for _ in range(10):
        line = select_move(board, Color.RED, Difficulty.EASY, rng=rng)
        assert line[0] in all_legal_moves(board, Color.RED)


def test_minimax_depth_zero_is_static_eval(hanging_board):
    state = SearchState()
    result = minimax(hanging_board, Color.RED, 0, -WIN_SCORE, WIN_SCORE, True, state)
    assert result.score == evaluate(hanging_board, Color.RED)
    assert result.line is None


def test_minimax_stuck_side_loses(blocked_red_board):
    state = SearchState()
    assert minimax(blocked_red_board, Color.RED, 3, -WIN_SCORE, WIN_SCORE, True, state).score == -WIN_SCORE
    # Black to move in the minimizing role, red already stuck after any reply.
    assert minimax(blocked_red_board, Color.BLACK, 1, -WIN_SCORE, WIN_SCORE, False, state).score == WIN_SCORE


def test_search_takes_winning_capture():
    # Red can take the last black man; HARD must see the win.
    board = Board.parse("......../......../......../..b...../...r..../......../......../r.......")
    line = select_move(board, Color.RED, Difficulty.HARD, rng=NoRandom())
    assert line[0].is_jump


def test_unknown_difficulty():
    with pytest.raises(ValueError):
        select_move(Board.initial(), Color.RED, "impossible")
