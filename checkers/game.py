"""
Game session: the caller-side state around the pure rules engine.

A Game owns the authoritative board, whose turn it is, a pending multi-jump
(the piece that must keep jumping), the move history, live piece counts and
the game status. It validates every move against the rules before applying
it and checks for the end of the game after each completed turn.

Turn structure:
    A simple move ends the turn. A jump ends the turn only when the landing
    piece has no continuation jump; otherwise the same player moves again
    and may only move that piece, only by jumping. History records one entry
    per turn, with each further hop appended to its notation ("c3xe5xg7").

Draws:
    The rules engine never produces a draw. A session declares one when
    draw_move_limit consecutive turns pass without a capture. Pass None to
    disable the limit.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from checkers.board import Board, Color, Square
from checkers.constants import DEFAULT_DIFFICULTY, DRAW_MOVE_LIMIT, Difficulty
from checkers.notation import move_notation, parse_chain, parse_hop_kinds, square_name
from checkers.rules import (
    GameStatus,
    Move,
    all_legal_moves,
    apply_move,
    continuation_jumps,
    game_status,
    legal_moves,
)
from checkers.search import Line, SearchState, expand_chain, select_move

_log = logging.getLogger(__name__)


class IllegalMoveError(ValueError):
    """The move is not in the current legal set."""


class GameOverError(ValueError):
    """A move was attempted after the game ended."""


@dataclass
class HistoryEntry:
    player: Color
    notation: str
    from_square: Square
    to_square: Square


class Game:
    """
    One game of checkers between two players, either of whom may be the
    computer.

    Attributes:
        board:        Current position.
        to_move:      Player on turn.
        pending_jump: Square of the piece that must continue a jump chain,
                      or None.
        history:      One HistoryEntry per turn, oldest first.
        status:       PLAYING until the game ends.
        quiet_turns:  Completed turns since the last capture.
    """

    def __init__(
        self,
        board: Board | None = None,
        to_move: Color = Color.RED,
        draw_move_limit: int | None = DRAW_MOVE_LIMIT,
        pending_jump: Square | None = None,
    ) -> None:
        self.draw_move_limit = draw_move_limit
        self.reset(board, to_move, pending_jump)

    def reset(
        self,
        board: Board | None = None,
        to_move: Color = Color.RED,
        pending_jump: Square | None = None,
    ) -> None:
        """
        Start over from board with to_move on turn.

        pending_jump resumes a jump chain in progress: only the piece on that
        square may move, and only by jumping.

        Raises:
            IllegalMoveError: pending_jump is not a piece of to_move with a
                              jump available.
        """
        self.board: Board = board if board is not None else Board.initial()
        self.to_move: Color = to_move
        self.pending_jump: Square | None = None
        self.history: list[HistoryEntry] = []
        self.quiet_turns: int = 0
        self._captured_this_turn = False
        # A supplied position may already be decided.
        self.status: GameStatus = game_status(self.board, to_move)

        if pending_jump is not None:
            if not continuation_jumps(self.board, pending_jump, to_move):
                raise IllegalMoveError(
                    f"no jump to continue from {square_name(pending_jump)}"
                )
            self.pending_jump = pending_jump
            self._captured_this_turn = True

    # -----------------------------------------------------------------------
    # Queries
    # -----------------------------------------------------------------------

    @property
    def red_count(self) -> int:
        return self.board.count(Color.RED)

    @property
    def black_count(self) -> int:
        return self.board.count(Color.BLACK)

    @property
    def is_over(self) -> bool:
        return self.status is not GameStatus.PLAYING

    def legal_moves(self, square: Square | None = None) -> list[Move]:
        """
        Legal moves for the player on turn, for one square or for all.

        During a multi-jump only the jumping piece may move.
        """
        if self.is_over:
            return []
        if self.pending_jump is not None:
            if square is not None and square != self.pending_jump:
                return []
            return continuation_jumps(self.board, self.pending_jump, self.to_move)
        if square is None:
            return all_legal_moves(self.board, self.to_move)
        return legal_moves(self.board, self.to_move, square)

    def history_pairs(self) -> list[tuple[int, str, str | None]]:
        """History grouped as (number, first move, reply or None)."""
        pairs = []
        for i in range(0, len(self.history), 2):
            reply = self.history[i + 1].notation if i + 1 < len(self.history) else None
            pairs.append((i // 2 + 1, self.history[i].notation, reply))
        return pairs

    # -----------------------------------------------------------------------
    # Moves
    # -----------------------------------------------------------------------

    def play(self, move: Move) -> bool:
        """
        Play one step or hop for the player on turn.

        Returns:
            True when the turn is complete, False when the same piece must
            jump again.

        Raises:
            GameOverError:   The game has already ended.
            IllegalMoveError: move is not currently legal.
        """
        if self.is_over:
            raise GameOverError(f"game is over: {self.status.value}")
        if move not in self.legal_moves():
            raise IllegalMoveError(f"illegal move: {move_notation(move)}")

        self.board = apply_move(self.board, move)
        self._record(move)

        if move.is_jump:
            self._captured_this_turn = True
            if continuation_jumps(self.board, move.to_square, self.to_move):
                self.pending_jump = move.to_square
                return False

        self._end_turn()
        return True

    def play_chain(self, hops: Line | list[Move]) -> None:
        for hop in hops:
            self.play(hop)

    def play_notation(self, text: str) -> Line:
        """
        Play a move written in notation, e.g. "c3-d4" or "c3xe5xg7".

        A partial chain is allowed; the turn then stays with the same player
        until the chain is finished. Each separator must name the kind of hop
        it stands for: "-" a simple step, "x" a jump. Nothing is applied
        unless every hop is legal.

        Raises:
            ValueError:       Malformed notation.
            IllegalMoveError: Some hop is not legal, or is written with the
                              wrong separator.
            GameOverError:    The game has already ended.
        """
        if self.is_over:
            raise GameOverError(f"game is over: {self.status.value}")

        squares = parse_chain(text)
        kinds = parse_hop_kinds(text)
        board = self.board
        options = self.legal_moves()
        hops: list[Move] = []
        for origin, target, is_jump in zip(squares, squares[1:], kinds):
            match = next(
                (m for m in options if m.from_square == origin and m.to_square == target),
                None,
            )
            if match is None:
                raise IllegalMoveError(
                    f"illegal move: {square_name(origin)} to {square_name(target)}"
                )
            if match.is_jump != is_jump:
                raise IllegalMoveError(
                    f"illegal move: {move_notation(match)} written as "
                    f"{'a jump' if is_jump else 'a simple move'}"
                )
            hops.append(match)
            board = apply_move(board, match)
            options = continuation_jumps(board, target, self.to_move) if match.is_jump else []

        self.play_chain(hops)
        return tuple(hops)

    def computer_move(
        self,
        difficulty: Difficulty | str = DEFAULT_DIFFICULTY,
        rng: random.Random | None = None,
        state: SearchState | None = None,
    ) -> Line | None:
        """
        Let the engine play the rest of the current turn.

        Returns:
            The hops played, or None when the game is already over.
        """
        if self.is_over:
            return None

        if self.pending_jump is not None:
            line = expand_chain(self.board, self.legal_moves()[0])[1]
        else:
            line = select_move(self.board, self.to_move, difficulty, rng=rng, state=state)
        if line is None:
            return None

        self.play_chain(line)
        return line

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    def _record(self, move: Move) -> None:
        if self.pending_jump is not None and self.history:
            last = self.history[-1]
            last.notation += f"x{square_name(move.to_square)}"
            last.to_square = move.to_square
        else:
            self.history.append(
                HistoryEntry(self.to_move, move_notation(move), move.from_square, move.to_square)
            )

    def _end_turn(self) -> None:
        self.pending_jump = None
        self.quiet_turns = 0 if self._captured_this_turn else self.quiet_turns + 1
        self._captured_this_turn = False
        self.to_move = self.to_move.opponent
        self.status = game_status(self.board, self.to_move)

        if (
            self.status is GameStatus.PLAYING
            and self.draw_move_limit is not None
            and self.quiet_turns >= self.draw_move_limit
        ):
            self.status = GameStatus.DRAW

        if self.is_over:
            _log.info(
                "game over: %s after %d turns (red=%d black=%d)",
                self.status.value, len(self.history), self.red_count, self.black_count,
            )
