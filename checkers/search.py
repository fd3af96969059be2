"""
Search: fixed-depth minimax with alpha-beta pruning and difficulty-tiered
move selection.

select_move() is the single entry point the computer opponent needs. It
takes a board, the side to move and a difficulty tier, and returns the
chosen move as a full line of hops (one hop for a simple move, every hop of
the jump chain for a capture), or None when the side has no legal move.

Search design:

1. Fixed depth. Each tier fixes a ply depth (1, 3 or 5). There is no
   iterative deepening, no time limit, no transposition table and no
   quiescence extension; the search runs to completion once started.

2. Minimax from the root player's perspective. Leaves are scored with
   evaluate(board, root_player). The maximizing flag alternates every ply.
   A side with no legal moves scores -WIN_SCORE when it is the root player
   and +WIN_SCORE when it is the opponent.

3. Whole turns per ply. A capture is expanded to the end of its jump chain
   before recursing, so the search never evaluates a position mid-chain.
   When several continuation jumps exist, the chain follows the first one
   only. This understates the engine's tactical strength in positions with
   branching captures but never plays an illegal chain.

4. Chains are returned as tuples of hops built fresh per branch; no Move is
   ever rewritten, so sibling branches share nothing.

Threading model:
    Everything here is synchronous and works on immutable boards. Callers
    that do not want to block (the text interface, the web app) run
    select_move() on a worker thread.
"""

import logging
import random
from dataclasses import dataclass
from typing import NamedTuple

from checkers.board import Board, Color
from checkers.constants import (
    DEFAULT_DIFFICULTY,
    DIFFICULTY_SETTINGS,
    WIN_SCORE,
    Difficulty,
)
from checkers.evaluate import evaluate
from checkers.rules import Move, all_legal_moves, apply_move, continuation_jumps

_log = logging.getLogger(__name__)

Line = tuple[Move, ...]


class SearchResult(NamedTuple):
    score: int
    line: Line | None


@dataclass
class SearchState:
    """
    Statistics for one select_move() call.

    Attributes:
        node_count: Positions visited by minimax, leaves included.
        depth:      Ply depth searched; 0 when the move was chosen without
                    a search (single legal move or a random pick).
        best_score: Score of the chosen line from the mover's perspective.
                    0 when no search ran.
        best_line:  The line returned to the caller.
    """

    node_count: int = 0
    depth: int = 0
    best_score: int = 0
    best_line: Line | None = None


def expand_chain(board: Board, move: Move) -> tuple[Board, Line]:
    """
    Apply move and, for a jump, every forced continuation after it.

    Continuations are taken in enumeration order, always the first one.

    Returns:
        The board after the whole turn and the hops played, move first.
    """
    mover = board.piece_at(move.from_square)
    board = apply_move(board, move)
    hops = [move]
    if move.is_jump and mover is not None:
        pending = continuation_jumps(board, move.to_square, mover.color)
        while pending:
            hop = pending[0]
            board = apply_move(board, hop)
            hops.append(hop)
            pending = continuation_jumps(board, hop.to_square, mover.color)
    return board, tuple(hops)


def minimax(
    board: Board,
    player: Color,
    depth: int,
    alpha: int,
    beta: int,
    maximizing: bool,
    state: SearchState,
) -> SearchResult:
    """
    Minimax search with alpha-beta pruning.

    Args:
        board:      Current position. Never modified; each child gets its own
                    derived board.
        player:     The root player. All scores are from their perspective.
        depth:      Remaining plies. 0 returns the static evaluation.
        alpha:      Best score the maximizer can already guarantee.
        beta:       Best score the minimizer can already guarantee.
        maximizing: True when player is to move at this node.
        state:      Node counter.

    Returns:
        SearchResult(score, line). line is the best line for the side to
        move at this node, or None at leaves and terminal nodes.
    """
    state.node_count += 1

    if depth <= 0:
        return SearchResult(evaluate(board, player), None)

    side = player if maximizing else player.opponent
    moves = all_legal_moves(board, side)

    # The side to move is stuck: it has lost.
    if not moves:
        return SearchResult(-WIN_SCORE if maximizing else WIN_SCORE, None)

    best_score = 0
    best_line: Line | None = None

    for move in moves:
        child, line = expand_chain(board, move)
        score = minimax(child, player, depth - 1, alpha, beta, not maximizing, state).score

        if maximizing:
            if best_line is None or score > best_score:
                best_score, best_line = score, line
            alpha = max(alpha, score)
        else:
            if best_line is None or score < best_score:
                best_score, best_line = score, line
            beta = min(beta, score)

        if beta <= alpha:
            break

    return SearchResult(best_score, best_line)


def select_move(
    board: Board,
    player: Color,
    difficulty: Difficulty | str = DEFAULT_DIFFICULTY,
    rng: random.Random | None = None,
    state: SearchState | None = None,
) -> Line | None:
    """
    Choose the computer's move for player.

    Args:
        board:      The current position. Not modified.
        player:     Side to move.
        difficulty: A Difficulty tier or its name ("easy", "medium", "hard").
        rng:        Random source for the randomized tiers. Defaults to the
                    module-level random functions.
        state:      Optional SearchState to receive node count, depth and
                    score for reporting.

    Returns:
        The chosen line of hops, or None when player has no legal move,
        which the caller treats as a loss for player.

    Raises:
        ValueError: Unknown difficulty name.
    """
    settings = DIFFICULTY_SETTINGS[Difficulty(difficulty)]
    rng = rng or random
    state = state if state is not None else SearchState()

    moves = all_legal_moves(board, player)
    if not moves:
        return None

    if len(moves) == 1:
        line = expand_chain(board, moves[0])[1]
    elif settings.randomness > 0 and rng.random() < settings.randomness:
        line = expand_chain(board, rng.choice(moves))[1]
        _log.debug("random pick for %s at %s", player.value, Difficulty(difficulty).value)
    else:
        result = minimax(board, player, settings.depth, -WIN_SCORE, WIN_SCORE, True, state)
        # Unreachable in practice: a non-empty move list always yields a line.
        line = result.line or expand_chain(board, moves[0])[1]
        state.depth = settings.depth
        state.best_score = result.score
        _log.debug(
            "search %s depth=%d score=%d nodes=%d",
            player.value, settings.depth, result.score, state.node_count,
        )

    state.best_line = line
    return line
