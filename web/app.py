"""
FastAPI web application for the checkers engine.

Exposes a small JSON API:
    POST /api/move         computer move for a position and difficulty
    POST /api/legal-moves  legal moves for the side on turn
    POST /api/play         validate and apply a player's move
    GET  /api/health       liveness probe

Architecture notes:
- Sync endpoints (not async): FastAPI runs sync handlers in a thread pool,
  which is the correct pattern for CPU-bound blocking calls like the search.
- Stateless per request: the client sends the full board each time in the
  text form "rows separated by /"; no server-side game state is kept.
- A jump chain split across requests is carried by the client: /api/play
  returns the landing square as "pending" and later requests send it back.
- Any presentation pacing (a "thinking" pause) is the client's business.
"""

import logging

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, field_validator

from checkers.board import Board, Color
from checkers.constants import DEFAULT_DIFFICULTY, Difficulty
from checkers.game import Game
from checkers.notation import chain_notation, move_notation, parse_square, square_name
from checkers.rules import GameStatus, has_any_capture
from checkers.search import SearchState

# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------

logging.basicConfig(level=logging.INFO)
_log = logging.getLogger(__name__)

app = FastAPI(title="Checkers AI", version="1.0.0")


# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------


class PositionRequest(BaseModel):
    """
    A position with the side to move.

    Fields:
        board:   Board in text form, 8 rows separated by "/".
        player:  "red" or "black" (case-insensitive).
        pending: Square of a piece partway through a jump chain, as returned
                 by /api/play. Only that piece may move, and only by
                 jumping.
    """

    board: str
    player: Color = Color.RED
    pending: str | None = None

    @field_validator("player", mode="before")
    @classmethod
    def normalise_player(cls, v: object) -> object:
        return v.lower() if isinstance(v, str) else v


class MoveRequest(PositionRequest):
    """Position plus the difficulty tier for the computer's reply."""

    difficulty: Difficulty = DEFAULT_DIFFICULTY

    @field_validator("difficulty", mode="before")
    @classmethod
    def normalise_difficulty(cls, v: object) -> object:
        return v.lower() if isinstance(v, str) else v


class MoveResponse(BaseModel):
    """
    Engine response after computing its move.

    Fields:
        move:   Chosen move in notation, every hop of a jump chain included.
        board:  Board after the move.
        score:  Search score from the mover's perspective (0 when no search
                ran: a forced move or a random pick).
        depth:  Plies searched.
        nodes:  Positions visited.
        status: Game status after the move, with the opponent on turn.
    """

    move: str
    board: str
    score: int
    depth: int
    nodes: int
    status: GameStatus


class LegalMovesRequest(PositionRequest):
    square: str | None = None


class LegalMovesResponse(BaseModel):
    moves: list[str]
    must_capture: bool


class PlayRequest(PositionRequest):
    move: str


class PlayResponse(BaseModel):
    """
    Result of a player's move.

    Fields:
        board:         Board after the move.
        turn_complete: False when the moved piece must keep jumping; the
                       client then sends the continuation from the landing
                       square with the same player.
        player:        Player on turn after the move.
        status:        Game status after the move.
        pending:       Landing square of the piece that must keep jumping,
                       to be sent back as "pending" with the continuation.
                       None when the turn is complete.
    """

    board: str
    turn_complete: bool
    player: Color
    status: GameStatus
    pending: str | None = None


def _parse_board(text: str) -> Board:
    try:
        return Board.parse(text)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid board: {exc}") from exc


def _open_game(request: PositionRequest, board: Board) -> Game:
    """Session for one request, resuming the jump chain named by pending."""
    try:
        pending = parse_square(request.pending) if request.pending else None
        return Game(board, request.player, draw_move_limit=None, pending_jump=pending)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


# ---------------------------------------------------------------------------
# API routes
# ---------------------------------------------------------------------------


@app.post("/api/move", response_model=MoveResponse)
def api_move(request: MoveRequest) -> MoveResponse:
    """
    Compute the engine's move for the given position. With pending set the
    engine only finishes that piece's jump chain.

    Raises:
        HTTPException 400: Malformed board or pending square, or game already
                           over.
        HTTPException 500: Engine failure, or no move in a live position
                           (should not happen).
    """
    game = _open_game(request, _parse_board(request.board))
    if game.is_over:
        raise HTTPException(status_code=400, detail=f"Game is already over: {game.status.value}")

    state = SearchState()
    try:
        line = game.computer_move(request.difficulty, state=state)
    except Exception as exc:
        _log.exception("Engine search failed for board=%s", request.board)
        raise HTTPException(status_code=500, detail=f"Engine error: {exc}") from exc

    if line is None:
        raise HTTPException(status_code=500, detail="Engine returned no move")

    notation = chain_notation(line)

    _log.info(
        "Move=%s player=%s difficulty=%s score=%d depth=%d nodes=%d",
        notation,
        request.player.value,
        request.difficulty.value,
        state.best_score,
        state.depth,
        state.node_count,
    )

    return MoveResponse(
        move=notation,
        board=game.board.to_text(),
        score=state.best_score,
        depth=state.depth,
        nodes=state.node_count,
        status=game.status,
    )


@app.post("/api/legal-moves", response_model=LegalMovesResponse)
def api_legal_moves(request: LegalMovesRequest) -> LegalMovesResponse:
    """
    Legal moves for the side on turn, optionally for a single square. With
    pending set only that piece's continuation jumps are listed.
    """
    board = _parse_board(request.board)
    game = _open_game(request, board)
    try:
        square = parse_square(request.square) if request.square else None
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return LegalMovesResponse(
        moves=[move_notation(m) for m in game.legal_moves(square)],
        must_capture=has_any_capture(board, request.player),
    )


@app.post("/api/play", response_model=PlayResponse)
def api_play(request: PlayRequest) -> PlayResponse:
    """
    Apply a player's move after checking it against the rules.

    Raises:
        HTTPException 400: Malformed board, notation or pending square,
                           illegal move, or game already over.
    """
    game = _open_game(request, _parse_board(request.board))
    try:
        hops = game.play_notation(request.move)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    if game.pending_jump is not None:
        _log.info("Partial chain %s by %s", chain_notation(hops), request.player.value)

    return PlayResponse(
        board=game.board.to_text(),
        turn_complete=game.pending_jump is None,
        player=game.to_move,
        status=game.status,
        pending=square_name(game.pending_jump) if game.pending_jump is not None else None,
    )


@app.get("/api/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="127.0.0.1", port=8000)
