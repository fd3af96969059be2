"""
Line-oriented text protocol for playing checkers against the engine.

The handler reads commands from stdin and writes replies to stdout, one
reply per line, flushed immediately so that a driving script never blocks
on buffered output. It can be used directly from a terminal or driven by a
program (tools/bench.py does exactly that).

Commands:
    new                         start a new game from the standard layout
    position startpos [color]   same as new, optionally with Black to move
    position <board> [color]    set up a board in text form, e.g.
                                .b.b.b.b/b.b.b.b./.b.b.b.b/......../......../r.r.r.r./.r.r.r.r/r.r.r.r.
    show                        print the board and the player on turn
    moves [square]              list legal moves, for one square or all
    play <move>                 play a move in notation: c3-d4, c3xe5xg7
    difficulty easy|medium|hard set the computer's difficulty tier
    delay <ms>                  pause before the computer's reply is sent
    go                          the computer plays the side on turn
    status                      game status, player on turn and piece counts
    history                     numbered move list
    quit                        exit

Replies to "go":
    info depth <d> score <s> nodes <n> time <ms>
    bestmove <move>             or "bestmove (none)" when there is no move

Threading model:
    The loop runs on the main thread. "go" runs the search on a daemon
    thread so a slow HARD search never blocks reading stdin. Every other
    command first waits for a running search to finish, because the search
    thread applies its move to the shared game when it is done. The optional
    delay is presentation pacing only; the engine itself never sleeps.

Critical rule: stdout carries protocol replies only. Diagnostics go to
stderr.
"""

import logging
import os
import sys
import threading
import time

# ---------------------------------------------------------------------------
# Path setup: make 'checkers' importable when this script is run directly
# as `python interface/cli.py` from the repo root.
# ---------------------------------------------------------------------------
_REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _REPO_ROOT not in sys.path:
    sys.path.insert(0, _REPO_ROOT)

from checkers.board import Board, Color
from checkers.constants import DEFAULT_DIFFICULTY, Difficulty
from checkers.game import Game
from checkers.notation import chain_notation, move_notation, parse_square
from checkers.search import SearchState


def _send(line: str) -> None:
    """Write a protocol reply to stdout and flush immediately."""
    print(line, flush=True)


def _log(message: str) -> None:
    """Write a diagnostic message to stderr, keeping stdout protocol-clean."""
    print(message, file=sys.stderr, flush=True)


class CliHandler:
    """
    Stateful handler for the text protocol.

    Attributes:
        game:          The game being played.
        difficulty:    Tier used by "go".
        delay_ms:      Pause before the computer's reply is sent.
        search_thread: The running search thread, or None.
    """

    def __init__(self) -> None:
        self.game: Game = Game()
        self.difficulty: Difficulty = DEFAULT_DIFFICULTY
        self.delay_ms: int = 0
        self.search_thread: threading.Thread | None = None

    # -----------------------------------------------------------------------
    # Command handlers
    # -----------------------------------------------------------------------

    def handle_new(self) -> None:
        self.wait()
        self.game.reset()

    def handle_position(self, tokens: list[str]) -> None:
        """
        Set up a position.

        Formats:
            position startpos [red|black]
            position <board-text> [red|black]
        """
        self.wait()
        if not tokens:
            return

        try:
            board = Board.initial() if tokens[0] == "startpos" else Board.parse(tokens[0])
            to_move = Color(tokens[1].lower()) if len(tokens) > 1 else Color.RED
        except ValueError as e:
            _log(f"cli: bad position: {e}")
            return
        self.game.reset(board, to_move)

    def handle_show(self) -> None:
        self.wait()
        for line in str(self.game.board).splitlines():
            _send(line)
        _send(f"turn {self.game.to_move.value}")

    def handle_moves(self, tokens: list[str]) -> None:
        self.wait()
        square = parse_square(tokens[0]) if tokens else None
        moves = self.game.legal_moves(square)
        listed = " ".join(move_notation(m) for m in moves) if moves else "(none)"
        _send(f"moves {listed}")

    def handle_play(self, tokens: list[str]) -> None:
        self.wait()
        if not tokens:
            _log("cli: play needs a move")
            return
        self.game.play_notation(tokens[0])
        self.handle_status()

    def handle_difficulty(self, tokens: list[str]) -> None:
        self.wait()
        if tokens:
            self.difficulty = Difficulty(tokens[0].lower())

    def handle_delay(self, tokens: list[str]) -> None:
        self.wait()
        if tokens:
            self.delay_ms = max(0, int(tokens[0]))

    def handle_go(self) -> None:
        """
        Start the computer's move on a background thread.

        The thread searches, applies the chosen line to the game, waits out
        the pacing delay, and then sends "info" and "bestmove".
        """
        self.wait()

        game = self.game
        difficulty = self.difficulty
        delay_s = self.delay_ms / 1000

        def search_and_reply() -> None:
            try:
                start = time.monotonic()
                state = SearchState()
                line = game.computer_move(difficulty, state=state)
                elapsed_ms = max(1, int((time.monotonic() - start) * 1000))

                if delay_s:
                    time.sleep(delay_s)

                if line is not None:
                    _send(
                        f"info depth {state.depth} score {state.best_score} "
                        f"nodes {state.node_count} time {elapsed_ms}"
                    )
                    _send(f"bestmove {chain_notation(line)}")
                else:
                    _send("bestmove (none)")

            except Exception as e:
                _log(f"search error: {e}")
                _send("bestmove (none)")

        self.search_thread = threading.Thread(target=search_and_reply, daemon=True)
        self.search_thread.start()

    def handle_status(self) -> None:
        self.wait()
        g = self.game
        _send(
            f"status {g.status.value} turn {g.to_move.value} "
            f"red {g.red_count} black {g.black_count}"
        )

    def handle_history(self) -> None:
        self.wait()
        for number, first, reply in self.game.history_pairs():
            _send(f"{number}. {first} {reply or ''}".rstrip())

    def handle_quit(self) -> None:
        """Exit without waiting for a running search; it is a daemon thread."""
        sys.exit(0)

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    def wait(self) -> None:
        """Block until the running search, if any, has replied."""
        if self.search_thread is not None and self.search_thread.is_alive():
            self.search_thread.join()
        self.search_thread = None


def dispatch(handler: CliHandler, line: str) -> None:
    """Route one input line to its handler. Unknown commands are ignored."""
    tokens = line.split()
    if not tokens:
        return
    command, args = tokens[0].lower(), tokens[1:]

    if command == "new":
        handler.handle_new()
    elif command == "position":
        handler.handle_position(args)
    elif command == "show":
        handler.handle_show()
    elif command == "moves":
        handler.handle_moves(args)
    elif command == "play":
        handler.handle_play(args)
    elif command == "difficulty":
        handler.handle_difficulty(args)
    elif command == "delay":
        handler.handle_delay(args)
    elif command == "go":
        handler.handle_go()
    elif command == "status":
        handler.handle_status()
    elif command == "history":
        handler.handle_history()
    elif command == "quit":
        handler.handle_quit()
    else:
        _log(f"cli: ignoring unknown command: {command!r}")


def run_cli_loop() -> None:
    """
    Main loop: read stdin line by line until "quit" or end of input.

    Each command is wrapped in a try/except so that one bad command (an
    illegal move, a malformed square) is reported on stderr and the session
    continues.
    """
    logging.basicConfig(level=logging.WARNING, stream=sys.stderr)
    handler = CliHandler()

    for raw_line in sys.stdin:
        try:
            dispatch(handler, raw_line.strip())
        except ValueError as e:
            _log(f"cli: {e}")
        except Exception as e:
            _log(f"cli: unhandled error for {raw_line.strip()!r}: {e}")

    handler.wait()


if __name__ == "__main__":
    run_cli_loop()
