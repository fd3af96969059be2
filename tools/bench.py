#!/usr/bin/env python3
"""
Benchmark: measure nodes visited and time per move at HARD difficulty.

Run before and after any change to the search or evaluation to quantify its
effect. A lower node count on the same positions means more effective
pruning; the chosen moves show whether playing strength changed.

Usage: python3 tools/bench.py
"""
import os
import subprocess
import sys

REPO = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
PYTHON = sys.executable
CLI = os.path.join(REPO, "interface", "cli.py")

# Fixed positions spanning opening, middlegame and endgame. Same positions
# for every comparison.
POSITIONS = [
    ("Start",        "startpos", "red"),
    ("Start black",  ".b.b.b.b/b.b.b.b./.b.b.b.b/......../...r..../r...r.r./.r.r.r.r/r.r.r.r.", "black"),
    ("Exchange",     ".b.b.b.b/b.b.b.b./...b.b.b/..b...../...r..../r...r.r./.r.r.r.r/r.r.r.r.", "red"),
    ("Open middle",  ".b.b.b.b/b...b.../...b.b../..b...../.r...r../..r...r./.r.r...r/r...r.r.", "red"),
    ("Double jump",  "......../......../...b..../......../...b..../....r.../......../........", "red"),
    ("Kings",        "......../..B...../......../......../......../....R.R./......../........", "red"),
    ("Race",         "......../..b...../......../......../......../......../.....r../........", "red"),
]


def run_position(label: str, board: str, player: str) -> dict:
    """Run a single position through the CLI and return metrics.

    Spawns the CLI as a subprocess, sets the position and HARD difficulty,
    asks for a move, and parses the "info" and "bestmove" replies.

    Args:
        label:  Human-readable position name for display.
        board:  "startpos" or a board in text form.
        player: Side to move.

    Returns:
        Dict with keys: label, move, depth, score, nodes, time_ms.
    """
    env = {**os.environ, "PYTHONPATH": REPO}
    proc = subprocess.Popen(
        [PYTHON, CLI],
        stdin=subprocess.PIPE,
        stdout=subprocess.PIPE,
        stderr=subprocess.DEVNULL,
        text=True,
        env=env,
    )
    cmds = f"position {board} {player}\ndifficulty hard\ngo\n"
    proc.stdin.write(cmds)
    proc.stdin.flush()

    nodes = time_ms = depth = score = 0
    move = "(none)"
    for line in proc.stdout:
        line = line.strip()
        if line.startswith("info"):
            parts = line.split()

            def _get(key: str) -> int:
                try:
                    return int(parts[parts.index(key) + 1])
                except (ValueError, IndexError):
                    return 0

            depth = _get("depth")
            score = _get("score")
            nodes = _get("nodes")
            time_ms = _get("time")
        elif line.startswith("bestmove"):
            move = line.split()[1]
            break

    proc.stdin.write("quit\n")
    proc.stdin.flush()
    proc.wait(timeout=5)

    return {
        "label": label,
        "move": move,
        "depth": depth,
        "score": score,
        "nodes": nodes,
        "time_ms": time_ms,
    }


def main() -> None:
    """Run all benchmark positions and print a summary table."""
    print(f"Checkers engine benchmark — {PYTHON}")
    print(f"CLI: {CLI}")
    print()
    print(
        f"{'Position':<14} {'Move':<12} {'Depth':>5} {'Score':>6} "
        f"{'Nodes':>9} {'Time(ms)':>9}"
    )
    print("-" * 60)

    results = []
    for label, board, player in POSITIONS:
        r = run_position(label, board, player)
        results.append(r)
        print(
            f"{r['label']:<14} {r['move']:<12} {r['depth']:>5} {r['score']:>6} "
            f"{r['nodes']:>9,} {r['time_ms']:>9,}"
        )

    valid = [r for r in results if r["nodes"] > 0]
    if valid:
        avg_nodes = sum(r["nodes"] for r in valid) // len(valid)
        avg_time = sum(r["time_ms"] for r in valid) // len(valid)
        print("-" * 60)
        print(
            f"{'AVERAGE':<14} {'':<12} {'':<5} {'':<6} "
            f"{avg_nodes:>9,} {avg_time:>9,}"
        )
    print()


if __name__ == "__main__":
    main()
