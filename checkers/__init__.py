"""
Checkers engine package.

This package implements the rules of 8x8 English draughts and a computer
opponent using fixed-depth minimax search with alpha-beta pruning.

Modules:
    constants — Board geometry, piece values, bonuses, and difficulty tiers
    board     — Immutable board value, pieces, and the text board format
    rules     — Legal-move generation, mandatory capture, jump chains, terminal state
    notation  — Algebraic square names and move notation for move logs
    evaluate  — Static position evaluation (material + positional bonuses)
    search    — Minimax search and move selection per difficulty tier
    game      — Game session: turn order, move history, pending jumps, status
"""
