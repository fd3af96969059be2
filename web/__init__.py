"""
Web application package for the checkers engine.

Provides a FastAPI-based JSON API for legal-move queries and computer moves.
Every request carries the full board; the server keeps no game state.
"""
