"""
Interface package: text protocol for playing against the checkers engine.

Modules:
    cli — Line-oriented command handler.
          Reads commands from stdin, writes replies to stdout.
          Can be run as a standalone script: python interface/cli.py
"""
