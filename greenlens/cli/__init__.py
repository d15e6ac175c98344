"""GreenLens CLI — Typer-based command-line interface.

Provides the ``greenlens`` command with subcommands for estimating and
committing actions, reviewing the ledger, simulating scenarios and
requesting nudges.

All output uses Rich for formatted terminal display.
"""
