"""``greenlens nudges`` — short suggestions based on recent actions."""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console

from greenlens.cli import session
from greenlens.cli.render import LedgerRenderer
from greenlens.config import GreenLensConfig
from greenlens.core.errors import LedgerIntegrityError

console = Console()


def nudges_cmd(
    ledger_file: Path = typer.Option(
        None,
        "--ledger",
        "-l",
        help="Path to the ledger snapshot (defaults to GREENLENS_LEDGER_PATH).",
    ),
    limit: int = typer.Option(
        5,
        "--limit",
        "-n",
        min=1,
        max=5,
        help="How many recent entries to summarize.",
    ),
) -> None:
    """Suggest next steps based on the most recent ledger entries."""
    config = GreenLensConfig()
    try:
        ledger = session.load_ledger(ledger_file or config.ledger_path)
    except LedgerIntegrityError as exc:
        console.print(f"[bold red]Ledger snapshot rejected:[/bold red] {exc}")
        raise typer.Exit(code=1)
    engine = session.build_engine(config, ledger)

    async def _run():
        try:
            return await engine.nudges(limit=limit)
        finally:
            await engine.aclose()

    LedgerRenderer(console=console).print_nudges(asyncio.run(_run()))
