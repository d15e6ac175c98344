"""``greenlens ledger`` — show committed actions and the running aggregate."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from greenlens.cli import session
from greenlens.cli.render import LedgerRenderer
from greenlens.config import GreenLensConfig
from greenlens.core.errors import AggregateOverflow, LedgerIntegrityError

console = Console()


def ledger_cmd(
    ledger_file: Path = typer.Option(
        None,
        "--ledger",
        "-l",
        help="Path to the ledger snapshot (defaults to GREENLENS_LEDGER_PATH).",
    ),
    limit: int = typer.Option(
        0,
        "--limit",
        "-n",
        help="Show only the N most recent entries (0 shows all).",
    ),
    verify_chain: bool = typer.Option(
        False,
        "--verify-chain",
        "-V",
        help="Verify the seal chain before displaying.",
    ),
    demo: bool = typer.Option(
        False,
        "--demo",
        help="Seed an empty ledger with sample entries.",
    ),
) -> None:
    """Show the ledger, most recent first, and its aggregate impact."""
    config = GreenLensConfig()
    renderer = LedgerRenderer(console=console)

    try:
        # Loading checks recorded seals, so a tampered snapshot fails here.
        ledger = session.load_ledger(ledger_file or config.ledger_path, demo=demo)
        if verify_chain:
            renderer.print_chain_verification(ledger.verify_chain(), ledger.head_seal)
    except LedgerIntegrityError as exc:
        console.print(f"[bold red]Chain verification failed:[/bold red] {exc}")
        renderer.print_chain_verification(False, "")
        raise typer.Exit(code=1)

    try:
        total = ledger.aggregate()
    except AggregateOverflow as exc:
        console.print(f"[bold red]{exc}[/bold red]")
        raise typer.Exit(code=1)

    entries = ledger.recent(limit) if limit > 0 else ledger.all()
    renderer.print_ledger(entries, total)
