"""``greenlens estimate TEXT`` — estimate one action and optionally commit it.

Without ``--commit`` the estimate is shown and discarded. With it, the
estimate is classified and appended to the ledger snapshot.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console

from greenlens.cli import session
from greenlens.cli.render import LedgerRenderer
from greenlens.config import GreenLensConfig
from greenlens.core.classifier import classify
from greenlens.core.errors import InvalidInput, LedgerIntegrityError

console = Console()


def estimate_cmd(
    description: str = typer.Argument(
        ...,
        help="Free-text description of the sustainability action.",
    ),
    commit: bool = typer.Option(
        False,
        "--commit",
        "-c",
        help="Append the classified estimate to the ledger.",
    ),
    user: str = typer.Option(
        "Current User",
        "--user",
        "-u",
        help="Who performed the action.",
    ),
    department: str = typer.Option(
        "Operations",
        "--department",
        "-d",
        help="Department the action belongs to.",
    ),
    ledger_file: Path = typer.Option(
        None,
        "--ledger",
        "-l",
        help="Path to the ledger snapshot (defaults to GREENLENS_LEDGER_PATH).",
    ),
) -> None:
    """Estimate the environmental impact of an action."""
    config = GreenLensConfig()
    path = ledger_file or config.ledger_path
    try:
        ledger = session.load_ledger(path)
    except LedgerIntegrityError as exc:
        console.print(f"[bold red]Ledger snapshot rejected:[/bold red] {exc}")
        raise typer.Exit(code=1)
    engine = session.build_engine(config, ledger)
    renderer = LedgerRenderer(console=console)

    async def _run():
        try:
            return await engine.estimate(description)
        finally:
            await engine.aclose()

    try:
        estimate = asyncio.run(_run())
    except InvalidInput as exc:
        console.print(f"[bold red]Invalid input:[/bold red] {exc}")
        raise typer.Exit(code=2)

    status = classify(estimate.ai_analysis.confidence_score)
    renderer.print_estimate(estimate, status)

    if commit:
        entry = engine.commit(description, estimate, user=user, department=department)
        session.save_ledger(ledger, path)
        console.print(f"[bold]Committed:[/bold] {entry.id} ({entry.status.value})")
