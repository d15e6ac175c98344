"""``greenlens simulate TEXT`` — project a what-if scenario against the ledger.

The baseline is the ledger aggregate unless all three ``--co2``,
``--water`` and ``--waste`` are given. Nothing is written to the ledger.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console

from greenlens.cli import session
from greenlens.cli.render import LedgerRenderer
from greenlens.config import GreenLensConfig
from greenlens.core.errors import (
    AggregateOverflow,
    InvalidInput,
    LedgerIntegrityError,
    SimulationFailed,
)
from greenlens.models.impact import MetricImpact

console = Console()


def simulate_cmd(
    scenario: str = typer.Argument(
        ...,
        help='Scenario to simulate, e.g. "convert 30% of fleet to electric".',
    ),
    co2: float = typer.Option(None, "--co2", min=0, help="Baseline CO2 in kg."),
    water: float = typer.Option(None, "--water", min=0, help="Baseline water in liters."),
    waste: float = typer.Option(None, "--waste", min=0, help="Baseline waste in kg."),
    ledger_file: Path = typer.Option(
        None,
        "--ledger",
        "-l",
        help="Path to the ledger snapshot (defaults to GREENLENS_LEDGER_PATH).",
    ),
) -> None:
    """Simulate a scenario and show projected metrics and recommendations."""
    config = GreenLensConfig()
    renderer = LedgerRenderer(console=console)
    try:
        ledger = session.load_ledger(ledger_file or config.ledger_path)
        if co2 is not None and water is not None and waste is not None:
            baseline = MetricImpact(co2_kg=co2, water_liters=water, waste_kg=waste)
        else:
            baseline = ledger.aggregate()
    except (LedgerIntegrityError, AggregateOverflow) as exc:
        console.print(f"[bold red]Cannot build baseline:[/bold red] {exc}")
        raise typer.Exit(code=1)
    engine = session.build_engine(config, ledger)

    async def _run():
        try:
            return await engine.project(scenario, baseline)
        finally:
            await engine.aclose()

    try:
        result = asyncio.run(_run())
    except InvalidInput as exc:
        console.print(f"[bold red]Invalid input:[/bold red] {exc}")
        raise typer.Exit(code=2)
    except SimulationFailed as exc:
        console.print(f"[bold red]{exc}[/bold red]")
        raise typer.Exit(code=1)

    renderer.print_scenario(baseline, result)
