"""Rich terminal renderer for ledger entries, estimates and scenarios.

Color scheme
------------
- green   : VERIFIED
- yellow  : PENDING
- red     : FLAGGED
- green/red percentages: reduction/increase
"""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from greenlens.models.impact import ImpactEstimate, MetricImpact, ScenarioResult
from greenlens.models.ledger import ActionLog, ActionStatus

_STATUS_LABELS: dict[ActionStatus, str] = {
    ActionStatus.VERIFIED: "[green]Verified[/green]",
    ActionStatus.PENDING: "[yellow]Pending[/yellow]",
    ActionStatus.FLAGGED: "[bold red]Flagged[/bold red]",
}


def _percent(value: float) -> str:
    # Negative change is a reduction, shown as favorable.
    style = "green" if value < 0 else "red" if value > 0 else "dim"
    return f"[{style}]{value:+.1f}%[/{style}]"


class LedgerRenderer:
    """Renders GreenLens data as Rich terminal output.

    Parameters
    ----------
    console:
        Rich Console instance.  A new one is created if not provided.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def build_ledger_table(self, entries: Sequence[ActionLog]) -> Table:
        table = Table(title="Impact Ledger", show_lines=False)
        table.add_column("Time", style="dim")
        table.add_column("Action")
        table.add_column("User")
        table.add_column("Dept")
        table.add_column("CO2 (kg)", justify="right")
        table.add_column("Water (L)", justify="right")
        table.add_column("Waste (kg)", justify="right")
        table.add_column("Confidence", justify="right")
        table.add_column("Status", justify="center")

        for entry in entries:
            table.add_row(
                entry.timestamp.strftime("%Y-%m-%d %H:%M"),
                entry.description,
                entry.user,
                entry.department,
                f"{entry.metrics.co2_kg:,.1f}",
                f"{entry.metrics.water_liters:,.1f}",
                f"{entry.metrics.waste_kg:,.1f}",
                f"{entry.ai_analysis.confidence_score:.0f}%",
                _STATUS_LABELS[entry.status],
            )
        return table

    def print_ledger(self, entries: Sequence[ActionLog], total: MetricImpact) -> None:
        if not entries:
            self.console.print("[dim]No actions logged yet.[/dim]")
        else:
            self.console.print(self.build_ledger_table(entries))
        self.print_aggregate(total)

    def print_aggregate(self, total: MetricImpact) -> None:
        self.console.print(
            f"[bold]Total avoided:[/bold] "
            f"CO2 {total.co2_kg:,.1f} kg  |  "
            f"Water {total.water_liters:,.1f} L  |  "
            f"Waste {total.waste_kg:,.1f} kg"
        )

    def print_estimate(self, estimate: ImpactEstimate, status: ActionStatus) -> None:
        analysis = estimate.ai_analysis
        lines = [
            f"[bold]Status:[/bold]       {_STATUS_LABELS[status]}",
            f"[bold]Confidence:[/bold]   {analysis.confidence_score:.0f}%",
            f"[bold]CO2:[/bold]          {estimate.metrics.co2_kg:,.2f} kg",
            f"[bold]Water:[/bold]        {estimate.metrics.water_liters:,.2f} L",
            f"[bold]Waste:[/bold]        {estimate.metrics.waste_kg:,.2f} kg",
            f"[bold]Methodology:[/bold]  {analysis.methodology}",
            "",
            analysis.reasoning,
        ]
        if analysis.sources:
            lines.append("")
            lines.append("[dim]Sources: " + ", ".join(analysis.sources) + "[/dim]")
        border = "green" if status is ActionStatus.VERIFIED else "red"
        self.console.print(
            Panel("\n".join(lines), title="[bold]Impact Estimate[/bold]", border_style=border)
        )

    def print_scenario(self, baseline: MetricImpact, result: ScenarioResult) -> None:
        table = Table(title=result.scenario_name)
        table.add_column("Metric")
        table.add_column("Baseline", justify="right")
        table.add_column("Projected", justify="right")
        table.add_column("Change", justify="right")
        projected = result.projected_metrics
        change = result.impact_change
        table.add_row("CO2 (kg)", f"{baseline.co2_kg:,.1f}", f"{projected.co2_kg:,.1f}",
                      _percent(change.co2_percent))
        table.add_row("Water (L)", f"{baseline.water_liters:,.1f}", f"{projected.water_liters:,.1f}",
                      _percent(change.water_percent))
        table.add_row("Waste (kg)", f"{baseline.waste_kg:,.1f}", f"{projected.waste_kg:,.1f}",
                      _percent(change.waste_percent))
        self.console.print(table)
        self.console.print(result.analysis)
        for recommendation in result.recommendations:
            self.console.print(f"  [cyan]-[/cyan] {recommendation}")

    def print_nudges(self, nudges: Sequence[str]) -> None:
        for nudge in nudges:
            self.console.print(f"  [green]*[/green] {nudge}")

    def print_chain_verification(self, valid: bool, head_seal: str) -> None:
        if valid:
            self.console.print(
                f"[bold green]Seal chain VALID[/bold green] [dim](head {head_seal[:16] or '-'})[/dim]"
            )
        else:
            self.console.print("[bold red]Seal chain BROKEN[/bold red]")
