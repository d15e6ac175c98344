"""Main Typer application — imports and registers all CLI commands.

Entry point: ``greenlens`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import logging

import typer

from greenlens.cli.commands.estimate import estimate_cmd
from greenlens.cli.commands.ledger_cmd import ledger_cmd
from greenlens.cli.commands.nudges_cmd import nudges_cmd
from greenlens.cli.commands.simulate import simulate_cmd
from greenlens.config import GreenLensConfig

app = typer.Typer(
    name="greenlens",
    help="GreenLens: auditable impact estimation for sustainability actions.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def _configure(
    log_level: str = typer.Option(
        None,
        "--log-level",
        help="Logging level (defaults to GREENLENS_LOG_LEVEL).",
    ),
) -> None:
    level = (log_level or GreenLensConfig().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Register subcommands
app.command(name="estimate", help="Estimate (and optionally commit) an action.")(estimate_cmd)
app.command(name="ledger", help="Show the ledger and its aggregate impact.")(ledger_cmd)
app.command(name="simulate", help="Project a what-if scenario.")(simulate_cmd)
app.command(name="nudges", help="Suggest next steps from recent actions.")(nudges_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
