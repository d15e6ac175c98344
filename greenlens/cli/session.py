"""Shared wiring for CLI commands: config, ledger snapshot and engine.

The core keeps its ledger in memory; the CLI, as a host spanning several
processes, snapshots it to a JSON file between invocations. Loading takes
records verbatim, oldest first.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from greenlens.bridge.gemini import GeminiTransport, StructuredGenerator
from greenlens.config import GreenLensConfig
from greenlens.core.ledger import ImpactLedger
from greenlens.core.orchestrator import GreenLens, demo_entries

logger = logging.getLogger(__name__)


def build_generator(config: GreenLensConfig) -> StructuredGenerator:
    return GeminiTransport(config)


def build_engine(config: GreenLensConfig, ledger: ImpactLedger) -> GreenLens:
    return GreenLens(config, generator=build_generator(config), ledger=ledger)


def load_ledger(path: Path, *, demo: bool = False) -> ImpactLedger:
    """Load the snapshot at ``path``; seed demo entries into an empty ledger."""
    if path.exists():
        records = json.loads(path.read_text(encoding="utf-8"))
        ledger = ImpactLedger.load(records)
        logger.debug("Loaded %d ledger entries from %s", len(ledger), path)
    else:
        ledger = ImpactLedger()
    if demo and len(ledger) == 0:
        for entry in demo_entries():
            ledger.append(entry)
    return ledger


def save_ledger(ledger: ImpactLedger, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(ledger.dump(), indent=2), encoding="utf-8")
    logger.debug("Saved %d ledger entries to %s", len(ledger), path)
