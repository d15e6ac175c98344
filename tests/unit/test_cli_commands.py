"""Unit tests for the CLI — command registration and behavior.

The estimation service is replaced by patching
``greenlens.cli.session.build_generator``; ledgers live in tmp paths.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from greenlens.cli import session
from greenlens.cli.app import app
from greenlens.core.errors import ServiceUnavailable
from greenlens.core.ledger import ImpactLedger
from greenlens.core.orchestrator import demo_entries

runner = CliRunner()


@pytest.fixture
def ledger_file(tmp_path: Path) -> Path:
    return tmp_path / "ledger.json"


@pytest.fixture
def script_service(monkeypatch, make_generator):
    """Install a FakeGenerator for every engine the CLI builds."""

    def _install(*replies):
        generator = make_generator(*replies)
        monkeypatch.setattr(session, "build_generator", lambda config: generator)
        return generator

    return _install


class TestCliApp:
    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])
        assert result.exit_code in (0, 2)
        assert "usage" in result.output.lower()

    def test_help_lists_commands(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for name in ("estimate", "ledger", "simulate", "nudges"):
            assert name in result.output


class TestEstimateCommand:
    def test_estimate_without_commit_leaves_no_ledger(
        self, script_service, estimate_payload, ledger_file
    ):
        script_service(json.dumps(estimate_payload))
        result = runner.invoke(app, ["estimate", "Replaced bulbs", "--ledger", str(ledger_file)])
        assert result.exit_code == 0, result.output
        assert "Verified" in result.output
        assert not ledger_file.exists()

    def test_estimate_commit_persists_snapshot(
        self, script_service, estimate_payload, ledger_file
    ):
        script_service(json.dumps(estimate_payload))
        result = runner.invoke(app, [
            "estimate", "Replaced bulbs", "--commit",
            "--user", "Jane Smith", "--department", "Facilities",
            "--ledger", str(ledger_file),
        ])
        assert result.exit_code == 0, result.output
        records = json.loads(ledger_file.read_text())
        assert len(records) == 1
        assert records[0]["status"] == "verified"
        assert records[0]["user"] == "Jane Smith"

    def test_degraded_estimate_commits_flagged(self, script_service, ledger_file):
        script_service(ServiceUnavailable("down"))
        result = runner.invoke(app, [
            "estimate", "Vague thing", "--commit", "--ledger", str(ledger_file),
        ])
        assert result.exit_code == 0, result.output
        assert "Flagged" in result.output
        assert json.loads(ledger_file.read_text())[0]["status"] == "flagged"

    def test_blank_description_rejected(self, script_service, ledger_file):
        generator = script_service()
        result = runner.invoke(app, ["estimate", "   ", "--ledger", str(ledger_file)])
        assert result.exit_code == 2
        assert generator.calls == []


class TestLedgerCommand:
    def test_empty_ledger(self, ledger_file):
        result = runner.invoke(app, ["ledger", "--ledger", str(ledger_file)])
        assert result.exit_code == 0
        assert "No actions logged yet" in result.output

    def test_demo_seed_and_aggregate(self, ledger_file):
        result = runner.invoke(app, ["ledger", "--demo", "--ledger", str(ledger_file)])
        assert result.exit_code == 0
        assert "CO2 60.0 kg" in result.output

    def test_verify_chain(self, ledger_file):
        session.save_ledger(ImpactLedger(demo_entries()), ledger_file)
        result = runner.invoke(app, ["ledger", "--verify-chain", "--ledger", str(ledger_file)])
        assert result.exit_code == 0
        assert "VALID" in result.output

    def test_edited_snapshot_fails_verification(self, ledger_file, make_action_log):
        flagged = make_action_log(confidence_score=10, status="flagged")
        session.save_ledger(ImpactLedger([flagged]), ledger_file)
        records = json.loads(ledger_file.read_text())
        records[0]["status"] = "verified"
        records[0]["metrics"]["co2_kg"] = 1e6
        ledger_file.write_text(json.dumps(records))

        result = runner.invoke(app, ["ledger", "--verify-chain", "--ledger", str(ledger_file)])

        assert result.exit_code == 1
        assert "BROKEN" in result.output
        assert "VALID" not in result.output

    def test_edited_snapshot_blocks_commit(self, script_service, estimate_payload, ledger_file):
        session.save_ledger(ImpactLedger(demo_entries()), ledger_file)
        records = json.loads(ledger_file.read_text())
        records[0]["user"] = "Someone Else"
        ledger_file.write_text(json.dumps(records))
        script_service(json.dumps(estimate_payload))

        result = runner.invoke(app, ["estimate", "LED retrofit", "--commit", "--ledger", str(ledger_file)])

        assert result.exit_code == 1
        assert json.loads(ledger_file.read_text()) == records


class TestSimulateCommand:
    def test_simulate_with_explicit_baseline(self, script_service, scenario_payload, ledger_file):
        generator = script_service(json.dumps(scenario_payload))
        result = runner.invoke(app, [
            "simulate", "convert 30% of fleet to electric",
            "--co2", "1000", "--water", "5000", "--waste", "200",
            "--ledger", str(ledger_file),
        ])
        assert result.exit_code == 0, result.output
        assert "Install depot chargers" in result.output
        assert "CO2: 1000.0 kg" in generator.calls[0]["prompt"]

    def test_simulation_failure_exits_nonzero(self, script_service, ledger_file):
        script_service(ServiceUnavailable("down"))
        result = runner.invoke(app, [
            "simulate", "convert 30% of fleet to electric", "--ledger", str(ledger_file),
        ])
        assert result.exit_code == 1
        assert "Simulation failed" in result.output
        assert not ledger_file.exists()


class TestNudgesCommand:
    def test_nudges_fallback(self, script_service, ledger_file):
        script_service(ServiceUnavailable("down"))
        result = runner.invoke(app, ["nudges", "--ledger", str(ledger_file)])
        assert result.exit_code == 0
        assert "Think green." in result.output
