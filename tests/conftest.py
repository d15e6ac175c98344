"""Shared test fixtures for GreenLens."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from greenlens.config import GreenLensConfig
from greenlens.core.errors import ServiceUnavailable
from greenlens.core.ledger import ImpactLedger
from greenlens.models.impact import AiAnalysis, MetricImpact
from greenlens.models.ledger import ActionLog, ActionStatus


class FakeGenerator:
    """Scripted stand-in for the estimation service.

    Each call pops the next scripted reply: a string is returned as the
    raw response text, an exception instance is raised.
    """

    def __init__(self, *replies: str | BaseException) -> None:
        self.replies = list(replies)
        self.calls: list[dict[str, Any]] = []

    async def generate(
        self,
        prompt: str,
        *,
        response_schema: dict[str, Any],
        system_instruction: str | None = None,
    ) -> str:
        self.calls.append({
            "prompt": prompt,
            "response_schema": response_schema,
            "system_instruction": system_instruction,
        })
        if not self.replies:
            raise ServiceUnavailable("no scripted reply")
        reply = self.replies.pop(0)
        if isinstance(reply, BaseException):
            raise reply
        return reply


@pytest.fixture
def make_generator() -> Callable[..., FakeGenerator]:
    """Factory fixture: build a FakeGenerator with scripted replies."""
    return FakeGenerator


@pytest.fixture
def test_config() -> GreenLensConfig:
    """Config with a dummy credential and no .env lookup."""
    return GreenLensConfig(api_key="test-key", _env_file=None)


@pytest.fixture
def ledger() -> ImpactLedger:
    """Provide a fresh, empty ImpactLedger."""
    return ImpactLedger()


@pytest.fixture
def estimate_payload() -> dict[str, Any]:
    """A schema-conformant estimation reply (LED retrofit)."""
    return {
        "metrics": {"co2_kg": 45.0, "water_liters": 0.0, "waste_kg": 0.5},
        "aiAnalysis": {
            "confidence_score": 95,
            "reasoning": "Standard conversion for LED efficiency.",
            "methodology": "EPA Greenhouse Gas Equivalencies",
            "sources": ["EPA"],
        },
    }


@pytest.fixture
def scenario_payload() -> dict[str, Any]:
    """A schema-conformant simulation reply (fleet electrification)."""
    return {
        "scenarioName": "Fleet electrification (30%)",
        "projectedMetrics": {"co2_kg": 700.0, "water_liters": 5000.0, "waste_kg": 210.0},
        "impactChange": {"co2_percent": -30.0, "water_percent": 0.0, "waste_percent": 5.0},
        "analysis": "Electrifying 30% of the fleet removes most tailpipe emissions.",
        "recommendations": ["Install depot chargers", "Recycle retired batteries"],
    }


# ---------------------------------------------------------------------------
# Entry factories, shared across test modules
# ---------------------------------------------------------------------------


@pytest.fixture
def make_action_log() -> Callable[..., ActionLog]:
    """Factory fixture: build an ActionLog with sensible defaults."""

    def _factory(
        co2_kg: float = 10.0,
        water_liters: float = 100.0,
        waste_kg: float = 1.0,
        confidence_score: float = 90.0,
        status: ActionStatus = ActionStatus.VERIFIED,
        **overrides: Any,
    ) -> ActionLog:
        defaults: dict[str, Any] = {
            "description": "Switched office lighting to LEDs",
            "user": "Employee #124",
            "department": "Operations",
            "metrics": MetricImpact(
                co2_kg=co2_kg, water_liters=water_liters, waste_kg=waste_kg
            ),
            "ai_analysis": AiAnalysis(
                confidence_score=confidence_score,
                reasoning="Test reasoning.",
                methodology="Test methodology",
                sources=["Test source"],
            ),
            "status": status,
        }
        defaults.update(overrides)
        return ActionLog(**defaults)

    return _factory
