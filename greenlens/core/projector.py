"""Scenario projection — "what-if" deltas against a baseline aggregate.

There is no degraded simulation: any service failure surfaces as
``SimulationFailed``. Projection never writes to the ledger.
"""

from __future__ import annotations

import logging

from greenlens.bridge.gemini import StructuredGenerator, parse_structured
from greenlens.bridge.prompts import SCENARIO_PROMPT, SCENARIO_SYSTEM_INSTRUCTION
from greenlens.bridge.schemas import SCENARIO_RESULT_SCHEMA
from greenlens.core.errors import EstimationServiceError, InvalidInput, SimulationFailed
from greenlens.models.impact import MetricImpact, ScenarioResult

logger = logging.getLogger(__name__)


class ScenarioProjector:
    """Requests projected metrics and percentage deltas for a scenario.

    ``impact_change`` is taken from the service as-is; percentages are not
    recomputed locally, so a zero baseline never causes a local division.
    """

    def __init__(self, generator: StructuredGenerator) -> None:
        self._generator = generator

    @staticmethod
    def build_prompt(baseline: MetricImpact, scenario: str) -> str:
        return SCENARIO_PROMPT.format(
            co2_kg=baseline.co2_kg,
            water_liters=baseline.water_liters,
            waste_kg=baseline.waste_kg,
            scenario=scenario.strip(),
        )

    async def project(self, baseline: MetricImpact, scenario: str) -> ScenarioResult:
        """Project ``scenario`` against ``baseline``.

        Raises
        ------
        InvalidInput
            If ``scenario`` is blank. No request is made.
        SimulationFailed
            On any service, empty-response or schema failure.
        """
        if not scenario or not scenario.strip():
            raise InvalidInput("Scenario description must not be blank.")

        try:
            text = await self._generator.generate(
                self.build_prompt(baseline, scenario),
                response_schema=SCENARIO_RESULT_SCHEMA,
                system_instruction=SCENARIO_SYSTEM_INSTRUCTION,
            )
            return parse_structured(text, ScenarioResult)
        except EstimationServiceError as exc:
            logger.error(
                "Simulation of %r failed (%s: %s).",
                scenario, type(exc).__name__, exc,
            )
            raise SimulationFailed(
                f"Simulation failed: {exc}. Please retry."
            ) from exc
