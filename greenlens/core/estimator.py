"""Impact estimation — free text in, schema-validated estimate out.

A failed estimation never blocks the caller: service errors are replaced
by a degraded zero-confidence estimate, which ``classify`` maps to
``flagged`` so the unreliable result stays visible instead of being
dropped.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date

from greenlens.bridge.gemini import StructuredGenerator, parse_structured
from greenlens.bridge.prompts import ESTIMATION_PROMPT, ESTIMATION_SYSTEM_INSTRUCTION
from greenlens.bridge.schemas import IMPACT_ESTIMATE_SCHEMA
from greenlens.core.errors import EstimationServiceError, InvalidInput
from greenlens.models.impact import AiAnalysis, ImpactEstimate, MetricImpact

logger = logging.getLogger(__name__)

DEGRADED_REASONING = "AI Service unavailable. Please check API Key."
DEGRADED_METHODOLOGY = "System Error"


def degraded_estimate() -> ImpactEstimate:
    """The fixed fallback returned when estimation cannot be completed."""
    return ImpactEstimate(
        metrics=MetricImpact.zero(),
        ai_analysis=AiAnalysis(
            confidence_score=0.0,
            reasoning=DEGRADED_REASONING,
            methodology=DEGRADED_METHODOLOGY,
            sources=[],
        ),
    )


class ImpactEstimator:
    """Issues one structured-estimation request per description.

    Parameters
    ----------
    generator:
        The estimation service bridge.
    today:
        Supplies the context date embedded in each request.
    """

    def __init__(
        self,
        generator: StructuredGenerator,
        *,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._generator = generator
        self._today = today

    def build_prompt(self, description: str) -> str:
        return ESTIMATION_PROMPT.format(
            context_date=self._today().isoformat(),
            description=description.strip(),
        )

    async def estimate(self, description: str) -> ImpactEstimate:
        """Estimate the impact of one described action.

        Raises
        ------
        InvalidInput
            If ``description`` is blank. No request is made.
        """
        if not description or not description.strip():
            raise InvalidInput("Action description must not be blank.")

        try:
            text = await self._generator.generate(
                self.build_prompt(description),
                response_schema=IMPACT_ESTIMATE_SCHEMA,
                system_instruction=ESTIMATION_SYSTEM_INSTRUCTION,
            )
            return parse_structured(text, ImpactEstimate)
        except EstimationServiceError as exc:
            logger.warning(
                "Estimation failed (%s: %s); returning degraded estimate.",
                type(exc).__name__, exc,
            )
            return degraded_estimate()
