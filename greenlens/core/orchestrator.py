"""GreenLens facade — the complete public surface of the contract layer.

Wires the estimation bridge, ImpactEstimator, ScenarioProjector,
NudgeGenerator and the session's ImpactLedger together. Each component
stays independently usable; the facade holds no state beyond the ledger
it owns.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timedelta, timezone

from greenlens.bridge.gemini import GeminiTransport, StructuredGenerator
from greenlens.config import GreenLensConfig
from greenlens.core.classifier import classify
from greenlens.core.estimator import ImpactEstimator
from greenlens.core.ledger import ImpactLedger
from greenlens.core.nudges import NudgeGenerator
from greenlens.core.projector import ScenarioProjector
from greenlens.models.impact import AiAnalysis, ImpactEstimate, MetricImpact, ScenarioResult
from greenlens.models.ledger import ActionLog, ActionStatus


class GreenLens:
    """Estimate, classify, commit, aggregate, project and nudge.

    Parameters
    ----------
    config:
        Runtime settings. Loaded from the environment if not provided.
    generator:
        Estimation service bridge. A ``GeminiTransport`` built from
        ``config`` is used if not provided.
    ledger:
        The session ledger. A new empty one is created if not provided.
    """

    def __init__(
        self,
        config: GreenLensConfig | None = None,
        *,
        generator: StructuredGenerator | None = None,
        ledger: ImpactLedger | None = None,
    ) -> None:
        self.config = config or GreenLensConfig()
        self.generator: StructuredGenerator = generator or GeminiTransport(self.config)
        self.ledger = ledger if ledger is not None else ImpactLedger()

        self.estimator = ImpactEstimator(self.generator)
        self.projector = ScenarioProjector(self.generator)
        self.nudge_generator = NudgeGenerator(self.generator)

    async def aclose(self) -> None:
        """Release the generator's HTTP resources, if it holds any."""
        close = getattr(self.generator, "aclose", None)
        if close is not None:
            await close()

    async def __aenter__(self) -> GreenLens:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Estimation and commit
    # ------------------------------------------------------------------

    async def estimate(self, description: str) -> ImpactEstimate:
        return await self.estimator.estimate(description)

    @staticmethod
    def classify(confidence_score: float) -> ActionStatus:
        return classify(confidence_score)

    def commit(
        self,
        description: str,
        estimate: ImpactEstimate,
        *,
        user: str,
        department: str,
        status: ActionStatus | None = None,
    ) -> ActionLog:
        """Turn a prior estimate into an ActionLog and append it.

        ``status`` defaults to the classification of the estimate's
        confidence score. Passing one explicitly is for imported or legacy
        records, the only source of ``PENDING``.
        """
        entry = ActionLog(
            description=description.strip(),
            user=user,
            department=department,
            metrics=estimate.metrics,
            ai_analysis=estimate.ai_analysis,
            status=status or classify(estimate.ai_analysis.confidence_score),
        )
        self.ledger.append(entry)
        return entry

    # ------------------------------------------------------------------
    # Ledger views
    # ------------------------------------------------------------------

    def entries(self) -> list[ActionLog]:
        return self.ledger.all()

    def aggregate(self) -> MetricImpact:
        return self.ledger.aggregate()

    # ------------------------------------------------------------------
    # Projection and nudges
    # ------------------------------------------------------------------

    async def project(
        self, scenario: str, baseline: MetricImpact | None = None
    ) -> ScenarioResult:
        """Project ``scenario`` against ``baseline`` (the ledger aggregate by default)."""
        return await self.projector.project(
            baseline if baseline is not None else self.ledger.aggregate(),
            scenario,
        )

    async def nudges(
        self,
        recent_entries: Sequence[ActionLog] | None = None,
        limit: int | None = None,
    ) -> list[str]:
        if limit is None:
            limit = self.config.nudge_history_limit
        if recent_entries is None:
            recent_entries = self.ledger.recent(limit)
        return await self.nudge_generator.nudges(recent_entries, limit)


def demo_entries(now: datetime | None = None) -> list[ActionLog]:
    """Two verified seed records, oldest first, for demos and smoke tests."""
    now = now or datetime.now(timezone.utc)
    return [
        ActionLog(
            id="1",
            timestamp=now - timedelta(days=2),
            description="Replaced 100 halogen bulbs with LEDs in the main lobby.",
            user="Jane Smith",
            department="Facilities",
            metrics=MetricImpact(co2_kg=45, water_liters=0, waste_kg=0.5),
            ai_analysis=AiAnalysis(
                confidence_score=95,
                reasoning="Standard conversion for LED efficiency.",
                methodology="EPA Greenhouse Gas Equivalencies",
                sources=["EPA"],
            ),
            status=ActionStatus.VERIFIED,
        ),
        ActionLog(
            id="2",
            timestamp=now - timedelta(days=1),
            description="Implemented double-sided printing policy in Finance dept.",
            user="Mike Johnson",
            department="Finance",
            metrics=MetricImpact(co2_kg=15, water_liters=200, waste_kg=12),
            ai_analysis=AiAnalysis(
                confidence_score=88,
                reasoning="Estimated reduction in paper usage by 40%.",
                methodology="Paper Lifecycle Assessment",
                sources=["Environmental Paper Network"],
            ),
            status=ActionStatus.VERIFIED,
        ),
    ]
