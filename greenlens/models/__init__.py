"""GreenLens data models — all Pydantic v2, all frozen (immutable)."""

from greenlens.models.impact import (
    AiAnalysis,
    ImpactChange,
    ImpactEstimate,
    MetricImpact,
    ScenarioResult,
)
from greenlens.models.ledger import ActionLog, ActionStatus

__all__ = [
    # impact
    "MetricImpact",
    "AiAnalysis",
    "ImpactEstimate",
    "ImpactChange",
    "ScenarioResult",
    # ledger
    "ActionStatus",
    "ActionLog",
]
