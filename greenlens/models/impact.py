"""Impact models — the shapes the estimation service must return.

Every numeric field is finite. Metric quantities are never signed: a
reduction is expressed as a positive magnitude of avoided impact.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class MetricImpact(BaseModel):
    """A quantity of environmental effect in the three tracked dimensions."""

    model_config = ConfigDict(frozen=True, extra="ignore", allow_inf_nan=False)

    co2_kg: float = Field(ge=0)
    water_liters: float = Field(ge=0)
    waste_kg: float = Field(ge=0)

    @classmethod
    def zero(cls) -> MetricImpact:
        return cls(co2_kg=0.0, water_liters=0.0, waste_kg=0.0)


class AiAnalysis(BaseModel):
    """The estimator's account of how it arrived at a MetricImpact.

    ``confidence_score`` is the sole input to status classification.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", allow_inf_nan=False)

    confidence_score: float = Field(ge=0, le=100)
    reasoning: str
    methodology: str
    sources: list[str]


class ImpactEstimate(BaseModel):
    """Transient result of one estimation call, consumed on commit."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    metrics: MetricImpact
    ai_analysis: AiAnalysis = Field(alias="aiAnalysis")


class ImpactChange(BaseModel):
    """Signed percentage change per dimension; negative is a reduction."""

    model_config = ConfigDict(frozen=True, extra="ignore", allow_inf_nan=False)

    co2_percent: float
    water_percent: float
    waste_percent: float


class ScenarioResult(BaseModel):
    """Transient output of one simulation call. Never persisted."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    scenario_name: str = Field(alias="scenarioName")
    projected_metrics: MetricImpact = Field(alias="projectedMetrics")
    impact_change: ImpactChange = Field(alias="impactChange")
    analysis: str
    recommendations: list[str]
