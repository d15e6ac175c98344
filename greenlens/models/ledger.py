"""Committed action records (append-only, never mutated).

An ActionLog is created only when a caller commits a prior estimate. Its
``status`` is fixed at commit time from the confidence score and never
changes afterwards.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from greenlens.models.impact import AiAnalysis, MetricImpact


class ActionStatus(str, Enum):
    """Audit classification of a committed ledger entry."""

    VERIFIED = "verified"
    PENDING = "pending"  # reserved for imported/legacy records
    FLAGGED = "flagged"


class ActionLog(BaseModel):
    """A single committed sustainability action in the ledger."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    description: str
    user: str
    department: str
    metrics: MetricImpact
    ai_analysis: AiAnalysis = Field(alias="aiAnalysis")
    status: ActionStatus
