"""GreenLens: structured impact estimation and projection for sustainability actions.

Turns free-text descriptions of sustainability actions into schema-validated
impact estimates, classifies them by confidence, keeps an append-only ledger
of committed actions and projects "what-if" scenarios against its aggregate.
"""

__version__ = "0.1.0"
__description__ = (
    "Auditable impact estimation ledger backed by a generative estimation service"
)

from greenlens.core.orchestrator import GreenLens
from greenlens.core.ledger import ImpactLedger
from greenlens.core.classifier import classify

__all__ = ["GreenLens", "ImpactLedger", "classify", "__version__"]
