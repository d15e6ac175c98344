"""Confidence classification — pure, no I/O."""

from __future__ import annotations

from greenlens.models.ledger import ActionStatus

# Scores strictly above this are verified; 70 itself is flagged.
CONFIDENCE_THRESHOLD: float = 70.0


def classify(confidence_score: float) -> ActionStatus:
    """Map a confidence score to a ledger status.

    Never yields ``PENDING``; that status is reserved for records committed
    without passing through classification.
    """
    if confidence_score > CONFIDENCE_THRESHOLD:
        return ActionStatus.VERIFIED
    return ActionStatus.FLAGGED
