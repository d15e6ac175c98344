"""Error taxonomy for the estimation and projection layer.

Only the estimator and the nudge generator recover locally, and only from
``EstimationServiceError``. The projector converts those into
``SimulationFailed``. Everything else propagates.
"""

from __future__ import annotations


class GreenLensError(RuntimeError):
    """Base for every error raised by GreenLens."""


class InvalidInput(GreenLensError, ValueError):
    """Raised for blank or missing input, before any network call."""


class EstimationServiceError(GreenLensError):
    """A call to the estimation service did not yield a usable payload."""


class ServiceUnavailable(EstimationServiceError):
    """Network failure, timeout, quota exhaustion or authentication failure."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class SchemaValidationFailure(EstimationServiceError):
    """A response was received but does not parse into the required shape."""


class EmptyResponse(EstimationServiceError):
    """The call succeeded but returned no content."""


class SimulationFailed(GreenLensError):
    """A scenario projection could not be produced. Callers must retry."""


class LedgerIntegrityError(GreenLensError):
    """Raised when the ledger's seal chain is broken."""


class DuplicateEntryError(LedgerIntegrityError):
    """Raised when an entry id is already present in the ledger."""


class AggregateOverflow(GreenLensError, OverflowError):
    """Raised when a ledger total exceeds the representable float range."""
