"""Behavioral nudges from recent ledger activity. Best-effort only."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from greenlens.bridge.gemini import StructuredGenerator, parse_structured
from greenlens.bridge.prompts import EMPTY_HISTORY, NUDGE_HISTORY_LINE, NUDGES_PROMPT
from greenlens.bridge.schemas import NUDGES_SCHEMA
from greenlens.config import MAX_NUDGE_HISTORY
from greenlens.core.errors import EmptyResponse, EstimationServiceError, InvalidInput
from greenlens.models.ledger import ActionLog

logger = logging.getLogger(__name__)

NUDGE_COUNT = 3

# Returned when the service answers but has nothing to suggest.
EMPTY_REPLY_NUDGES: tuple[str, ...] = (
    "Keep up the good work!",
    "Try carpooling next week.",
    "Check for leaky faucets.",
)

# Returned when the request itself fails.
FALLBACK_NUDGES: tuple[str, ...] = (
    "Reduce, Reuse, Recycle.",
    "Every bit counts.",
    "Think green.",
)


class NudgeGenerator:
    """Requests a few short suggestions based on the most recent entries.

    Any service failure is invisible to the caller: an empty reply yields
    ``EMPTY_REPLY_NUDGES`` and any other failure ``FALLBACK_NUDGES``.
    """

    def __init__(self, generator: StructuredGenerator) -> None:
        self._generator = generator

    @staticmethod
    def build_prompt(entries: Sequence[ActionLog]) -> str:
        lines = [
            NUDGE_HISTORY_LINE.format(
                description=entry.description, co2_kg=entry.metrics.co2_kg
            )
            for entry in entries
        ]
        return NUDGES_PROMPT.format(
            history="\n".join(lines) or EMPTY_HISTORY,
            count=NUDGE_COUNT,
        )

    async def nudges(
        self,
        recent_entries: Sequence[ActionLog],
        limit: int = MAX_NUDGE_HISTORY,
    ) -> list[str]:
        """Return short suggestions, summarizing at most ``limit`` entries.

        ``recent_entries`` is expected most-recent-first, as returned by
        ``ImpactLedger.all()``. ``limit`` is capped at 5.
        """
        if limit < 1:
            raise InvalidInput("Nudge history limit must be at least 1.")
        window = list(recent_entries)[: min(limit, MAX_NUDGE_HISTORY)]

        try:
            text = await self._generator.generate(
                self.build_prompt(window),
                response_schema=NUDGES_SCHEMA,
            )
            suggestions = [s.strip() for s in parse_structured(text, list[str])]
        except EmptyResponse:
            logger.info("Nudge request returned no content; using default nudges.")
            return list(EMPTY_REPLY_NUDGES)
        except EstimationServiceError as exc:
            logger.info("Nudge request failed (%s); using fallback nudges.", type(exc).__name__)
            return list(FALLBACK_NUDGES)

        suggestions = [s for s in suggestions if s]
        if not suggestions:
            logger.info("Nudge request returned no suggestions; using default nudges.")
            return list(EMPTY_REPLY_NUDGES)
        return suggestions
