"""Append-only, in-memory Impact Ledger.

The ledger is the single owned store of committed ActionLogs for a
session. Display surfaces are projections of it; they read entries and
the aggregate but never write.

Design:
- Append-only: only ``append()`` writes; there is no update or delete.
  A correction is a new entry.
- Most-recent-first visible order; insertion order is never altered.
- Every entry is sealed with a SHA-256 link to the previous seal so that
  in-place tampering is detectable via ``verify_chain()``.
- ``append()`` is serialized with a lock so concurrent commits cannot
  interleave.
"""

from __future__ import annotations

import logging
import math
import threading
from collections.abc import Iterable, Iterator
from typing import Any

from greenlens.core.errors import (
    AggregateOverflow,
    DuplicateEntryError,
    LedgerIntegrityError,
)
from greenlens.core.hasher import compute_entry_seal
from greenlens.models.impact import MetricImpact
from greenlens.models.ledger import ActionLog

logger = logging.getLogger(__name__)


class ImpactLedger:
    """Append-only ordered store of committed ActionLogs.

    Parameters
    ----------
    entries:
        Optional records to load, oldest first. Loaded records are taken
        verbatim; no field is recomputed.
    """

    def __init__(self, entries: Iterable[ActionLog] = ()) -> None:
        self._lock = threading.Lock()
        # Oldest first; the visible order is the reverse.
        self._entries: list[ActionLog] = []
        self._seals: list[str] = []
        self._ids: set[str] = set()
        for entry in entries:
            self.append(entry)

    # ------------------------------------------------------------------
    # Core: append-only write
    # ------------------------------------------------------------------

    def append(self, entry: ActionLog) -> None:
        """Place ``entry`` at the front of the visible order.

        Raises
        ------
        DuplicateEntryError
            If an entry with the same ``id`` is already in the ledger.
        """
        with self._lock:
            if entry.id in self._ids:
                raise DuplicateEntryError(
                    f"Entry {entry.id} is already in the ledger; "
                    f"corrections must be appended as new entries."
                )
            seal = compute_entry_seal(entry, self._head_seal_unlocked())
            self._entries.append(entry)
            self._seals.append(seal)
            self._ids.add(entry.id)

        logger.info(
            "Appended ledger entry %s (status=%s).", entry.id, entry.status.value
        )

    # ------------------------------------------------------------------
    # Query methods (read-only)
    # ------------------------------------------------------------------

    def all(self) -> list[ActionLog]:
        """Return every entry, most recent first."""
        with self._lock:
            return list(reversed(self._entries))

    def recent(self, limit: int) -> list[ActionLog]:
        """Return at most ``limit`` entries, most recent first."""
        if limit <= 0:
            return []
        with self._lock:
            return list(reversed(self._entries[-limit:]))

    def chronological(self) -> list[ActionLog]:
        """Return every entry, oldest first (chart order)."""
        with self._lock:
            return list(self._entries)

    def get(self, entry_id: str) -> ActionLog | None:
        """Return the entry with ``entry_id``, or None."""
        with self._lock:
            for entry in self._entries:
                if entry.id == entry_id:
                    return entry
        return None

    def aggregate(self) -> MetricImpact:
        """Element-wise sum of every entry's metrics.

        ``math.fsum`` is exactly rounded, so the result does not depend on
        the order in which entries were appended.

        Raises
        ------
        AggregateOverflow
            If any total exceeds the float range.
        """
        with self._lock:
            metrics = [entry.metrics for entry in self._entries]
        try:
            return MetricImpact(
                co2_kg=math.fsum(m.co2_kg for m in metrics),
                water_liters=math.fsum(m.water_liters for m in metrics),
                waste_kg=math.fsum(m.waste_kg for m in metrics),
            )
        except OverflowError as exc:
            raise AggregateOverflow(
                f"Ledger totals exceed the representable range ({len(metrics)} entries)."
            ) from exc

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ActionLog]:
        return iter(self.all())

    # ------------------------------------------------------------------
    # Seal chain
    # ------------------------------------------------------------------

    @property
    def head_seal(self) -> str:
        """Seal of the most recent entry, or ``""`` for an empty ledger."""
        with self._lock:
            return self._head_seal_unlocked()

    def _head_seal_unlocked(self) -> str:
        return self._seals[-1] if self._seals else ""

    def verify_chain(self) -> bool:
        """Recompute every seal and compare with the recorded chain.

        Returns True if the chain is valid, raises LedgerIntegrityError
        otherwise.
        """
        with self._lock:
            pairs = list(zip(self._entries, self._seals))

        previous = ""
        for entry, recorded in pairs:
            expected = compute_entry_seal(entry, previous)
            if expected != recorded:
                raise LedgerIntegrityError(
                    f"Tampered entry {entry.id}: "
                    f"expected seal={expected!r}, got {recorded!r}"
                )
            previous = recorded
        return True

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def dump(self) -> list[dict[str, Any]]:
        """Serialize every entry, oldest first, in wire form.

        Each record carries its ``seal`` so a reloaded snapshot can be
        checked against the chain it was written with.
        """
        with self._lock:
            pairs = list(zip(self._entries, self._seals))
        return [
            {**entry.model_dump(mode="json", by_alias=True), "seal": seal}
            for entry, seal in pairs
        ]

    @classmethod
    def load(cls, records: Iterable[dict[str, Any]]) -> ImpactLedger:
        """Rebuild a ledger from ``dump()`` output, preserving order.

        Records are taken verbatim and resealed. If the snapshot carries
        seals, every record must have one and it must match the recomputed
        seal; records without any seals are treated as an unsealed import.

        Raises
        ------
        LedgerIntegrityError
            If a recorded seal is missing or does not match.
        """
        records = list(records)
        recorded = [record.get("seal") for record in records]
        ledger = cls(
            ActionLog.model_validate({k: v for k, v in record.items() if k != "seal"})
            for record in records
        )
        if all(seal is None for seal in recorded):
            return ledger

        for entry, expected, seal in zip(ledger._entries, ledger._seals, recorded):
            if seal != expected:
                raise LedgerIntegrityError(
                    f"Tampered entry {entry.id}: "
                    f"expected seal={expected!r}, got {seal!r}"
                )
        return ledger
