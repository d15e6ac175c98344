"""Canonical hashing helpers for sealing ledger entries."""

from __future__ import annotations

import hashlib
import json
from typing import Any

from greenlens.models.ledger import ActionLog


def canonical_json_bytes(obj: Any) -> bytes:
    """Produce canonical JSON bytes — deterministic, sorted, compact."""
    return json.dumps(
        obj, sort_keys=True, separators=(",", ":"), ensure_ascii=True
    ).encode("utf-8")


def sha256_hex(data: bytes) -> str:
    """Return the SHA-256 hex digest of raw bytes."""
    return hashlib.sha256(data).hexdigest()


def compute_entry_seal(entry: ActionLog, previous_seal: str) -> str:
    """SHA-256 over the previous seal and the entry's wire form.

    Chaining each seal to its predecessor makes any in-place edit, removal
    or reordering of earlier entries detectable.
    """
    payload = {
        "previous_seal": previous_seal,
        "entry": entry.model_dump(mode="json", by_alias=True),
    }
    return sha256_hex(canonical_json_bytes(payload))
