"""Adversarial tests: the ledger must detect in-place tampering.

Entries are frozen models, so tampering here bypasses validation by
writing to the instance ``__dict__`` directly.
"""

from __future__ import annotations

import pytest

from greenlens.core.errors import LedgerIntegrityError
from greenlens.core.ledger import ImpactLedger
from greenlens.models.impact import MetricImpact
from greenlens.models.ledger import ActionStatus


@pytest.fixture
def sealed_ledger(make_action_log) -> ImpactLedger:
    ledger = ImpactLedger()
    for i in range(3):
        ledger.append(make_action_log(description=f"action {i}", co2_kg=10 * (i + 1)))
    return ledger


class TestTamperDetection:
    def test_untouched_chain_is_valid(self, sealed_ledger: ImpactLedger):
        assert sealed_ledger.verify_chain() is True

    def test_empty_chain_is_valid(self):
        assert ImpactLedger().verify_chain() is True
        assert ImpactLedger().head_seal == ""

    def test_status_upgrade_detected(self, sealed_ledger: ImpactLedger, make_action_log):
        flagged = make_action_log(confidence_score=10, status=ActionStatus.FLAGGED)
        sealed_ledger.append(flagged)
        flagged.__dict__["status"] = ActionStatus.VERIFIED
        with pytest.raises(LedgerIntegrityError, match=flagged.id):
            sealed_ledger.verify_chain()

    def test_metric_inflation_detected(self, sealed_ledger: ImpactLedger):
        oldest = sealed_ledger.chronological()[0]
        oldest.__dict__["metrics"] = MetricImpact(co2_kg=1e6, water_liters=0, waste_kg=0)
        with pytest.raises(LedgerIntegrityError):
            sealed_ledger.verify_chain()

    def test_reordering_detected(self, sealed_ledger: ImpactLedger):
        sealed_ledger._entries.reverse()
        with pytest.raises(LedgerIntegrityError):
            sealed_ledger.verify_chain()

    def test_removal_detected(self, sealed_ledger: ImpactLedger):
        del sealed_ledger._entries[0]
        del sealed_ledger._seals[-1]
        with pytest.raises(LedgerIntegrityError):
            sealed_ledger.verify_chain()
