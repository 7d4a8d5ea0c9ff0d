"""Tests for ledger snapshot serialization and the legacy upgrade path."""

from __future__ import annotations

import copy
import json
from datetime import date
from decimal import Decimal

import pytest

from smartexpense.domain.errors import CorruptSnapshot
from smartexpense.domain.ledger import Ledger
from smartexpense.domain.snapshot import SNAPSHOT_VERSION
from smartexpense.models import Kind


def test_round_trip_preserves_categories_and_transactions(sample_ledger):
    sample_ledger.add_category("Gym")
    sample_ledger.add_transaction("2024-05-05", "19.99", "expense", "Gym", 'Day pass "promo"')

    restored = Ledger.deserialize(sample_ledger.serialize(), "tester")

    assert restored.categories == sample_ledger.categories
    assert restored.transactions == sample_ledger.transactions
    assert restored.activity == sample_ledger.activity
    assert restored.serialize() == sample_ledger.serialize()


def test_round_trip_through_json_text(sample_ledger):
    text = json.dumps(sample_ledger.serialize())
    restored = Ledger.deserialize(json.loads(text), "tester")
    assert restored.transactions == sample_ledger.transactions


def test_snapshot_shape(sample_ledger):
    snapshot = sample_ledger.serialize()
    assert snapshot["version"] == SNAPSHOT_VERSION
    assert snapshot["categories"][:5] == ["Food", "Transport", "Bills", "Shopping", "Other"]
    first = snapshot["transactions"][0]
    assert first["date"] == "2024-03-01"
    assert first["amount"] == "50"
    assert first["kind"] == "expense"
    assert set(first) == {"id", "date", "amount", "kind", "category", "description"}


def test_empty_ledger_round_trip():
    ledger = Ledger("empty", categories=[])
    restored = Ledger.deserialize(ledger.serialize(), "empty")
    assert restored.categories == ()
    assert restored.transactions == ()


def test_activity_is_optional(sample_ledger):
    snapshot = sample_ledger.serialize()
    del snapshot["activity"]
    restored = Ledger.deserialize(snapshot, "tester")
    assert restored.activity == ()
    assert len(restored.transactions) == 3


def test_deserialize_trims_activity_to_limit(sample_ledger):
    for i in range(10):
        sample_ledger.log_activity(f"event {i}")
    restored = Ledger.deserialize(sample_ledger.serialize(), "tester", activity_limit=3)
    assert [e.message for e in restored.activity] == ["event 9", "event 8", "event 7"]


def _corrupt(mutator):
    ledger = Ledger("tester")
    ledger.add_transaction("2024-03-01", 50, "expense", "Food")
    snapshot = copy.deepcopy(ledger.serialize())
    mutator(snapshot)
    return snapshot


@pytest.mark.parametrize(
    "mutator",
    [
        pytest.param(lambda s: s.pop("categories"), id="missing-categories"),
        pytest.param(lambda s: s.pop("transactions"), id="missing-transactions"),
        pytest.param(lambda s: s.update(categories="Food"), id="categories-not-list"),
        pytest.param(lambda s: s.update(categories=["Food", "Food"]), id="duplicate-category"),
        pytest.param(lambda s: s.update(categories=[1]), id="category-not-str"),
        pytest.param(lambda s: s.update(version=2), id="future-version"),
        pytest.param(lambda s: s.update(version=True), id="bool-version"),
        pytest.param(lambda s: s["transactions"].append("oops"), id="txn-not-mapping"),
        pytest.param(lambda s: s["transactions"][0].pop("id"), id="txn-missing-id"),
        pytest.param(lambda s: s["transactions"][0].update(amount="-3"), id="negative-amount"),
        pytest.param(lambda s: s["transactions"][0].update(amount="ten"), id="text-amount"),
        pytest.param(lambda s: s["transactions"][0].update(amount=1.5), id="float-amount"),
        pytest.param(lambda s: s["transactions"][0].update(date="2024-02-31"), id="bad-date"),
        pytest.param(lambda s: s["transactions"][0].update(kind="Expense"), id="bad-kind"),
        pytest.param(lambda s: s["transactions"][0].update(category=None), id="null-category"),
        pytest.param(lambda s: s["transactions"].append(dict(s["transactions"][0])), id="dup-id"),
        pytest.param(lambda s: s.update(activity={"t": "x"}), id="activity-not-list"),
        pytest.param(lambda s: s.update(activity=[{"t": "yesterday", "msg": "x"}]), id="bad-stamp"),
    ],
)
def test_malformed_snapshot_raises(mutator):
    with pytest.raises(CorruptSnapshot):
        Ledger.deserialize(_corrupt(mutator), "tester")


@pytest.mark.parametrize("payload", [None, [], "snapshot", 42])
def test_non_mapping_snapshot_raises(payload):
    with pytest.raises(CorruptSnapshot):
        Ledger.deserialize(payload, "tester")


class TestLegacySnapshot:
    """Unversioned snapshots in the legacy layout."""

    def test_signed_and_typed_entries_are_upgraded(self):
        legacy = {
            "categories": ["Food", "Transport", "Bills", "Shopping", "Other"],
            "transactions": [
                {"id": "a1", "amount": 12.5, "category": "Food", "date": "2024-03-02", "desc": "Tacos"},
                {"id": 1710000000000, "amount": -40, "category": "Bills", "date": "2024-03-05"},
                {"id": "c3", "amount": 900, "type": "income", "category": "Other", "date": "2024-03-06"},
            ],
            "activity": [{"t": "2024-03-06T09:00:00.000Z", "msg": "Added tx 900 to Other"}],
        }

        ledger = Ledger.deserialize(legacy, "legacy")
        txs = ledger.list_transactions()

        assert [t.id for t in txs] == ["a1", "1710000000000", "c3"]
        assert txs[0].description == "Tacos"
        assert txs[0].amount == Decimal("12.5")
        assert txs[0].kind is Kind.EXPENSE
        assert txs[1].amount == Decimal("40")
        assert txs[1].kind is Kind.EXPENSE
        assert txs[2].kind is Kind.INCOME
        assert txs[2].date == date(2024, 3, 6)
        assert ledger.net_balance().net == Decimal("847.5")
        assert ledger.activity[0].message == "Added tx 900 to Other"

    def test_upgraded_ledger_serializes_as_current_version(self):
        legacy = {"categories": ["Food"], "transactions": []}
        assert Ledger.deserialize(legacy, "x").serialize()["version"] == SNAPSHOT_VERSION

    @pytest.mark.parametrize(
        "entry",
        [
            {"id": "x", "amount": 0, "category": "Food", "date": "2024-03-01"},
            {"id": "x", "amount": "lots", "category": "Food", "date": "2024-03-01"},
            {"id": "x", "amount": 5, "category": "Food", "date": "3/1/2024"},
            {"id": "x", "amount": 5, "type": "transfer", "category": "Food", "date": "2024-03-01"},
            {"amount": 5, "category": "Food", "date": "2024-03-01"},
        ],
    )
    def test_unusable_legacy_entries_raise(self, entry):
        with pytest.raises(CorruptSnapshot):
            Ledger.deserialize({"categories": [], "transactions": [entry]}, "x")
