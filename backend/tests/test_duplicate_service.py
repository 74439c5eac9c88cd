from __future__ import annotations

from duplicate_detector.models.enums import Confidence, GroupingMode, MatchCriterion
from duplicate_detector.models.schemas import Receipt
from duplicate_detector.services.duplicate_service import find_duplicates, find_matches


def _receipt(amount, date, store, **extra) -> Receipt:
    return Receipt(amount=amount, receipt_date=date, store_name=store, **extra)


def test_empty_batch_returns_no_groups():
    assert find_duplicates([]) == []


def test_cvs_scenario_single_group():
    receipts = [
        _receipt("$25.99", "2024-03-15", "CVS"),
        _receipt(25.99, "2024-03-15", "CVS Pharmacy"),
        _receipt(30, "2024-03-15", "Walgreens"),
    ]
    groups = find_duplicates(receipts)

    assert len(groups) == 1
    group = groups[0]
    assert group.group_id == 1
    assert group.duplicate_count == 2
    assert group.receipts == [receipts[0], receipts[1]]
    assert group.criteria_matched == [MatchCriterion.PRICE, MatchCriterion.DATE, MatchCriterion.STORE_NAME]
    assert group.confidence == Confidence.HIGH


def test_group_ids_follow_anchor_discovery_order():
    receipts = [
        _receipt(5, "2024-01-01", "Shell"),
        _receipt(12, "2024-01-02", "Target"),
        _receipt(5, "2024-01-01", "Shell Gas"),
        _receipt(12, "2024-01-02", "Target Store"),
        _receipt(12, "2024-01-02", "TARGET"),
    ]
    groups = find_duplicates(receipts)

    assert [g.group_id for g in groups] == [1, 2]
    assert [r.store_name for r in groups[0].receipts] == ["Shell", "Shell Gas"]
    assert [r.store_name for r in groups[1].receipts] == ["Target", "Target Store", "TARGET"]


def test_zero_amount_receipts_are_not_grouped():
    receipts = [
        _receipt(0, "2024-01-01", "Refund Desk"),
        _receipt(0, "2024-01-01", "Refund Desk"),
    ]
    assert find_duplicates(receipts) == []


def test_anchor_grouping_is_not_transitive():
    # A~B ("cvs" in "cvs pharmacy"), B~C ("cvs" in "cvs store"), A!~C.
    a = _receipt(10, "2024-05-01", "CVS Pharmacy")
    b = _receipt(10, "2024-05-01", "CVS")
    c = _receipt(10, "2024-05-01", "CVS Store")
    groups = find_duplicates([a, b, c])

    # C is compared against anchor A only, so it is left out.
    assert len(groups) == 1
    assert groups[0].receipts == [a, b]


def test_anchor_grouping_c_matching_anchor_joins():
    a = _receipt(10, "2024-05-01", "CVS")
    b = _receipt(10, "2024-05-01", "CVS Pharmacy")
    c = _receipt(10, "2024-05-01", "CVS Store")
    groups = find_duplicates([a, b, c])

    assert len(groups) == 1
    assert groups[0].receipts == [a, b, c]


def test_connected_mode_merges_chains():
    a = _receipt(10, "2024-05-01", "CVS Pharmacy")
    b = _receipt(10, "2024-05-01", "Target")
    c = _receipt(10, "2024-05-01", "CVS")
    d = _receipt(10, "2024-05-01", "Target Store")
    e = _receipt(10, "2024-05-01", "CVS Store")
    groups = find_duplicates([a, b, c, d, e], mode=GroupingMode.CONNECTED)

    assert [g.group_id for g in groups] == [1, 2]
    assert groups[0].receipts == [a, c, e]
    assert groups[1].receipts == [b, d]


def test_find_duplicates_does_not_mutate_input():
    receipts = [
        _receipt("$25.99", "2024-03-15", "CVS", receipt_id="r1"),
        _receipt(25.99, "2024-03-15", "CVS Pharmacy", receipt_id="r2"),
    ]
    before = [r.model_dump() for r in receipts]
    find_duplicates(receipts)
    assert [r.model_dump() for r in receipts] == before


def test_find_matches_target_store():
    candidate = _receipt(10, "2024-01-01", "Target")
    existing = [_receipt(10, "2024-01-01", "Target Store")]
    matches = find_matches(candidate, existing)

    assert len(matches) == 1
    assert matches[0].existing_receipt == existing[0]
    assert matches[0].confidence == Confidence.HIGH


def test_find_matches_reports_every_match():
    candidate = _receipt(42, "2024-02-02", "Costco")
    existing = [
        _receipt(42, "2024-02-02", "Costco Wholesale"),
        _receipt(41, "2024-02-02", "Costco"),
        _receipt("$42.00", "2024-02-02", "COSTCO"),
    ]
    matches = find_matches(candidate, existing)
    assert [m.existing_receipt for m in matches] == [existing[0], existing[2]]


def test_find_matches_none():
    assert find_matches(_receipt(1, "2024-01-01", "A"), []) == []
    assert find_matches(_receipt(1, "2024-01-01", "Aldi"), [_receipt(2, "2024-01-01", "Aldi")]) == []
