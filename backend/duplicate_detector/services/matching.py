"""Pairwise duplicate predicate.

Two receipts are duplicates only when all three criteria hold:

* price - normalized amounts are exactly equal,
* date - normalized calendar days are equal,
* store_name - normalized names are equal, or one contains the other
  (``"cvs"`` matches ``"cvs pharmacy"``).

There is no partial credit: a pair either matches on everything and is
reported with ``high`` confidence, or it is not reported at all.
"""

from __future__ import annotations

from typing import Dict, Optional

from duplicate_detector.models.enums import MatchCriterion
from duplicate_detector.models.schemas import Receipt
from duplicate_detector.services.normalization import (
    RawAmount,
    normalize_amount,
    normalize_date,
    normalize_store_name,
)


def is_store_name_match(name1: Optional[str], name2: Optional[str]) -> bool:
    normalized1 = normalize_store_name(name1)
    normalized2 = normalize_store_name(name2)
    # An empty name is a substring of everything; treat it as missing.
    if not normalized1 or not normalized2:
        return False
    if normalized1 == normalized2:
        return True
    return normalized1 in normalized2 or normalized2 in normalized1


def is_same_date(date1: Optional[str], date2: Optional[str]) -> bool:
    normalized1 = normalize_date(date1)
    normalized2 = normalize_date(date2)
    if normalized1 is None or normalized2 is None:
        return False
    return normalized1 == normalized2


def is_same_amount(amount1: RawAmount, amount2: RawAmount) -> bool:
    normalized1 = normalize_amount(amount1)
    normalized2 = normalize_amount(amount2)
    if normalized1 is None or normalized2 is None:
        return False
    return normalized1 == normalized2


def matched_criteria(a: Receipt, b: Receipt) -> Dict[MatchCriterion, bool]:
    """Evaluate each criterion independently for a pair of receipts."""
    return {
        MatchCriterion.PRICE: is_same_amount(a.amount, b.amount),
        MatchCriterion.DATE: is_same_date(a.receipt_date, b.receipt_date),
        MatchCriterion.STORE_NAME: is_store_name_match(a.store_name, b.store_name),
    }


def is_duplicate_pair(a: Receipt, b: Receipt) -> bool:
    return all(matched_criteria(a, b).values())
