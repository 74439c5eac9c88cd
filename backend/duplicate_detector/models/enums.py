"""Enumeration types used throughout the duplicate detector.

Enumerations constrain the labels that are passed through the API
and keep the wire values in one place. Downstream consumers read
these strings, so changing a value is a breaking change.
"""

from enum import Enum


class MatchCriterion(str, Enum):
    """Criteria that must all hold for two receipts to be duplicates."""

    PRICE = "price"
    DATE = "date"
    STORE_NAME = "store_name"


class Confidence(str, Enum):
    """Qualitative confidence attached to a match.

    Only exact matches on every criterion are reported, so ``high`` is
    the only level produced today.
    """

    HIGH = "high"


class GroupingMode(str, Enum):
    """How a batch is partitioned into duplicate groups."""

    ANCHOR = "anchor"
    CONNECTED = "connected"


ALL_CRITERIA: tuple[MatchCriterion, ...] = (
    MatchCriterion.PRICE,
    MatchCriterion.DATE,
    MatchCriterion.STORE_NAME,
)
