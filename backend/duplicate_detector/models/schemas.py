"""Pydantic schemas for request and response models.

Pydantic models are used for validating and serialising data that
crosses the boundary of the API. ``Receipt`` is the single record
type the detection core works on; the remaining models describe the
request bodies and response envelopes of the duplicate endpoints.

Receipts are echoed back to callers, so ``Receipt`` keeps unknown
fields (``extra="allow"``) and only dumps the declared fields the
caller actually sent. A receipt therefore round-trips verbatim.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    model_serializer,
)

from .enums import ALL_CRITERIA, Confidence, GroupingMode, MatchCriterion


# ---------------------------------------------------------------------------
# Domain schemas


class Receipt(BaseModel):
    """One receipt's comparable fields plus arbitrary passthrough data.

    ``amount`` is either numeric or currency formatted text such as
    ``"$1,234.50"``; :func:`duplicate_detector.services.normalization.normalize_amount`
    converts both shapes to a comparable value.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    # Strict members keep the sent JSON type; a boolean is echoed as-is and
    # never matches.
    amount: Optional[Union[StrictInt, StrictFloat, StrictStr, StrictBool]] = None
    receipt_date: Optional[str] = Field(default=None, description="Receipt date in any parseable textual form")
    store_name: Optional[str] = Field(default=None, description="Store or provider name as printed")

    @model_serializer(mode="wrap")
    def _dump_as_received(self, handler) -> Dict[str, Any]:
        data = handler(self)
        declared = type(self).model_fields
        return {k: v for k, v in data.items() if k not in declared or k in self.model_fields_set}


class DuplicateGroup(BaseModel):
    """Receipts judged duplicates of the group's first (anchor) receipt."""

    group_id: int
    duplicate_count: int
    receipts: List[Receipt]
    criteria_matched: List[MatchCriterion] = Field(default_factory=lambda: list(ALL_CRITERIA))
    confidence: Confidence = Confidence.HIGH


class MatchResult(BaseModel):
    """An existing receipt that matched a single-lookup candidate."""

    existing_receipt: Receipt
    criteria_matched: List[MatchCriterion] = Field(default_factory=lambda: list(ALL_CRITERIA))
    confidence: Confidence = Confidence.HIGH


# ---------------------------------------------------------------------------
# API request/response schemas


class DuplicateCheckRequest(BaseModel):
    receipts: List[Receipt]
    grouping_mode: Optional[GroupingMode] = Field(
        default=None,
        description="Override the configured grouping mode for this request",
    )


class DuplicateCheckResponse(BaseModel):
    success: bool = True
    message: str
    duplicate_groups: List[DuplicateGroup]
    total_duplicates: int
    total_receipts: int
    processing_time_ms: float = 0.0
    timestamp: str


class SingleCheckRequest(BaseModel):
    new_receipt: Receipt
    existing_receipts: List[Receipt]


class SingleCheckResponse(BaseModel):
    success: bool = True
    is_duplicate: bool
    message: str
    matches: List[MatchResult]
    new_receipt: Receipt
    processing_time_ms: float
    timestamp: str
