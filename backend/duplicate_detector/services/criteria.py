"""Static description of the duplicate detection criteria.

Served as-is by ``GET /duplicates/criteria``; nothing here is computed.
"""

from __future__ import annotations

from typing import Any, Dict

from duplicate_detector.models.enums import Confidence

CRITERIA_DESCRIPTION: Dict[str, Any] = {
    "criteria": [
        {
            "name": "store_name",
            "description": "Store/provider name comparison (exact match or substring)",
            "examples": ["CVS matches CVS Pharmacy", "Walgreens matches WALGREENS STORE"],
        },
        {
            "name": "amount",
            "description": "Exact amount match (ignoring currency symbols)",
            "examples": ["$25.99 matches 25.99", "$100.00 matches 100"],
        },
        {
            "name": "receipt_date",
            "description": "Exact date match (same calendar day)",
            "examples": ["2024-03-15 matches 2024-03-15", "Different formats normalized"],
        },
    ],
    "rules": [
        "All three criteria must match for a duplicate detection",
        "Store names are normalized (case-insensitive, punctuation removed)",
        "One store name can be a substring of another",
        "Amounts are compared as numbers (currency symbols ignored)",
        "Missing or zero amounts never match",
        "Dates are normalized to YYYY-MM-DD format for comparison",
    ],
    "confidence_levels": {
        Confidence.HIGH.value: "All criteria match exactly",
    },
}
