"""Field normalizers for receipt comparison.

Each function turns one raw receipt field into a canonical value that
can be compared with ``==``:

* :func:`normalize_store_name` - lowercase, punctuation free, single
  spaced text. Never fails; missing input yields ``""``.
* :func:`normalize_amount` - a :class:`~decimal.Decimal`, or ``None``
  when the amount is absent or unparseable.
* :func:`normalize_date` - an ISO ``YYYY-MM-DD`` string, or ``None``
  when the date is absent or unparseable.

``None`` means "unmatchable": comparisons involving it always fail.
Amounts are falsy-checked on the raw value, so a numeric ``0`` counts
as absent and two zero-amount receipts never match.
"""

from __future__ import annotations

import datetime as dt
import math
import re
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from duplicate_detector.utils.helpers import parse_iso_datetime

RawAmount = Union[int, float, str, Decimal, None]

_NON_WORD = re.compile(r"[^\w\s]", re.ASCII)
_WHITESPACE = re.compile(r"\s+")
_CURRENCY_CHARS = re.compile(r"[$,]")
# Leading decimal number, the way a generic float parser reads "12.50 USD".
_LEADING_NUMBER = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

# Tried in order after ISO parsing fails. Slash dates are month-first.
_DATE_FORMATS = (
    "%m/%d/%Y",
    "%m/%d/%y",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y %H:%M:%S",
    "%m-%d-%Y",
    "%Y/%m/%d",
    "%Y.%m.%d",
    "%b %d, %Y",
    "%B %d, %Y",
    "%b %d %Y",
    "%B %d %Y",
    "%d %b %Y",
    "%d %B %Y",
    "%a, %d %b %Y %H:%M:%S",
    "%a %b %d %Y",
)


def normalize_store_name(name: Optional[str]) -> str:
    if not name:
        return ""
    cleaned = _NON_WORD.sub("", name.lower().strip())
    return _WHITESPACE.sub(" ", cleaned).strip()


def normalize_amount(amount: RawAmount) -> Optional[Decimal]:
    """Convert a numeric or currency formatted amount to a Decimal.

    Text has ``$`` and ``,`` removed and its leading number parsed, so
    ``"$1,234.50"`` and ``"1234.50"`` normalize identically. Floats go
    through their shortest repr, which keeps ``25.99`` exact. Booleans
    are not amounts. A Decimal is taken as already normalized.
    """
    if isinstance(amount, bool):
        return None
    if isinstance(amount, Decimal):
        return amount if amount.is_finite() else None
    if not amount:
        return None
    if isinstance(amount, float):
        if math.isnan(amount) or math.isinf(amount):
            return None
        return Decimal(repr(amount))
    if isinstance(amount, int):
        return Decimal(amount)
    match = _LEADING_NUMBER.match(_CURRENCY_CHARS.sub("", str(amount)).strip())
    if not match:
        return None
    try:
        return Decimal(match.group(0))
    except InvalidOperation:
        return None


def parse_receipt_date(value: str) -> Optional[dt.date]:
    """Parse a textual receipt date into a calendar date.

    ISO dates and datetimes are tried first; offset-aware timestamps are
    moved to UTC before the day is taken. Then a fixed list of common
    receipt formats is tried. Ambiguous slash dates (``03/04/2024``) read
    month-first. Returns ``None`` when nothing matches.
    """
    text = value.strip()
    if not text:
        return None
    parsed = parse_iso_datetime(text)
    if parsed is None:
        for fmt in _DATE_FORMATS:
            try:
                parsed = dt.datetime.strptime(text, fmt)
                break
            except ValueError:
                continue
    if parsed is None:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(dt.timezone.utc)
    return parsed.date()


def normalize_date(value: Union[str, dt.date, None]) -> Optional[str]:
    if not value:
        return None
    if isinstance(value, dt.datetime):
        if value.tzinfo is not None:
            value = value.astimezone(dt.timezone.utc)
        return value.date().isoformat()
    if isinstance(value, dt.date):
        return value.isoformat()
    parsed = parse_receipt_date(str(value))
    return parsed.isoformat() if parsed else None


__all__ = [
    "normalize_store_name",
    "normalize_amount",
    "normalize_date",
    "parse_receipt_date",
]
