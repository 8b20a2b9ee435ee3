"""
Value Coercion
Turns raw matched substrings into typed values.

Every function here returns a value or None and never raises: a bad
number or date is treated exactly like a missing field.
"""

import math
import re
from datetime import datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation
from typing import Optional, Sequence, Union

from receipt_extractor.field_rules import FieldRule, Ruleset, ValueKind

TypedValue = Union[Decimal, datetime, str]

_WORD_START = re.compile(r'\b\w')
_SPACES = re.compile(r'\s+')


def coerce_amount(raw: Optional[str]) -> Optional[Decimal]:
    """
    "1,234.50" → Decimal("1234.50"); "abc" → None; "-5" → None.

    Amounts on a receipt are never negative, so a negative parse is a
    coercion failure.
    """
    if raw is None:
        return None
    cleaned = raw.replace(',', '').strip()
    if not cleaned:
        return None
    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        return None
    if not amount.is_finite() or amount < 0:
        return None
    # results carry amounts as floats
    if math.isinf(float(amount)):
        return None
    return amount


def coerce_date(
    raw: Optional[str],
    formats: Sequence[str],
    utc_offset_hours: float = 0.0,
) -> Optional[datetime]:
    """Parse with the first matching format; no default, no fallback to now."""
    if raw is None:
        return None
    cleaned = _SPACES.sub(' ', raw.replace(',', ' ')).strip()
    if not cleaned:
        return None
    tz = timezone(timedelta(hours=utc_offset_hours))
    for fmt in formats:
        try:
            parsed = datetime.strptime(cleaned, fmt)
        except ValueError:
            continue
        return parsed.replace(tzinfo=tz)
    return None


def title_case(value: str) -> str:
    """'JOHN A DOE' → 'John A Doe'. Only letter case changes."""
    return _WORD_START.sub(lambda m: m.group(0).upper(), value.lower())


def coerce_string(raw: Optional[str], apply_title_case: bool = False) -> Optional[str]:
    if raw is None:
        return None
    value = raw.strip()
    return title_case(value) if apply_title_case else value


def coerce_value(raw: Optional[str], rule: FieldRule, ruleset: Ruleset) -> Optional[TypedValue]:
    if rule.kind is ValueKind.AMOUNT:
        return coerce_amount(raw)
    if rule.kind is ValueKind.DATE:
        return coerce_date(raw, ruleset.date_formats, ruleset.utc_offset_hours)
    return coerce_string(raw, rule.title_case)
