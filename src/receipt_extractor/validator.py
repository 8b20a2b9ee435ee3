"""
Completeness Validator
A result counts as verified only when every required field has a value.
"""

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional

from receipt_extractor.field_rules import Ruleset


@dataclass(frozen=True)
class ValidationVerdict:
    success: bool
    missing: List[str] = field(default_factory=list)
    error: Optional[str] = None


def validate_completeness(values: Mapping[str, Any], ruleset: Ruleset) -> ValidationVerdict:
    """
    Check the required-field contract.

    Returns a failing verdict naming every missing required field by its
    title, e.g. "Missing required fields: Transaction Amount".  Receipt
    text never ends up in the message.
    """
    missing = [r.title for r in ruleset.required if values.get(r.name) is None]
    if not missing:
        return ValidationVerdict(success=True)
    return ValidationVerdict(
        success=False,
        missing=missing,
        error=f"Missing required fields: {', '.join(missing)}",
    )
