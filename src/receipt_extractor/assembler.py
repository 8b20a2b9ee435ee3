"""
Result Assembler
Merges typed field values with the validator's verdict.

Fields that were extracted are copied into the result whether or not
verification succeeded; a failed result keeps them for audit only and
its success flag stays False.
"""

from decimal import Decimal
from typing import Any, Dict, Mapping, Optional

from receipt_extractor.models import VerificationResult
from receipt_extractor.validator import ValidationVerdict


def _plain(value: Any) -> Any:
    # amounts leave the engine as plain numbers
    if isinstance(value, Decimal):
        return float(value)
    return value


def assemble_result(
    values: Mapping[str, Any],
    verdict: ValidationVerdict,
    diagnostics: Optional[Dict[str, Any]] = None,
) -> VerificationResult:
    fields = {name: _plain(v) for name, v in values.items() if v is not None}
    return VerificationResult(
        success=verdict.success,
        error=verdict.error,
        diagnostics=diagnostics,
        **fields,
    )
