"""
Receipt extractor package — declarative field extraction for provider receipts.

The engine is provider-agnostic; each provider contributes a Ruleset
(see dashen_rules.py) and the factory looks it up by name.

Usage
-----
from receipt_extractor import ReceiptEngine, get_ruleset
engine = ReceiptEngine(get_ruleset("dashen"))
result = engine.run(text)
"""

from receipt_extractor.engine import ReceiptEngine
from receipt_extractor.errors import (
    DocumentDecodeError,
    ReceiptFetchError,
    ReceiptVerificationError,
)
from receipt_extractor.factory import get_ruleset, supported_providers
from receipt_extractor.field_rules import FieldRule, Ruleset, ValueKind
from receipt_extractor.models import VerificationResult

__all__ = [
    "ReceiptEngine",
    "get_ruleset",
    "supported_providers",
    "FieldRule",
    "Ruleset",
    "ValueKind",
    "VerificationResult",
    "ReceiptVerificationError",
    "ReceiptFetchError",
    "DocumentDecodeError",
]
