"""
Receipt Engine
==============
Runs the extraction pipeline for one provider ruleset:

    raw text → NORMALIZED → EXTRACTED → COERCED → VALIDATED → DONE

Each stage is a pure function of the previous stage's output and the
ruleset.  The engine holds nothing but the (immutable) ruleset, so one
instance can serve concurrent calls.
"""

from typing import Any, Dict

from receipt_extractor import diagnostics
from receipt_extractor.assembler import assemble_result
from receipt_extractor.coercion import coerce_value
from receipt_extractor.field_extractor import extract_fields
from receipt_extractor.field_rules import Ruleset
from receipt_extractor.models import VerificationResult
from receipt_extractor.normalizer import normalize_text
from receipt_extractor.validator import validate_completeness


class ReceiptEngine:

    def __init__(self, ruleset: Ruleset):
        self.ruleset = ruleset
        self._component = f"ReceiptEngine:{ruleset.name}"

    def run(self, raw_text: str) -> VerificationResult:
        """
        Extract and validate every field of the ruleset from decoded text.

        Never raises for any string input; a receipt missing required
        fields comes back with success=False and a descriptive error.
        """
        text = normalize_text(raw_text or "")
        diagnostics.stage_event(
            self._component, "normalized",
            f"Normalized receipt text ({len(text)} chars)", text_length=len(text),
        )

        matches = extract_fields(text, self.ruleset)
        diagnostics.stage_event(
            self._component, "extracted",
            f"Applied {len(matches)} field rules, {sum(m.matched for m in matches)} labels matched",
        )

        rules = {r.name: r for r in self.ruleset.rules}
        values: Dict[str, Any] = {
            m.name: coerce_value(m.raw_value, rules[m.name], self.ruleset)
            for m in matches
        }
        diagnostics.field_events(self._component, matches, values)
        defined = [name for name, v in values.items() if v is not None]
        diagnostics.stage_event(
            self._component, "coerced",
            f"Coerced {len(defined)}/{len(values)} fields",
        )

        verdict = validate_completeness(values, self.ruleset)
        diagnostics.verdict_event(
            self._component, verdict, len(defined), len(values), provider=self.ruleset.name,
        )

        return assemble_result(
            values,
            verdict,
            diagnostics={
                "provider": self.ruleset.name,
                "text_length": len(text),
                "matched_fields": defined,
                "missing_fields": verdict.missing,
            },
        )
