"""
Field Extractor
===============
Applies a Ruleset to normalized receipt text.

For every rule, independently:

  1. find the first occurrence of the rule's label (case-insensitive,
     optional colon, any spacing)
  2. take the span from the end of that label up to the next boundary
     token (any rule label or extra ruleset boundary), or end of text
  3. match the rule's value pattern at the start of that span

Each rule searches the whole text, so label order on the receipt does
not matter.  A missing label and a malformed value both yield
raw_value=None.
"""

from dataclasses import dataclass
from typing import List, Optional

from receipt_extractor.field_rules import FieldRule, Ruleset


@dataclass(frozen=True)
class FieldMatch:
    name: str
    raw_value: Optional[str]

    @property
    def matched(self) -> bool:
        return self.raw_value is not None


def capture_span(text: str, rule: FieldRule, ruleset: Ruleset) -> Optional[str]:
    """Text between the rule's label and the next boundary, or None if no label."""
    m = rule.label_pattern.search(text)
    if not m:
        return None

    start = m.end()
    end = len(text)
    boundary = ruleset.boundary_pattern
    if boundary is not None:
        b = boundary.search(text, start)
        if b:
            end = b.start()

    return text[start:end].strip()


def match_value(span: str, rule: FieldRule) -> Optional[str]:
    m = rule.value_pattern.match(span)
    if not m:
        return None
    raw = m.group(1) if m.re.groups else m.group(0)
    if raw is None:
        return None
    return raw.strip()


def extract_field(text: str, rule: FieldRule, ruleset: Ruleset) -> FieldMatch:
    span = capture_span(text, rule, ruleset)
    if span is None:
        return FieldMatch(rule.name, None)
    return FieldMatch(rule.name, match_value(span, rule))


def extract_fields(text: str, ruleset: Ruleset) -> List[FieldMatch]:
    """One FieldMatch per rule, in rule order."""
    return [extract_field(text, rule, ruleset) for rule in ruleset.rules]
