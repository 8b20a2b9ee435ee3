"""
Field Rules
===========
Declarative building blocks for receipt extraction.

A provider is described entirely by data:

  FieldRule   one named value on the receipt (label, value pattern, kind)
  Ruleset     ordered FieldRules + extra boundary tokens + date formats

The engine never branches on a field name; adding a field or a provider
means adding a FieldRule / Ruleset, not new control flow.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


class ValueKind(str, Enum):
    STRING = "string"
    AMOUNT = "amount"
    DATE = "date"


# Trailing tolerance appended to every label: "Label", "Label:", "Label :  "
_LABEL_TAIL = r'\s*:?\s*'


def label(*words: str) -> str:
    """
    Build a label regex fragment from plain words.

    label("Transaction", "Reference") → r'\\bTransaction\\s*Reference'
    Words are escaped; any amount of whitespace (including none) is
    accepted between them.  Only the start is anchored to a word
    boundary: extracted pdf text often runs the value straight into the
    label ("Transaction AmountETB500.00").
    """
    return r'\b' + r'\s*'.join(re.escape(w) for w in words)


@dataclass(frozen=True)
class FieldRule:
    name: str
    title: str
    label: str
    value: str
    kind: ValueKind = ValueKind.STRING
    required: bool = False
    title_case: bool = False

    @property
    def label_pattern(self) -> "re.Pattern":
        return re.compile(self.label + _LABEL_TAIL, re.IGNORECASE)

    @property
    def value_pattern(self) -> "re.Pattern":
        return re.compile(self.value, re.IGNORECASE)


@dataclass(frozen=True)
class Ruleset:
    """
    All rules for one provider's receipt layout.

    boundaries      regex fragments that end a value span without being a
                    field themselves (footer text, section headers)
    date_formats    strptime formats tried in order for DATE rules
    utc_offset_hours  provider local time; parsed dates are made aware
                    with this fixed offset
    """
    name: str
    rules: Tuple[FieldRule, ...]
    boundaries: Tuple[str, ...] = ()
    date_formats: Tuple[str, ...] = ()
    utc_offset_hours: float = 0.0
    _boundary: Optional["re.Pattern"] = field(default=None, repr=False, compare=False)

    def __post_init__(self):
        names = [r.name for r in self.rules]
        dupes = {n for n in names if names.count(n) > 1}
        if dupes:
            raise ValueError(f"Duplicate field rule names in '{self.name}': {sorted(dupes)}")
        tokens = [r.label for r in self.rules] + list(self.boundaries)
        if tokens:
            # frozen dataclass: compiled once here, then read-only
            object.__setattr__(
                self, "_boundary",
                re.compile('|'.join(f'(?:{t})' for t in tokens), re.IGNORECASE),
            )

    @property
    def required(self) -> List[FieldRule]:
        return [r for r in self.rules if r.required]

    @property
    def boundary_pattern(self) -> Optional["re.Pattern"]:
        return self._boundary

    def rule(self, name: str) -> FieldRule:
        for r in self.rules:
            if r.name == name:
                return r
        raise KeyError(name)
