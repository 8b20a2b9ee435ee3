"""
Text Normalizer
Flattens decoded receipt text into one whitespace-collapsed line.

Case and punctuation are left alone: labels are matched against the
exact receipt wording.
"""

import re

_WHITESPACE = re.compile(r'\s+')


def normalize_text(raw: str) -> str:
    """Collapse every whitespace run to a single space and trim both ends."""
    if not raw:
        return ""
    return _WHITESPACE.sub(' ', raw).strip()
