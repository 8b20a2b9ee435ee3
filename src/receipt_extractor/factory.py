"""
Ruleset Factory
===============
Looks up a provider's extraction ruleset by name.

Usage
-----
    ruleset = get_ruleset("dashen")
    engine  = ReceiptEngine(ruleset)
"""

from typing import Dict, List

from loguru import logger

from receipt_extractor.dashen_rules import DASHEN_RULESET
from receipt_extractor.field_rules import Ruleset


# ── Mapping: provider → ruleset ───────────────────────────────────────────────
_RULESETS: Dict[str, Ruleset] = {
    "dashen": DASHEN_RULESET,
}


def get_ruleset(provider: str) -> Ruleset:
    """
    Return the ruleset for a provider name (case-insensitive).

    Raises
    ------
    ValueError
        If no ruleset is registered under that name.  Unlike layout
        detection there is no safe generic fallback for verification.
    """
    key = (provider or "").strip().lower()
    if key not in _RULESETS:
        raise ValueError(
            f"Unknown receipt provider '{provider}'. Supported: {', '.join(supported_providers())}"
        )
    ruleset = _RULESETS[key]
    logger.debug(f"[RulesetFactory] {key}: {len(ruleset.rules)} rules, {len(ruleset.required)} required")
    return ruleset


def supported_providers() -> List[str]:
    return sorted(_RULESETS)
