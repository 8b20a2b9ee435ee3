"""
Structured diagnostic events for the extraction pipeline.

Kept apart from the pipeline stages so those stay pure functions.
Every event is bound with `stage`; field events also carry `field` and
`matched`, so a sink with `serialize=True` gets them as JSON keys.

  one INFO event per stage
  one DEBUG event per field extraction attempt
  one verdict event (INFO on success, WARNING on failure)
"""

from typing import Any, Iterable, Mapping, Optional

from loguru import logger

from receipt_extractor.field_extractor import FieldMatch
from receipt_extractor.validator import ValidationVerdict


def stage_event(component: str, stage: str, message: str, **context: Any) -> None:
    logger.bind(stage=stage, **context).info(f"[{component}] {message}")


def field_events(
    component: str,
    matches: Iterable[FieldMatch],
    values: Mapping[str, Any],
) -> None:
    for match in matches:
        typed = values.get(match.name)
        if not match.matched:
            outcome = "no match"
        elif typed is None:
            outcome = f"found {match.raw_value!r} → coercion failed"
        else:
            outcome = f"found {match.raw_value!r} → {typed!r}"
        logger.bind(
            stage="extracted", field=match.name, matched=typed is not None,
        ).debug(f"[{component}] {match.name}: {outcome}")


def verdict_event(
    component: str,
    verdict: ValidationVerdict,
    matched: int,
    total: int,
    provider: Optional[str] = None,
) -> None:
    bound = logger.bind(stage="validated", success=verdict.success, provider=provider)
    if verdict.success:
        bound.info(f"[{component}] ✅ Receipt verified ({matched}/{total} fields extracted)")
    else:
        bound.warning(
            f"[{component}] ⚠️ Verification failed ({matched}/{total} fields extracted): "
            f"missing {', '.join(verdict.missing)}"
        )
