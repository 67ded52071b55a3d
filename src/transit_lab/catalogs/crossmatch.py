"""Cross-reference a candidate record against the known-body catalog.

Two matching modes are available:
- "per_field": period, radius and temperature must each fall inside a strict
  relative band around the known body's value; the first body in catalog
  order that passes all three wins.
- "averaged": the mean relative difference over the same three fields is
  scored for every body; the lowest score at or under the combined tolerance
  wins, ties going to the earlier body.

Transit duration is never compared. When nothing qualifies, the synthetic
"Potentially New Discovery!" result is returned instead of None so callers
always have something to show.

Usage:
    >>> from transit_lab.domain.records import DEFAULT_RECORD
    >>> cross_reference(DEFAULT_RECORD).name
    'Potentially New Discovery!'
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from transit_lab.catalogs.known_bodies import KNOWN_BODIES
from transit_lab.config import DEFAULT_MATCH_CONFIG, MatchConfig
from transit_lab.domain.detection import CrossReferenceResult
from transit_lab.domain.records import KnownBody, ParameterRecord
from transit_lab.utils.tolerances import check_record_tolerances, mean_relative_difference

logger = logging.getLogger(__name__)

NEW_DISCOVERY_NAME = "Potentially New Discovery!"
NEW_DISCOVERY_FACT = (
    "This candidate's parameters do not match any known exoplanets in our current "
    "database. This could be a novel finding."
)

NEW_DISCOVERY = CrossReferenceResult(
    name=NEW_DISCOVERY_NAME,
    fact=NEW_DISCOVERY_FACT,
    matched=False,
)


# =============================================================================
# Matching
# =============================================================================


def matches_body(
    record: ParameterRecord,
    body: KnownBody,
    *,
    config: MatchConfig = DEFAULT_MATCH_CONFIG,
) -> bool:
    """True when every per-field tolerance check passes against ``body``."""
    checks = check_record_tolerances(record, body.parameters, config=config)
    return all(result.within_tolerance for result in checks.values())


def find_first_match(
    record: ParameterRecord,
    catalog: Sequence[KnownBody] = KNOWN_BODIES,
    *,
    config: MatchConfig = DEFAULT_MATCH_CONFIG,
) -> KnownBody | None:
    for body in catalog:
        if matches_body(record, body, config=config):
            return body
    return None


def find_best_match(
    record: ParameterRecord,
    catalog: Sequence[KnownBody] = KNOWN_BODIES,
    *,
    config: MatchConfig = DEFAULT_MATCH_CONFIG,
) -> tuple[KnownBody, float] | None:
    """Lowest mean relative difference at or under ``combined_tolerance``.

    Returns:
        ``(body, score)`` for the winning body, or None when no body qualifies.
    """
    best: tuple[KnownBody, float] | None = None
    for body in catalog:
        score = mean_relative_difference(record, body.parameters)
        if score > config.combined_tolerance:
            continue
        if best is None or score < best[1]:
            best = (body, score)
    return best


def _result_for(body: KnownBody, score: float | None = None) -> CrossReferenceResult:
    return CrossReferenceResult(
        name=body.name,
        fact=body.fact,
        matched=True,
        discovery_year=body.discovery_year,
        score=score,
    )


def cross_reference(
    record: ParameterRecord,
    catalog: Sequence[KnownBody] = KNOWN_BODIES,
    *,
    config: MatchConfig = DEFAULT_MATCH_CONFIG,
) -> CrossReferenceResult:
    """Match ``record`` against ``catalog`` using ``config.mode``.

    Args:
        record: Candidate parameters.
        catalog: Ordered known bodies; defaults to the embedded catalog.
        config: Matching mode and tolerances.

    Returns:
        CrossReferenceResult for the matched body, or ``NEW_DISCOVERY``.
    """
    if config.mode == "averaged":
        best = find_best_match(record, catalog, config=config)
        if best is not None:
            body, score = best
            logger.debug("Cross-reference matched %s (mean difference %.4f)", body.name, score)
            return _result_for(body, score)
    else:
        body = find_first_match(record, catalog, config=config)
        if body is not None:
            logger.debug("Cross-reference matched %s", body.name)
            return _result_for(body, mean_relative_difference(record, body.parameters))

    logger.debug("Cross-reference found no match for %s", record.name)
    return NEW_DISCOVERY


__all__ = [
    "NEW_DISCOVERY",
    "NEW_DISCOVERY_FACT",
    "NEW_DISCOVERY_NAME",
    "cross_reference",
    "find_best_match",
    "find_first_match",
    "matches_body",
]
