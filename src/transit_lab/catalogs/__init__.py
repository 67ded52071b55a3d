"""Known-body reference catalog and cross-referencing."""

from transit_lab.catalogs.crossmatch import (
    NEW_DISCOVERY,
    NEW_DISCOVERY_FACT,
    NEW_DISCOVERY_NAME,
    cross_reference,
    find_best_match,
    find_first_match,
    matches_body,
)
from transit_lab.catalogs.known_bodies import KNOWN_BODIES, find_body

__all__ = [
    "KNOWN_BODIES",
    "NEW_DISCOVERY",
    "NEW_DISCOVERY_FACT",
    "NEW_DISCOVERY_NAME",
    "cross_reference",
    "find_best_match",
    "find_body",
    "find_first_match",
    "matches_body",
]
