"""Detection, classification and cross-reference domain models.

This module provides:
- DetectionPoint: estimated (depth, SNR) for a record
- DetectionZone: advisory detectability band
- DetectionScore: point plus its zone and threshold comparison
- ClassificationResult: labels returned by the external classifier
- CrossReferenceResult: outcome of matching a record against known bodies
- HistoryEntry: one completed classification
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from transit_lab.domain.records import ParameterRecord


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class DetectionZone(str, Enum):
    """Advisory detectability band; never gates classification."""

    LIKELY = "LIKELY"
    AMBIGUOUS = "AMBIGUOUS"
    UNDETECTED = "UNDETECTED"


class ClassificationResult(str, Enum):
    """Labels produced by the external classification service."""

    CONFIRMED_EXOPLANET = "CONFIRMED_EXOPLANET"
    PLANETARY_CANDIDATE = "PLANETARY_CANDIDATE"
    FALSE_POSITIVE = "FALSE_POSITIVE"

    @property
    def is_planetary(self) -> bool:
        """True for results that warrant a catalog cross-reference."""
        return self in (
            ClassificationResult.CONFIRMED_EXOPLANET,
            ClassificationResult.PLANETARY_CANDIDATE,
        )


CLASSIFICATION_DETAILS: dict[ClassificationResult, dict[str, str]] = {
    ClassificationResult.CONFIRMED_EXOPLANET: {
        "label": "Confirmed Exoplanet",
        "description": (
            "A strong, unambiguous transit signal consistent with an exoplanet "
            "orbiting its star."
        ),
    },
    ClassificationResult.PLANETARY_CANDIDATE: {
        "label": "Planetary Candidate",
        "description": (
            "A potential transit signal with some ambiguity or noise. "
            "Further observation is recommended."
        ),
    },
    ClassificationResult.FALSE_POSITIVE: {
        "label": "False Positive",
        "description": (
            "The pattern is likely due to stellar variability, instrumental noise, "
            "or an eclipsing binary star system, not an exoplanet."
        ),
    },
}


class DetectionPoint(FrozenModel):
    """Estimated transit depth and signal-to-noise ratio for one record."""

    depth: float = Field(gt=0, description="Transit depth in ppm")
    snr: float = Field(gt=0, description="Signal-to-noise ratio")


class ThresholdPoint(FrozenModel):
    """One sample of the reference detectability curve."""

    depth: float = Field(gt=0, description="Transit depth in ppm")
    snr: float = Field(description="SNR needed for a reliable detection at this depth")


class DetectionScore(FrozenModel):
    """A detection point placed against the reference curve.

    Attributes:
        point: Estimated (depth, SNR).
        zone: Band the point's SNR falls into.
        threshold_snr: Reference-curve SNR at the point's depth.
        above_threshold: Whether the point's SNR is at or above the curve.
    """

    point: DetectionPoint
    zone: DetectionZone
    threshold_snr: float
    above_threshold: bool

    @property
    def margin(self) -> float:
        """SNR distance above (positive) or below (negative) the curve."""
        return self.point.snr - self.threshold_snr


class CrossReferenceResult(FrozenModel):
    """Outcome of comparing a record to the known-body catalog.

    ``matched`` is False for the synthetic "new discovery" result.
    """

    name: str
    fact: str
    matched: bool
    discovery_year: int | None = None
    score: float | None = Field(
        default=None,
        ge=0,
        description="Mean relative difference against the matched body",
    )


class HistoryEntry(FrozenModel):
    """One completed classification."""

    id: str
    timestamp: datetime
    record: ParameterRecord
    result: ClassificationResult


__all__ = [
    "CLASSIFICATION_DETAILS",
    "ClassificationResult",
    "CrossReferenceResult",
    "DetectionPoint",
    "DetectionScore",
    "DetectionZone",
    "HistoryEntry",
    "ThresholdPoint",
]
