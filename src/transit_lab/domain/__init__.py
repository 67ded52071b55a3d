"""Domain models for transit-lab.

This package is domain-only. It intentionally excludes ingestion, synthesis
and the classification boundary.
"""

from transit_lab.domain.curve import CurvePoint, Scenario, SyntheticCurve
from transit_lab.domain.detection import (
    CLASSIFICATION_DETAILS,
    ClassificationResult,
    CrossReferenceResult,
    DetectionPoint,
    DetectionScore,
    DetectionZone,
    HistoryEntry,
    ThresholdPoint,
)
from transit_lab.domain.records import DEFAULT_RECORD, KnownBody, ParameterRecord

__all__ = [
    "CLASSIFICATION_DETAILS",
    "ClassificationResult",
    "CrossReferenceResult",
    "CurvePoint",
    "DEFAULT_RECORD",
    "DetectionPoint",
    "DetectionScore",
    "DetectionZone",
    "HistoryEntry",
    "KnownBody",
    "ParameterRecord",
    "Scenario",
    "SyntheticCurve",
    "ThresholdPoint",
]
