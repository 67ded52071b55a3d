"""transit-lab: synthetic transit light curves, detection scoring and classification plumbing."""

from __future__ import annotations

from transit_lab.catalogs import KNOWN_BODIES, cross_reference
from transit_lab.compute import (
    estimate_detection_point,
    scenario_for_result,
    score_record,
    synthesize_curve,
    threshold_curve,
)
from transit_lab.domain import (
    DEFAULT_RECORD,
    ClassificationResult,
    DetectionZone,
    ParameterRecord,
    Scenario,
    SyntheticCurve,
)
from transit_lab.errors import (
    ClassificationFailure,
    ClassificationInProgressError,
    EmptyInputError,
    NoValidRowsError,
    SchemaError,
    TransitLabError,
)
from transit_lab.ingest import parse_first_record, parse_records, preview_records
from transit_lab.pipeline import HistoryLog, PipelineFacade
from transit_lab.units import from_display, to_display

__version__ = "0.3.0"

__all__ = [
    "ClassificationFailure",
    "ClassificationInProgressError",
    "ClassificationResult",
    "DEFAULT_RECORD",
    "DetectionZone",
    "EmptyInputError",
    "HistoryLog",
    "KNOWN_BODIES",
    "NoValidRowsError",
    "ParameterRecord",
    "PipelineFacade",
    "Scenario",
    "SchemaError",
    "SyntheticCurve",
    "TransitLabError",
    "__version__",
    "cross_reference",
    "estimate_detection_point",
    "from_display",
    "parse_first_record",
    "parse_records",
    "preview_records",
    "scenario_for_result",
    "score_record",
    "synthesize_curve",
    "threshold_curve",
    "to_display",
]
