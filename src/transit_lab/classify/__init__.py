"""External classification boundary and its HTTP client."""

from transit_lab.classify.boundary import (
    FALLBACK_FACT,
    ClassificationRequest,
    ClassificationResponse,
    Classifier,
    FactProvider,
    build_classification_prompt,
    build_fact_prompt,
    coerce_response,
    fascinating_fact,
    parse_classification_label,
)
from transit_lab.classify.http_client import HttpClassifier

__all__ = [
    "FALLBACK_FACT",
    "ClassificationRequest",
    "ClassificationResponse",
    "Classifier",
    "FactProvider",
    "HttpClassifier",
    "build_classification_prompt",
    "build_fact_prompt",
    "coerce_response",
    "fascinating_fact",
    "parse_classification_label",
]
