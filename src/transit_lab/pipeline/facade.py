"""Orchestration of one classification action.

Order of operations for ``PipelineFacade.analyze``:
1. score the record against the detectability curve (advisory only)
2. synthesize the analysis curve (scenario NONE)
3. send record + curve to the external classifier and await the label
4. cross-reference CONFIRMED / CANDIDATE results against the catalog
5. synthesize the display curve for the returned label
6. prepend a history entry

A classifier failure stops after step 3: the current result is reset to None,
no history entry is written, and nothing is retried. Only one classification
may be in flight per facade; a second concurrent request is rejected.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from threading import Lock
from typing import Any

import numpy as np

from transit_lab.catalogs.crossmatch import cross_reference
from transit_lab.catalogs.known_bodies import KNOWN_BODIES
from transit_lab.classify.boundary import (
    ClassificationRequest,
    ClassificationResponse,
    Classifier,
    FactProvider,
    coerce_response,
    fascinating_fact,
)
from transit_lab.compute.scoring import score_record
from transit_lab.compute.synthesis import scenario_for_result, synthesize_curve
from transit_lab.config import (
    DEFAULT_MATCH_CONFIG,
    DEFAULT_PARSER_CONFIG,
    DEFAULT_SCORING_CONFIG,
    DEFAULT_SYNTHESIS_CONFIG,
    MatchConfig,
    ParserConfig,
    ScoringConfig,
    SynthesisConfig,
)
from transit_lab.domain.curve import Scenario, SyntheticCurve
from transit_lab.domain.detection import (
    CLASSIFICATION_DETAILS,
    ClassificationResult,
    CrossReferenceResult,
    DetectionScore,
    HistoryEntry,
)
from transit_lab.domain.records import KnownBody, ParameterRecord
from transit_lab.errors import (
    ClassificationFailure,
    ClassificationInProgressError,
    ErrorEnvelope,
)
from transit_lab.ingest.parsing import parse_first_record
from transit_lab.pipeline.history import HistoryLog

logger = logging.getLogger(__name__)

ANALYSIS_FAILED_MESSAGE = (
    "An error occurred during classification. The AI model could not analyze the data. "
    "Please try again later."
)


class AnalysisStatus(str, Enum):
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


@dataclass(frozen=True)
class AnalysisOutcome:
    """Result of one ``PipelineFacade.analyze`` call.

    Attributes:
        status: COMPLETED or FAILED.
        record: The analyzed record.
        detection: Advisory detection score for the record.
        analysis_curve: Curve sent to the classifier.
        result: Classifier label, None on failure.
        explanations: Free-text explanations from the classifier.
        cross_reference: Catalog outcome for planetary results, else None.
        display_curve: Curve re-rendered for the returned label, None on failure.
        history_entry: Entry appended to the history log, None on failure.
        error: Error envelope on failure.
    """

    status: AnalysisStatus
    record: ParameterRecord
    detection: DetectionScore
    analysis_curve: SyntheticCurve
    result: ClassificationResult | None = None
    explanations: tuple[str, ...] = ()
    cross_reference: CrossReferenceResult | None = None
    display_curve: SyntheticCurve | None = None
    history_entry: HistoryEntry | None = None
    error: ErrorEnvelope | None = None
    message: str = field(default="")

    @property
    def succeeded(self) -> bool:
        return self.status is AnalysisStatus.COMPLETED

    def to_dict(self, *, include_curves: bool = False) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "status": self.status.value,
            "record": self.record.model_dump(mode="json"),
            "detection": self.detection.model_dump(mode="json"),
            "result": self.result.value if self.result is not None else None,
            "result_details": (
                CLASSIFICATION_DETAILS[self.result] if self.result is not None else None
            ),
            "explanations": list(self.explanations),
            "cross_reference": (
                self.cross_reference.model_dump(mode="json")
                if self.cross_reference is not None
                else None
            ),
            "history_entry_id": self.history_entry.id if self.history_entry else None,
            "message": self.message,
            "error": self.error.model_dump(mode="json") if self.error is not None else None,
            "analysis_curve": self.analysis_curve.summary(),
            "display_curve": self.display_curve.summary() if self.display_curve else None,
        }
        if include_curves:
            payload["analysis_curve"]["points"] = self.analysis_curve.to_payload()
            if self.display_curve is not None:
                payload["display_curve"]["points"] = self.display_curve.to_payload()
        return payload


def _utc_now() -> datetime:
    return datetime.now(UTC)


def _new_entry_id() -> str:
    return uuid.uuid4().hex


class PipelineFacade:
    """Session-scoped orchestrator around an external classifier.

    Args:
        classifier: Classification boundary implementation.
        fact_provider: Optional source of fact-of-the-day text.
        catalog: Known bodies used for cross-referencing.
        history: History log; a fresh one is created when omitted.
        rng: Random source for every curve synthesized by this facade.
        clock: Timestamp source for history entries (UTC).
        id_factory: Identifier source for history entries.
        model: Model identifier forwarded with each request.
    """

    def __init__(
        self,
        classifier: Classifier,
        *,
        fact_provider: FactProvider | None = None,
        catalog: Sequence[KnownBody] = KNOWN_BODIES,
        history: HistoryLog | None = None,
        rng: np.random.Generator | None = None,
        clock: Callable[[], datetime] = _utc_now,
        id_factory: Callable[[], str] = _new_entry_id,
        model: str | None = None,
        parser_config: ParserConfig = DEFAULT_PARSER_CONFIG,
        synthesis_config: SynthesisConfig = DEFAULT_SYNTHESIS_CONFIG,
        scoring_config: ScoringConfig = DEFAULT_SCORING_CONFIG,
        match_config: MatchConfig = DEFAULT_MATCH_CONFIG,
    ) -> None:
        self.classifier = classifier
        self.fact_provider = fact_provider
        self.catalog = tuple(catalog)
        self.history = history if history is not None else HistoryLog()
        self._rng = rng if rng is not None else np.random.default_rng()
        self._clock = clock
        self._id_factory = id_factory
        self._model = model
        self.parser_config = parser_config
        self.synthesis_config = synthesis_config
        self.scoring_config = scoring_config
        self.match_config = match_config

        self._in_flight = Lock()
        self._current_result: ClassificationResult | None = None

    @property
    def current_result(self) -> ClassificationResult | None:
        """Label of the last completed analysis; reset to None by a failure."""
        return self._current_result

    @property
    def is_busy(self) -> bool:
        return self._in_flight.locked()

    # -----------------------------------------------------------------------------
    # Public API
    # -----------------------------------------------------------------------------

    def analyze(self, record: ParameterRecord) -> AnalysisOutcome:
        """Run one classification action for ``record``.

        Raises:
            ClassificationInProgressError: If another analysis is in flight.
        """
        if not self._in_flight.acquire(blocking=False):
            raise ClassificationInProgressError()
        try:
            return self._analyze(record)
        finally:
            self._in_flight.release()

    def analyze_text(self, text: str) -> AnalysisOutcome:
        """Parse the first data row of ``text`` and analyze it.

        Ingestion errors propagate unchanged; they happen before any request.
        """
        record = parse_first_record(text, config=self.parser_config)
        return self.analyze(record)

    def fascinating_fact(self, record: ParameterRecord) -> str:
        return fascinating_fact(self.fact_provider, record)

    # -----------------------------------------------------------------------------
    # Internals
    # -----------------------------------------------------------------------------

    def _analyze(self, record: ParameterRecord) -> AnalysisOutcome:
        detection = score_record(record, config=self.scoring_config)
        analysis_curve = synthesize_curve(
            record, Scenario.NONE, rng=self._rng, config=self.synthesis_config
        )
        request = ClassificationRequest.from_curve(record, analysis_curve, model=self._model)

        try:
            response = self.classifier.classify(request)
            if not isinstance(response, ClassificationResponse):
                response = coerce_response(response)
        except Exception as exc:
            failure = (
                exc
                if isinstance(exc, ClassificationFailure)
                else ClassificationFailure(f"Classifier raised {type(exc).__name__}: {exc}")
            )
            logger.warning("Classification failed for %s: %s", record.name, failure)
            self._current_result = None
            return AnalysisOutcome(
                status=AnalysisStatus.FAILED,
                record=record,
                detection=detection,
                analysis_curve=analysis_curve,
                error=failure.to_envelope(),
                message=ANALYSIS_FAILED_MESSAGE,
            )

        result = response.result
        crossref: CrossReferenceResult | None = None
        if result.is_planetary:
            crossref = cross_reference(record, self.catalog, config=self.match_config)

        display_scenario = scenario_for_result(result, rng=self._rng, config=self.synthesis_config)
        display_curve = synthesize_curve(
            record, display_scenario, rng=self._rng, config=self.synthesis_config
        )

        entry = HistoryEntry(
            id=self._id_factory(),
            timestamp=self._clock(),
            record=record,
            result=result,
        )
        self.history.append(entry)
        self._current_result = result
        logger.info("Classified %s as %s", record.name, result.value)

        return AnalysisOutcome(
            status=AnalysisStatus.COMPLETED,
            record=record,
            detection=detection,
            analysis_curve=analysis_curve,
            result=result,
            explanations=response.explanations,
            cross_reference=crossref,
            display_curve=display_curve,
            history_entry=entry,
            message=CLASSIFICATION_DETAILS[result]["description"],
        )


__all__ = [
    "ANALYSIS_FAILED_MESSAGE",
    "AnalysisOutcome",
    "AnalysisStatus",
    "PipelineFacade",
]
