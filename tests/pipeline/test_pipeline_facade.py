from __future__ import annotations

import threading

import numpy as np
import pytest

from transit_lab.catalogs.crossmatch import NEW_DISCOVERY_NAME
from transit_lab.catalogs.known_bodies import find_body
from transit_lab.classify.boundary import ClassificationRequest, ClassificationResponse
from transit_lab.domain.curve import Scenario
from transit_lab.domain.detection import ClassificationResult, DetectionZone
from transit_lab.domain.records import DEFAULT_RECORD
from transit_lab.errors import (
    ClassificationFailure,
    ClassificationInProgressError,
    ErrorType,
    NoValidRowsError,
)
from transit_lab.pipeline.facade import ANALYSIS_FAILED_MESSAGE, AnalysisStatus, PipelineFacade


def _facade(classifier, fixed_clock, **kwargs) -> PipelineFacade:
    ids = iter(f"entry-{i}" for i in range(100))
    return PipelineFacade(
        classifier,
        rng=np.random.default_rng(7),
        clock=fixed_clock,
        id_factory=lambda: next(ids),
        **kwargs,
    )


class TestSuccessfulAnalysis:
    def test_confirmed_result_cross_references_and_records_history(
        self, fake_classifier_factory, fixed_clock
    ) -> None:
        kepler = find_body("Kepler-186f")
        assert kepler is not None
        classifier = fake_classifier_factory(
            ClassificationResult.CONFIRMED_EXOPLANET, explanations=("flat-bottomed dip",)
        )
        facade = _facade(classifier, fixed_clock)

        outcome = facade.analyze(kepler.parameters)

        assert outcome.status is AnalysisStatus.COMPLETED
        assert outcome.succeeded
        assert outcome.result is ClassificationResult.CONFIRMED_EXOPLANET
        assert outcome.explanations == ("flat-bottomed dip",)
        assert outcome.cross_reference is not None
        assert outcome.cross_reference.name == "Kepler-186f"
        assert outcome.display_curve is not None
        assert outcome.display_curve.scenario is Scenario.CONFIRMED
        assert outcome.analysis_curve.scenario is Scenario.NONE
        assert facade.current_result is ClassificationResult.CONFIRMED_EXOPLANET

        entry = facade.history.latest()
        assert entry is not None
        assert entry.id == "entry-0"
        assert entry.timestamp == fixed_clock()
        assert entry.record == kepler.parameters
        assert outcome.history_entry == entry

    def test_classifier_receives_analysis_curve(self, fake_classifier_factory, fixed_clock) -> None:
        classifier = fake_classifier_factory(ClassificationResult.PLANETARY_CANDIDATE)
        facade = _facade(classifier, fixed_clock, model="m-2")
        facade.analyze(DEFAULT_RECORD)

        (request,) = classifier.requests
        assert request.record == DEFAULT_RECORD
        assert len(request.curve) == 201
        assert request.model == "m-2"
        assert "CONFIRMED_EXOPLANET" in request.prompt

    def test_candidate_without_match_is_new_discovery(self, fake_classifier_factory, fixed_clock) -> None:
        facade = _facade(fake_classifier_factory(ClassificationResult.PLANETARY_CANDIDATE), fixed_clock)
        outcome = facade.analyze(DEFAULT_RECORD)
        assert outcome.cross_reference is not None
        assert outcome.cross_reference.name == NEW_DISCOVERY_NAME
        assert outcome.display_curve is not None
        assert outcome.display_curve.scenario is Scenario.CANDIDATE

    def test_false_positive_skips_cross_reference(self, fake_classifier_factory, fixed_clock) -> None:
        facade = _facade(fake_classifier_factory(ClassificationResult.FALSE_POSITIVE), fixed_clock)
        outcome = facade.analyze(DEFAULT_RECORD)
        assert outcome.cross_reference is None
        assert outcome.display_curve is not None
        assert outcome.display_curve.scenario.is_false_positive
        assert len(facade.history) == 1

    def test_detection_score_is_advisory(self, fake_classifier_factory, fixed_clock) -> None:
        facade = _facade(fake_classifier_factory(ClassificationResult.CONFIRMED_EXOPLANET), fixed_clock)
        outcome = facade.analyze(DEFAULT_RECORD)
        assert outcome.detection.zone is DetectionZone.UNDETECTED
        assert outcome.result is ClassificationResult.CONFIRMED_EXOPLANET

    def test_history_is_newest_first(self, fake_classifier_factory, fixed_clock) -> None:
        classifier = fake_classifier_factory(
            ClassificationResult.FALSE_POSITIVE, ClassificationResult.CONFIRMED_EXOPLANET
        )
        facade = _facade(classifier, fixed_clock)
        facade.analyze(DEFAULT_RECORD)
        facade.analyze(DEFAULT_RECORD)
        assert [e.result for e in facade.history] == [
            ClassificationResult.CONFIRMED_EXOPLANET,
            ClassificationResult.FALSE_POSITIVE,
        ]

    def test_outcome_to_dict(self, fake_classifier_factory, fixed_clock) -> None:
        facade = _facade(fake_classifier_factory(ClassificationResult.CONFIRMED_EXOPLANET), fixed_clock)
        payload = facade.analyze(DEFAULT_RECORD).to_dict(include_curves=True)
        assert payload["status"] == "COMPLETED"
        assert payload["result_details"]["label"] == "Confirmed Exoplanet"
        assert len(payload["analysis_curve"]["points"]) == 201
        assert payload["error"] is None


class TestFailedAnalysis:
    @pytest.mark.parametrize(
        "error",
        [ClassificationFailure("bad label", raw_label="MAYBE"), RuntimeError("socket closed")],
    )
    def test_failure_writes_no_history_and_resets_result(
        self, fake_classifier_factory, fixed_clock, error: Exception
    ) -> None:
        classifier = fake_classifier_factory(ClassificationResult.CONFIRMED_EXOPLANET, error)
        facade = _facade(classifier, fixed_clock)
        facade.analyze(DEFAULT_RECORD)
        assert facade.current_result is ClassificationResult.CONFIRMED_EXOPLANET

        outcome = facade.analyze(DEFAULT_RECORD)

        assert outcome.status is AnalysisStatus.FAILED
        assert outcome.result is None
        assert outcome.cross_reference is None
        assert outcome.display_curve is None
        assert outcome.history_entry is None
        assert outcome.message == ANALYSIS_FAILED_MESSAGE
        assert outcome.error is not None
        assert outcome.error.type is ErrorType.CLASSIFICATION_FAILED
        assert facade.current_result is None
        assert len(facade.history) == 1

    def test_failure_is_not_retried(self, fake_classifier_factory, fixed_clock) -> None:
        classifier = fake_classifier_factory(ClassificationFailure("down"))
        _facade(classifier, fixed_clock).analyze(DEFAULT_RECORD)
        assert len(classifier.requests) == 1

    def test_facade_is_usable_after_failure(self, fake_classifier_factory, fixed_clock) -> None:
        classifier = fake_classifier_factory(
            ClassificationFailure("down"), ClassificationResult.FALSE_POSITIVE
        )
        facade = _facade(classifier, fixed_clock)
        assert not facade.analyze(DEFAULT_RECORD).succeeded
        assert facade.analyze(DEFAULT_RECORD).succeeded
        assert not facade.is_busy

    @pytest.mark.parametrize("returned", ["MAYBE_PLANET", None, {"label": "planet-ish"}, 42])
    def test_unrecognized_return_value_is_a_failure(self, fixed_clock, returned: object) -> None:
        facade = _facade(_ReturningClassifier(returned), fixed_clock)

        outcome = facade.analyze(DEFAULT_RECORD)

        assert outcome.status is AnalysisStatus.FAILED
        assert outcome.message == ANALYSIS_FAILED_MESSAGE
        assert outcome.error is not None
        assert outcome.error.type is ErrorType.CLASSIFICATION_FAILED
        assert facade.current_result is None
        assert len(facade.history) == 0

    def test_raw_label_return_value_is_accepted(self, fixed_clock) -> None:
        facade = _facade(_ReturningClassifier("  FALSE_POSITIVE "), fixed_clock)
        outcome = facade.analyze(DEFAULT_RECORD)
        assert outcome.succeeded
        assert outcome.result is ClassificationResult.FALSE_POSITIVE
        assert len(facade.history) == 1


class _ReturningClassifier:
    def __init__(self, value: object) -> None:
        self.value = value

    def classify(self, request: ClassificationRequest) -> object:
        return self.value


class _BlockingClassifier:
    def __init__(self) -> None:
        self.started = threading.Event()
        self.release = threading.Event()

    def classify(self, request: ClassificationRequest) -> ClassificationResponse:
        self.started.set()
        self.release.wait(timeout=5)
        return ClassificationResponse(result=ClassificationResult.FALSE_POSITIVE)


def test_second_request_while_in_flight_is_rejected(fixed_clock) -> None:
    classifier = _BlockingClassifier()
    facade = _facade(classifier, fixed_clock)
    outcomes = []

    worker = threading.Thread(target=lambda: outcomes.append(facade.analyze(DEFAULT_RECORD)))
    worker.start()
    try:
        assert classifier.started.wait(timeout=5)
        assert facade.is_busy
        with pytest.raises(ClassificationInProgressError):
            facade.analyze(DEFAULT_RECORD)
    finally:
        classifier.release.set()
        worker.join(timeout=5)

    assert len(outcomes) == 1
    assert outcomes[0].succeeded
    assert len(facade.history) == 1
    assert not facade.is_busy


class TestAnalyzeText:
    def test_uses_first_data_row(self, fake_classifier_factory, fixed_clock) -> None:
        classifier = fake_classifier_factory(ClassificationResult.FALSE_POSITIVE)
        facade = _facade(classifier, fixed_clock)
        outcome = facade.analyze_text("10,3,2,5000\n20,4,1,6000\n")
        assert outcome.record.name == "CSV Candidate #1"
        assert outcome.record.orbital_period == 10.0

    def test_ingest_errors_propagate_without_request(self, fake_classifier_factory, fixed_clock) -> None:
        classifier = fake_classifier_factory(ClassificationResult.FALSE_POSITIVE)
        facade = _facade(classifier, fixed_clock)
        with pytest.raises(NoValidRowsError):
            facade.analyze_text("name,orbitalPeriod,transitDuration,planetaryRadius,stellarTemperature\nA,x,1,1,1\n")
        assert classifier.requests == []
        assert len(facade.history) == 0


def test_fascinating_fact_falls_back_without_provider(fake_classifier_factory, fixed_clock) -> None:
    facade = _facade(fake_classifier_factory(), fixed_clock)
    assert facade.fascinating_fact(DEFAULT_RECORD).startswith("Did you know")
