from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

import pytest

from transit_lab.classify.boundary import ClassificationRequest, ClassificationResponse
from transit_lab.domain.detection import ClassificationResult
from transit_lab.errors import ClassificationFailure


class FakeClassifier:
    """Returns queued results (or raises queued exceptions) in order."""

    def __init__(self, *outcomes: ClassificationResult | Exception, explanations: tuple[str, ...] = ()) -> None:
        self._outcomes = list(outcomes)
        self.explanations = explanations
        self.requests: list[ClassificationRequest] = []

    def classify(self, request: ClassificationRequest) -> ClassificationResponse:
        self.requests.append(request)
        if not self._outcomes:
            raise ClassificationFailure("no more fake outcomes")
        outcome = self._outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return ClassificationResponse(result=outcome, explanations=self.explanations)


@pytest.fixture
def fake_classifier_factory() -> Callable[..., FakeClassifier]:
    return FakeClassifier


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    return lambda: datetime(2025, 3, 14, 12, 0, tzinfo=UTC)
