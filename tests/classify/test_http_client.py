from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

import numpy as np
import pytest
import requests

from transit_lab.classify.boundary import ClassificationRequest
from transit_lab.classify.http_client import HttpClassifier
from transit_lab.compute.synthesis import synthesize_curve
from transit_lab.config import ClassifierSettings
from transit_lab.domain.detection import ClassificationResult
from transit_lab.domain.records import DEFAULT_RECORD
from transit_lab.errors import ClassificationFailure


@dataclass
class FakeResponse:
    text: str
    status_code: int = 200
    encoding: str | None = "utf-8"

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"HTTP {self.status_code}")


@dataclass
class FakeSession:
    responses: list[FakeResponse | Exception]
    headers: dict[str, str] = field(default_factory=dict)
    calls: list[dict[str, Any]] = field(default_factory=list)

    def post(self, url: str, *, data: str, timeout: float) -> FakeResponse:
        self.calls.append({"url": url, "body": json.loads(data), "timeout": timeout})
        outcome = self.responses.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _request() -> ClassificationRequest:
    curve = synthesize_curve(DEFAULT_RECORD, rng=np.random.default_rng(1))
    return ClassificationRequest.from_curve(DEFAULT_RECORD, curve)


def _settings(**overrides: Any) -> ClassifierSettings:
    values: dict[str, Any] = {
        "url": "https://classifier.example/classify",
        "fact_url": "https://classifier.example/fact",
        "api_key": "secret",
        "timeout_seconds": 7.5,
    }
    values.update(overrides)
    return ClassifierSettings(**values)


def test_classify_posts_request_once_with_auth_and_timeout() -> None:
    session = FakeSession([FakeResponse(json.dumps({"label": "CONFIRMED_EXOPLANET", "explanations": ["U dip"]}))])
    client = HttpClassifier(_settings(), session=session)  # type: ignore[arg-type]

    response = client.classify(_request())

    assert response.result is ClassificationResult.CONFIRMED_EXOPLANET
    assert response.explanations == ("U dip",)
    assert session.headers["Authorization"] == "Bearer secret"
    (call,) = session.calls
    assert call["url"] == "https://classifier.example/classify"
    assert call["timeout"] == 7.5
    assert call["body"]["model"] == "gemini-2.5-flash"
    assert len(call["body"]["curve"]) == 201


@pytest.mark.parametrize(
    "outcome",
    [
        FakeResponse("{}", status_code=503),
        FakeResponse("not json"),
        FakeResponse(json.dumps({"label": "UNKNOWN"})),
        requests.ConnectionError("refused"),
        requests.Timeout("slow"),
    ],
)
def test_classify_failures_are_not_retried(outcome: FakeResponse | Exception) -> None:
    session = FakeSession([outcome])
    client = HttpClassifier(_settings(), session=session)  # type: ignore[arg-type]

    with pytest.raises(ClassificationFailure):
        client.classify(_request())
    assert len(session.calls) == 1


def test_classify_without_endpoint_fails() -> None:
    client = HttpClassifier(_settings(url=None), session=FakeSession([]))  # type: ignore[arg-type]
    with pytest.raises(ClassificationFailure, match="endpoint"):
        client.classify(_request())


def test_fact_for_returns_trimmed_text() -> None:
    session = FakeSession([FakeResponse(json.dumps({"fact": " Did you know... \n"}))])
    client = HttpClassifier(_settings(), session=session)  # type: ignore[arg-type]
    assert client.fact_for(DEFAULT_RECORD) == "Did you know..."
    assert "Did you know" in session.calls[0]["body"]["prompt"]


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRANSIT_LAB_CLASSIFIER_URL", "https://x.example/c")
    monkeypatch.setenv("TRANSIT_LAB_API_KEY", "k")
    monkeypatch.setenv("TRANSIT_LAB_CLASSIFIER_TIMEOUT", "12")
    monkeypatch.delenv("TRANSIT_LAB_CLASSIFIER_MODEL", raising=False)
    monkeypatch.delenv("TRANSIT_LAB_FACT_URL", raising=False)

    settings = ClassifierSettings.from_env()
    assert settings.url == "https://x.example/c"
    assert settings.api_key == "k"
    assert settings.timeout_seconds == 12.0
    assert settings.model == "gemini-2.5-flash"
    assert settings.fact_url is None
