from __future__ import annotations

import json
import logging
from typing import Any

import requests

from transit_lab.classify.boundary import (
    ClassificationRequest,
    ClassificationResponse,
    build_fact_prompt,
    coerce_response,
)
from transit_lab.config import ClassifierSettings
from transit_lab.domain.records import ParameterRecord
from transit_lab.errors import ClassificationFailure

logger = logging.getLogger(__name__)


class HttpClassifier:
    """Classifier and fact provider backed by a JSON-over-HTTP service.

    Requests are POSTed once; failures are never retried here. The service is
    expected to answer ``{"label": ..., "explanations": [...]}`` for
    classification and ``{"fact": ...}`` for facts.
    """

    def __init__(
        self,
        settings: ClassifierSettings,
        *,
        session: requests.Session | None = None,
        user_agent: str = "transit-lab classifier-client",
    ) -> None:
        self.settings = settings
        self.session = session if session is not None else requests.Session()
        self.session.headers.update(
            {"User-Agent": user_agent, "Content-Type": "application/json"}
        )
        if settings.api_key:
            self.session.headers["Authorization"] = f"Bearer {settings.api_key}"

    @classmethod
    def from_env(cls) -> HttpClassifier:
        return cls(ClassifierSettings.from_env())

    # -----------------------------------------------------------------------------
    # Public API
    # -----------------------------------------------------------------------------

    def classify(self, request: ClassificationRequest) -> ClassificationResponse:
        if not self.settings.url:
            raise ClassificationFailure("No classifier endpoint configured")
        payload = request.to_wire()
        payload.setdefault("model", self.settings.model)
        try:
            body = self._post_json(self.settings.url, payload)
        except (requests.RequestException, ValueError) as exc:
            raise ClassificationFailure(f"Classification request failed: {exc}") from exc
        response = coerce_response(body)
        logger.info("Classifier returned %s for %s", response.result.value, request.record.name)
        return response

    def fact_for(self, record: ParameterRecord) -> str:
        if not self.settings.fact_url:
            raise ClassificationFailure("No fact endpoint configured")
        payload = {"prompt": build_fact_prompt(record), "model": self.settings.model}
        try:
            body = self._post_json(self.settings.fact_url, payload)
        except (requests.RequestException, ValueError) as exc:
            raise ClassificationFailure(f"Fact request failed: {exc}") from exc
        if isinstance(body, dict):
            return str(body.get("fact") or "").strip()
        return str(body or "").strip()

    # -----------------------------------------------------------------------------
    # HTTP helpers
    # -----------------------------------------------------------------------------

    def _post_json(self, url: str, payload: dict[str, Any]) -> Any:
        resp = self.session.post(
            url,
            data=json.dumps(payload),
            timeout=self.settings.timeout_seconds,
        )
        resp.raise_for_status()
        resp.encoding = resp.encoding or "utf-8"
        return json.loads(resp.text)


__all__ = ["HttpClassifier"]
