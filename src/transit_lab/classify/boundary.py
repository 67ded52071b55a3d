"""Boundary to the external classification service.

The classifier itself is external; this module only defines what crosses the
boundary:
- ClassificationRequest: record, analysis curve samples and instructions
- ClassificationResponse: the label plus free-text explanations
- Classifier / FactProvider: protocols implemented by clients and test fakes
- parse_classification_label: strict label decoding
- fascinating_fact: fact text with a fixed fallback
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from transit_lab.domain.curve import SyntheticCurve
from transit_lab.domain.detection import ClassificationResult
from transit_lab.domain.records import ParameterRecord
from transit_lab.errors import ClassificationFailure

logger = logging.getLogger(__name__)

FALLBACK_FACT = (
    "Did you know... some exoplanets, known as 'hot Jupiters', orbit so close to their "
    "star that their year lasts only a few Earth days!"
)


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class ClassificationRequest(FrozenModel):
    """Everything sent to the classifier for one analysis."""

    record: ParameterRecord
    curve: list[dict[str, float]] = Field(description="Analysis curve samples (time, flux)")
    prompt: str
    model: str | None = None

    @classmethod
    def from_curve(
        cls,
        record: ParameterRecord,
        curve: SyntheticCurve,
        *,
        model: str | None = None,
    ) -> ClassificationRequest:
        return cls(
            record=record,
            curve=curve.to_payload(),
            prompt=build_classification_prompt(record),
            model=model,
        )

    def to_wire(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "record": self.record.to_canonical_dict(),
            "curve": self.curve,
            "prompt": self.prompt,
        }
        if self.model is not None:
            payload["model"] = self.model
        return payload


class ClassificationResponse(FrozenModel):
    result: ClassificationResult
    explanations: tuple[str, ...] = ()


@runtime_checkable
class Classifier(Protocol):
    """Anything that can classify a prepared request.

    Implementations raise ``ClassificationFailure`` on any error; they never
    retry.
    """

    def classify(self, request: ClassificationRequest) -> ClassificationResponse: ...


@runtime_checkable
class FactProvider(Protocol):
    def fact_for(self, record: ParameterRecord) -> str: ...


# =============================================================================
# Prompt and label handling
# =============================================================================


def build_classification_prompt(record: ParameterRecord) -> str:
    """Instructions sent alongside the analysis curve."""
    return (
        "You are analyzing a light curve: the relative brightness (flux) of a star "
        "over time in hours. A dip can indicate an exoplanet passing in front of its star.\n"
        "\n"
        "Based primarily on the shape of the curve, classify the signal as exactly one of:\n"
        "- CONFIRMED_EXOPLANET: a clear, distinct, relatively flat-bottomed U-shaped "
        "transit dip. The signal is strong and unambiguous.\n"
        "- PLANETARY_CANDIDATE: a potential dip that is shallow, noisy, V-shaped or "
        "otherwise ambiguous and needs further investigation.\n"
        "- FALSE_POSITIVE: no discernible transit dip, or a pattern attributable to "
        "stellar noise, variability or an instrumental artifact (for example a V shape "
        "suggesting an eclipsing binary).\n"
        "\n"
        "For context only, the parameters used to generate this curve were:\n"
        f"- Orbital Period: {record.orbital_period:g} days\n"
        f"- Transit Duration: {record.transit_duration:g} hours\n"
        f"- Planetary Radius: {record.planetary_radius:g} Earth radii\n"
        f"- Stellar Temperature: {record.stellar_temperature:g} K\n"
        "\n"
        "Return ONLY one of the three classification strings above."
    )


def build_fact_prompt(record: ParameterRecord) -> str:
    return (
        "Based on the following exoplanet characteristics:\n"
        f"- Orbital Period: {record.orbital_period:.2f} days\n"
        f"- Planetary Radius: {record.planetary_radius:.2f} Earth radii\n"
        f"- Stellar Temperature: {record.stellar_temperature:.0f} K\n"
        "\n"
        "Give one concise (1-3 sentences), little-known and easily understood fact "
        "about exoplanets that relates to one of these characteristics. Do not restate "
        'the data. Start with "Did you know..." and return only the fact text.'
    )


def parse_classification_label(text: str | None) -> ClassificationResult:
    """Decode a label returned by the classifier.

    Only the exact enum names are accepted, after trimming surrounding
    whitespace.

    Raises:
        ClassificationFailure: If ``text`` is empty or not a known label.
    """
    label = text.strip() if isinstance(text, str) else ""
    try:
        return ClassificationResult(label)
    except ValueError:
        raise ClassificationFailure(
            f"Unexpected classification from the service: {label!r}",
            raw_label=label,
        ) from None


def coerce_response(payload: Any) -> ClassificationResponse:
    """Build a response from a decoded JSON payload.

    Accepts either a bare label string or an object with ``label`` and an
    optional list of ``explanations``.

    Raises:
        ClassificationFailure: On any other payload shape or an unknown label.
    """
    if isinstance(payload, str):
        return ClassificationResponse(result=parse_classification_label(payload))
    if not isinstance(payload, Mapping):
        raise ClassificationFailure(
            f"Classifier response must be a JSON object, got {type(payload).__name__}"
        )

    result = parse_classification_label(payload.get("label"))
    raw_explanations = payload.get("explanations") or []
    if isinstance(raw_explanations, str):
        raw_explanations = [raw_explanations]
    if not isinstance(raw_explanations, list):
        raise ClassificationFailure("Classifier 'explanations' must be a list of strings")
    explanations = tuple(str(item) for item in raw_explanations if str(item).strip())
    return ClassificationResponse(result=result, explanations=explanations)


def fascinating_fact(provider: FactProvider | None, record: ParameterRecord) -> str:
    """Return the provider's fact for ``record``, or ``FALLBACK_FACT``.

    Any provider error or empty text falls back; this call never raises.
    """
    if provider is None:
        return FALLBACK_FACT
    try:
        text = provider.fact_for(record)
    except Exception as exc:
        logger.warning("Fact provider failed for %s: %s", record.name, exc)
        return FALLBACK_FACT
    text = (text or "").strip()
    return text or FALLBACK_FACT


__all__ = [
    "FALLBACK_FACT",
    "ClassificationRequest",
    "ClassificationResponse",
    "Classifier",
    "FactProvider",
    "build_classification_prompt",
    "build_fact_prompt",
    "coerce_response",
    "fascinating_fact",
    "parse_classification_label",
]
