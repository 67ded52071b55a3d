"""Relative tolerance checks for comparing transit parameters.

Differences are always taken relative to the reference value (the catalog
body), never to the candidate. Bands are strict by default: a difference of
exactly the tolerance does not pass.

Example:
    >>> result = check_relative("orbital_period", 131.0, 129.9, 0.05)
    >>> result.within_tolerance
    True
    >>> result.tolerance_used
    'orbital_period relative (<5.0%)'
"""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict

from transit_lab.config import DEFAULT_MATCH_CONFIG, MatchConfig
from transit_lab.domain.records import ParameterRecord


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class ToleranceResult(FrozenModel):
    """Result of a tolerance check between a candidate and a reference value.

    Attributes:
        within_tolerance: Whether the candidate is inside the band.
        delta: Signed difference (candidate - reference).
        tolerance_used: Description of the band that was applied.
        relative_error: |delta| / |reference|, or None when the reference is zero.
    """

    within_tolerance: bool
    delta: float
    tolerance_used: str
    relative_error: float | None


def relative_difference(candidate: float, reference: float) -> float:
    """Return ``|candidate - reference| / |reference|`` (inf for a zero reference)."""
    if reference == 0:
        return math.inf
    return abs(candidate - reference) / abs(reference)


def check_relative(
    name: str,
    candidate: float,
    reference: float,
    tolerance: float,
    *,
    inclusive: bool = False,
) -> ToleranceResult:
    """Check whether ``candidate`` is within ``tolerance`` of ``reference``.

    Args:
        name: Parameter name, used in ``tolerance_used``.
        candidate: Value under test.
        reference: Reference value the band is centred on.
        tolerance: Relative band half-width (0.05 for 5%).
        inclusive: Accept a difference equal to the tolerance.

    Returns:
        ToleranceResult with check outcome.
    """
    delta = candidate - reference
    relative_error = relative_difference(candidate, reference)
    within = relative_error <= tolerance if inclusive else relative_error < tolerance

    comparator = "<=" if inclusive else "<"
    return ToleranceResult(
        within_tolerance=within,
        delta=delta,
        tolerance_used=f"{name} relative ({comparator}{tolerance * 100:.1f}%)",
        relative_error=None if math.isinf(relative_error) else relative_error,
    )


def check_record_tolerances(
    candidate: ParameterRecord,
    reference: ParameterRecord,
    *,
    config: MatchConfig = DEFAULT_MATCH_CONFIG,
) -> dict[str, ToleranceResult]:
    """Per-field strict checks of period, radius and temperature.

    Transit duration is not compared.
    """
    return {
        "orbital_period": check_relative(
            "orbital_period",
            candidate.orbital_period,
            reference.orbital_period,
            config.period_tolerance,
        ),
        "planetary_radius": check_relative(
            "planetary_radius",
            candidate.planetary_radius,
            reference.planetary_radius,
            config.radius_tolerance,
        ),
        "stellar_temperature": check_relative(
            "stellar_temperature",
            candidate.stellar_temperature,
            reference.stellar_temperature,
            config.temperature_tolerance,
        ),
    }


def mean_relative_difference(candidate: ParameterRecord, reference: ParameterRecord) -> float:
    """Average relative difference over period, radius and temperature."""
    return (
        relative_difference(candidate.orbital_period, reference.orbital_period)
        + relative_difference(candidate.planetary_radius, reference.planetary_radius)
        + relative_difference(candidate.stellar_temperature, reference.stellar_temperature)
    ) / 3.0


__all__ = [
    "ToleranceResult",
    "check_record_tolerances",
    "check_relative",
    "mean_relative_difference",
    "relative_difference",
]
