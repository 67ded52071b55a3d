"""Parameter record domain models.

This module provides:
- ParameterRecord: canonical description of a candidate transit
- KnownBody: read-only reference catalog entry
- DEFAULT_RECORD: the Earth-analog record the dashboard opens with
"""

from __future__ import annotations

import math
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


DEFAULT_RECORD_NAME = "Unnamed Candidate"

# Type aliases with validation
PeriodDays = Annotated[float, Field(gt=0, description="Orbital period, in days")]
DurationHours = Annotated[float, Field(gt=0, description="Transit duration, in hours")]
RadiusEarth = Annotated[float, Field(gt=0, description="Planetary radius, in Earth radii")]
TemperatureK = Annotated[float, Field(gt=0, description="Host-star temperature, in Kelvin")]


class ParameterRecord(FrozenModel):
    """Canonical unit of input for synthesis and scoring.

    Records are immutable; an edit produces a new record via ``replace``.
    ``transit_duration < orbital_period * 24`` is expected but deliberately
    not enforced.
    """

    name: str = DEFAULT_RECORD_NAME
    orbital_period: PeriodDays
    transit_duration: DurationHours
    planetary_radius: RadiusEarth
    stellar_temperature: TemperatureK

    @field_validator(
        "orbital_period",
        "transit_duration",
        "planetary_radius",
        "stellar_temperature",
    )
    @classmethod
    def _finite(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("value must be finite")
        return value

    @property
    def duration_exceeds_period(self) -> bool:
        """True when the transit is longer than the orbit (tolerated input)."""
        return self.transit_duration >= self.orbital_period * 24.0

    def replace(self, **changes: object) -> ParameterRecord:
        """Return a new record with ``changes`` applied and re-validated."""
        data = self.model_dump()
        data.update(changes)
        return ParameterRecord.model_validate(data)

    def to_canonical_dict(self) -> dict[str, float | str]:
        """Field values keyed by the tabular column names."""
        return {
            "name": self.name,
            "orbitalPeriod": self.orbital_period,
            "transitDuration": self.transit_duration,
            "planetaryRadius": self.planetary_radius,
            "stellarTemperature": self.stellar_temperature,
        }


class KnownBody(FrozenModel):
    """A reference body used for read-only cross-referencing."""

    name: str
    parameters: ParameterRecord
    fact: str
    discovery_year: int | None = None


DEFAULT_RECORD = ParameterRecord(
    name="Kepler-186 f (Default)",
    orbital_period=365.25,
    transit_duration=4.0,
    planetary_radius=1.0,
    stellar_temperature=5778.0,
)


__all__ = [
    "DEFAULT_RECORD",
    "DEFAULT_RECORD_NAME",
    "KnownBody",
    "ParameterRecord",
]
